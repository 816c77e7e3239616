"""
Quiz Engine facade.

Wires the selection policy, session assembler, result recorder and history
reporter over a single question store, and runs the ownership checks before
any caller-supplied identifier is used.

Operations:
    generate(user_id, course_id, chapter_ids) -> GeneratedQuiz
    submit(user_id, answers, session_id=None) -> RecordedResult
    history(user_id, course_id)               -> list[QuizResult]
"""
from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from loguru import logger

from studyflow.db.models import QuizResult
from studyflow.quiz.assembler import SessionAssembler
from studyflow.quiz.exceptions import QuizValidationError
from studyflow.quiz.history import HistoryReporter
from studyflow.quiz.models import AnswerRecord, GeneratedQuiz, RecordedResult
from studyflow.quiz.ownership import OwnershipVerifier, StoreOwnershipVerifier
from studyflow.quiz.policy import QuizPolicy
from studyflow.quiz.recorder import ResultRecorder
from studyflow.quiz.selection import SelectionPolicy
from studyflow.quiz.store import QuestionStore


class QuizEngine:
    """Entry point for quiz generation, submission and history."""

    def __init__(
        self,
        store: QuestionStore,
        verifier: Optional[OwnershipVerifier] = None,
        policy: Optional[QuizPolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            store: Question store for all reads and writes
            verifier: Ownership checks (store-backed if None)
            policy: Caps and windows (defaults if None)
            rng: Randomness source shared by the assembler
        """
        self.store = store
        self.verifier = verifier or StoreOwnershipVerifier(store)
        self.policy = policy or QuizPolicy()

        self.selection = SelectionPolicy(store, self.policy)
        self.assembler = SessionAssembler(store, self.policy, rng=rng)
        self.recorder = ResultRecorder(store)
        self.reporter = HistoryReporter(store, self.policy)

    def generate(
        self,
        user_id: str,
        course_id: Optional[UUID],
        chapter_ids: Sequence[UUID],
    ) -> GeneratedQuiz:
        """
        Generate a mixed quiz of new and review questions.

        Raises:
            QuizValidationError: course_id or chapter_ids missing
            NotFoundError: course/chapters unknown, foreign course, or no chapters
            OwnershipError: a chapter belongs to another course
        """
        if not chapter_ids or course_id is None:
            raise QuizValidationError("chapter_ids and course_id are required")

        self.verifier.verify_course(user_id, course_id)
        self.verifier.verify_chapters(user_id, course_id, chapter_ids)

        pools = self.selection.select_questions(course_id, chapter_ids, user_id)
        return self.assembler.assemble_session(
            pools.new_pool,
            pools.review_pool,
            list(chapter_ids),
            user_id,
        )

    def submit(
        self,
        user_id: str,
        answers: Sequence[AnswerRecord],
        session_id: Optional[UUID] = None,
    ) -> RecordedResult:
        """
        Record self-assessed answers.

        Raises:
            QuizValidationError: answers is empty
            NotFoundError: session or answer chapters unknown
            OwnershipError: an answer's chapter belongs to another user
        """
        if not answers:
            raise QuizValidationError("answers are required")

        if session_id is not None:
            self.verifier.verify_session(user_id, session_id)

        answer_chapters = [answer.chapter_id for answer in answers if answer.chapter_id]
        if answer_chapters:
            self.verifier.verify_answer_chapters(user_id, answer_chapters)

        return self.recorder.record_result(user_id, session_id, answers)

    def history(self, user_id: str, course_id: UUID) -> list[QuizResult]:
        """Recent results for a course the user owns; empty for any other course."""
        if not self.verifier.owns_course(user_id, course_id):
            logger.debug(f"User {user_id} has no access to course {course_id}")
            return []
        return self.reporter.get_history(user_id, course_id)
