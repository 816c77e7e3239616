"""
Session Assembler: mixes the candidate pools into one quiz.

Each pool is shuffled on its own and cut at a fixed cap (6 new, 4 review by
default). A short pool is not topped up from the other one. The two slices
are then shuffled together so review items are interleaved rather than
blocked at the end.
"""
from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from loguru import logger

from studyflow.db.models import Question
from studyflow.quiz.models import GeneratedQuiz, SessionQuestion
from studyflow.quiz.policy import QuizPolicy
from studyflow.quiz.store import QuestionStore


class SessionAssembler:
    """Builds the final question list and records the study session."""

    def __init__(
        self,
        store: QuestionStore,
        policy: Optional[QuizPolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            store: Question store used to persist the session
            policy: Caps for the new/review slices
            rng: Randomness source (unseeded random.Random if None)
        """
        self.store = store
        self.policy = policy or QuizPolicy()
        self.rng = rng or random.Random()

    def _take(self, pool: Sequence[Question], cap: int) -> list[Question]:
        shuffled = list(pool)
        self.rng.shuffle(shuffled)
        return shuffled[:cap]

    def assemble_session(
        self,
        new_pool: Sequence[Question],
        review_pool: Sequence[Question],
        requested_chapter_ids: Sequence[UUID],
        user_id: str,
    ) -> GeneratedQuiz:
        """
        Mix the pools and persist exactly one StudySession.

        Args:
            new_pool: Candidates from the requested chapters
            review_pool: Candidates from previously studied chapters
            requested_chapter_ids: Stored as the session's chapters_covered
            user_id: Session owner

        Returns:
            GeneratedQuiz with the session id and the interleaved questions
        """
        picked_new = self._take(new_pool, self.policy.new_question_cap)
        picked_review = self._take(review_pool, self.policy.review_question_cap)

        questions = [SessionQuestion.from_question(q, is_review=False) for q in picked_new]
        questions.extend(SessionQuestion.from_question(q, is_review=True) for q in picked_review)
        self.rng.shuffle(questions)

        study_session = self.store.create_study_session(user_id, requested_chapter_ids)

        logger.info(
            f"Assembled quiz {study_session.id} for user {user_id}: "
            f"{len(picked_new)} new, {len(picked_review)} review "
            f"(pools: {len(new_pool)} new, {len(review_pool)} review)"
        )

        return GeneratedQuiz(
            session_id=study_session.id,
            questions=questions,
            includes_review=len(picked_review) > 0,
        )
