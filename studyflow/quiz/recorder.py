"""
Result Recorder: scores self-assessed answers and stores the result.

Free-text answers are never graded here; the learner marks each answer as
correct or not, and the score is the share of self-marked correct answers.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from loguru import logger

from studyflow.quiz.exceptions import QuizValidationError
from studyflow.quiz.models import AnswerRecord, RecordedResult
from studyflow.quiz.store import QuestionStore


def compute_score(answers: Sequence[AnswerRecord]) -> float:
    """Percentage (0-100) of answers the learner marked correct."""
    if not answers:
        return 0.0
    correct = sum(1 for answer in answers if answer.self_correct)
    return correct / len(answers) * 100


class ResultRecorder:
    """Persists exactly one QuizResult per submission."""

    def __init__(self, store: QuestionStore):
        self.store = store

    def record_result(
        self,
        user_id: str,
        session_id: Optional[UUID],
        answers: Sequence[AnswerRecord],
    ) -> RecordedResult:
        """
        Score and store a quiz submission.

        Args:
            user_id: Learner submitting the answers
            session_id: Study session the quiz came from (None for unlinked results)
            answers: Self-assessed answers, in quiz order

        Returns:
            RecordedResult with the stored row and the computed score

        Raises:
            QuizValidationError: answers is empty
        """
        if not answers:
            raise QuizValidationError("answers are required")

        score = compute_score(answers)
        includes_review = any(answer.is_review for answer in answers)

        result = self.store.create_quiz_result(
            user_id=user_id,
            session_id=session_id,
            records=[answer.to_record() for answer in answers],
            score=score,
            includes_review=includes_review,
        )

        logger.info(
            f"Recorded result {result.id} for user {user_id}: score {score:.1f} "
            f"over {len(answers)} answer(s), review={includes_review}, "
            f"session={session_id or 'none'}"
        )

        return RecordedResult(result=result, score=score)
