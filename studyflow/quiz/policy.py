"""Tunable constants of the selection and mixing policy."""
from __future__ import annotations

from dataclasses import dataclass

from studyflow.config import Settings

EXAM_QUESTION_TYPE = "exam"
NEW_QUESTION_CAP = 6
REVIEW_QUESTION_CAP = 4
REVIEW_HISTORY_WINDOW = 5
HISTORY_LIMIT = 20


@dataclass(frozen=True)
class QuizPolicy:
    """
    Fixed caps for quiz assembly and history lookups.

    The caps are absolute, not proportional: a pool smaller than its cap
    contributes everything it has and the other pool does not backfill.
    """
    question_type: str = EXAM_QUESTION_TYPE
    new_question_cap: int = NEW_QUESTION_CAP
    review_question_cap: int = REVIEW_QUESTION_CAP
    review_history_window: int = REVIEW_HISTORY_WINDOW
    history_limit: int = HISTORY_LIMIT

    @classmethod
    def from_settings(cls, settings: Settings) -> "QuizPolicy":
        return cls(
            question_type=settings.quiz_question_type,
            new_question_cap=settings.quiz_new_question_cap,
            review_question_cap=settings.quiz_review_question_cap,
            review_history_window=settings.quiz_review_history_window,
            history_limit=settings.quiz_history_limit,
        )
