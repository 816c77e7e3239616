"""History Reporter: read-only view of a learner's recent results."""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from loguru import logger

from studyflow.db.models import QuizResult
from studyflow.quiz.policy import QuizPolicy
from studyflow.quiz.store import QuestionStore


class HistoryReporter:
    def __init__(self, store: QuestionStore, policy: Optional[QuizPolicy] = None):
        self.store = store
        self.policy = policy or QuizPolicy()

    def get_history(self, user_id: str, course_id: UUID) -> list[QuizResult]:
        """
        Most recent results of a user, newest first.

        The course only gates the lookup: a course without chapters yields an
        empty list. The results themselves are not filtered by course.
        """
        if not self.store.get_course_chapter_ids(course_id):
            logger.debug(f"Course {course_id} has no chapters, returning empty history")
            return []

        return self.store.get_recent_results(user_id, self.policy.history_limit)
