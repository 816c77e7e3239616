"""
Selection Policy for quiz generation.

Splits candidate questions into two pools:
- New pool: exam questions from the chapters the learner asked for
- Review pool: exam questions from chapters of the same course that appear in
  the learner's recent results but were not asked for this time

The review window is a plain recency heuristic: the chapters answered in the
last few results resurface, with no interval scheduling. An explicitly
requested chapter never counts as review material.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional
from uuid import UUID

from loguru import logger

from studyflow.db.models import QuizResult
from studyflow.quiz.exceptions import NotFoundError, QuizValidationError
from studyflow.quiz.models import QuestionPools
from studyflow.quiz.policy import QuizPolicy
from studyflow.quiz.store import QuestionStore


def collect_review_chapters(
    results: Iterable[QuizResult],
    course_chapter_ids: Iterable[UUID],
    requested_chapter_ids: Iterable[UUID],
) -> list[UUID]:
    """
    Chapters answered in past results that qualify as review material.

    A chapter qualifies when it belongs to the course and was not requested.
    Order follows first appearance (newest result first).

    Args:
        results: Past results, newest first
        course_chapter_ids: Every chapter of the course
        requested_chapter_ids: Chapters explicitly requested for this quiz

    Returns:
        Deduplicated list of review chapter ids
    """
    universe = {str(chapter_id): chapter_id for chapter_id in course_chapter_ids}
    requested = {str(chapter_id) for chapter_id in requested_chapter_ids}

    review: dict[str, UUID] = {}
    for result in results:
        for chapter in result.answered_chapter_ids:
            if chapter in universe and chapter not in requested:
                review.setdefault(chapter, universe[chapter])

    return list(review.values())


class SelectionPolicy:
    """
    Computes the new and review candidate pools for a quiz.

    Pure read: never writes to the store.
    """

    def __init__(self, store: QuestionStore, policy: Optional[QuizPolicy] = None):
        self.store = store
        self.policy = policy or QuizPolicy()

    def select_questions(
        self,
        course_id: UUID,
        requested_chapter_ids: Sequence[UUID],
        user_id: str,
    ) -> QuestionPools:
        """
        Build the candidate pools for a quiz.

        Args:
            course_id: Course the requested chapters belong to
            requested_chapter_ids: Chapters explicitly chosen by the learner
            user_id: Learner whose history drives the review pool

        Returns:
            QuestionPools with new_pool, review_pool and the review chapters

        Raises:
            QuizValidationError: requested_chapter_ids is empty
            NotFoundError: the course has no chapters
        """
        if not requested_chapter_ids:
            raise QuizValidationError("chapter_ids are required")

        course_chapter_ids = self.store.get_course_chapter_ids(course_id)
        if not course_chapter_ids:
            raise NotFoundError(f"Course {course_id} has no chapters")

        requested = list(dict.fromkeys(requested_chapter_ids))
        new_pool = self.store.get_questions_for_chapters(requested, self.policy.question_type)

        recent_results = self.store.get_recent_results(user_id, self.policy.review_history_window)
        review_chapter_ids = collect_review_chapters(recent_results, course_chapter_ids, requested)

        review_pool = []
        if review_chapter_ids:
            review_pool = self.store.get_questions_for_chapters(
                review_chapter_ids, self.policy.question_type
            )

        logger.debug(
            f"Selected pools for user {user_id}: {len(new_pool)} new from {len(requested)} chapter(s), "
            f"{len(review_pool)} review from {len(review_chapter_ids)} chapter(s) "
            f"(scanned {len(recent_results)} result(s))"
        )

        return QuestionPools(
            new_pool=new_pool,
            review_pool=review_pool,
            review_chapter_ids=review_chapter_ids,
        )
