"""
Ownership checks for caller-supplied identifiers.

The engine never trusts a course, chapter or session id just because the
caller sent it. Before any selection or write, the engine asks an
OwnershipVerifier to confirm the ids belong to the calling user. Rows owned by
someone else are reported the same way as missing rows where existence itself
would leak (courses, sessions).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from loguru import logger

from studyflow.quiz.exceptions import NotFoundError, OwnershipError
from studyflow.quiz.store import QuestionStore


class OwnershipVerifier(ABC):
    """Capability the engine calls before trusting external identifiers."""

    @abstractmethod
    def owns_course(self, user_id: str, course_id: UUID) -> bool:
        """Return True if the course exists and belongs to user_id."""

    @abstractmethod
    def verify_chapters(self, user_id: str, course_id: UUID, chapter_ids: Iterable[UUID]) -> None:
        """Raise unless every chapter exists and belongs to course_id."""

    @abstractmethod
    def verify_answer_chapters(self, user_id: str, chapter_ids: Iterable[UUID]) -> None:
        """Raise unless every chapter belongs to a course owned by user_id."""

    @abstractmethod
    def verify_session(self, user_id: str, session_id: UUID) -> None:
        """Raise unless the study session exists and belongs to user_id."""

    def verify_course(self, user_id: str, course_id: UUID) -> None:
        """Raise NotFoundError unless the course belongs to user_id."""
        if not self.owns_course(user_id, course_id):
            raise NotFoundError(f"Course {course_id} not found")


class StoreOwnershipVerifier(OwnershipVerifier):
    """Verifies ownership against the rows in the question store."""

    def __init__(self, store: QuestionStore):
        self.store = store

    def owns_course(self, user_id: str, course_id: UUID) -> bool:
        course = self.store.get_course(course_id)
        return course is not None and course.user_id == user_id

    def verify_chapters(self, user_id: str, course_id: UUID, chapter_ids: Iterable[UUID]) -> None:
        ids = list(dict.fromkeys(chapter_ids))
        owners = self.store.get_chapter_owners(ids)

        missing = [chapter_id for chapter_id in ids if chapter_id not in owners]
        if missing:
            raise NotFoundError(f"Chapters not found: {', '.join(str(c) for c in missing)}")

        foreign = [
            chapter_id
            for chapter_id, (owner_course, owner_user) in owners.items()
            if owner_course != course_id or owner_user != user_id
        ]
        if foreign:
            logger.warning(
                f"User {user_id} requested {len(foreign)} chapter(s) outside course {course_id}"
            )
            raise OwnershipError(
                f"Chapters do not belong to course {course_id}: {', '.join(str(c) for c in foreign)}"
            )

    def verify_answer_chapters(self, user_id: str, chapter_ids: Iterable[UUID]) -> None:
        ids = list(dict.fromkeys(chapter_ids))
        owners = self.store.get_chapter_owners(ids)

        missing = [chapter_id for chapter_id in ids if chapter_id not in owners]
        if missing:
            raise NotFoundError(f"Chapters not found: {', '.join(str(c) for c in missing)}")

        foreign = [chapter_id for chapter_id, (_, owner_user) in owners.items() if owner_user != user_id]
        if foreign:
            logger.warning(f"User {user_id} submitted answers for {len(foreign)} foreign chapter(s)")
            raise OwnershipError(
                f"Chapters do not belong to the current user: {', '.join(str(c) for c in foreign)}"
            )

    def verify_session(self, user_id: str, session_id: UUID) -> None:
        study_session = self.store.get_study_session(session_id)
        if study_session is None or study_session.user_id != user_id:
            raise NotFoundError(f"Study session {session_id} not found")


class TrustingOwnershipVerifier(OwnershipVerifier):
    """
    Accepts every identifier.

    For callers that enforce ownership upstream (e.g. row-level security in
    the database) and only need the engine's selection behaviour.
    """

    def owns_course(self, user_id: str, course_id: UUID) -> bool:
        return True

    def verify_chapters(self, user_id: str, course_id: UUID, chapter_ids: Iterable[UUID]) -> None:
        return None

    def verify_answer_chapters(self, user_id: str, chapter_ids: Iterable[UUID]) -> None:
        return None

    def verify_session(self, user_id: str, session_id: UUID) -> None:
        return None
