"""
Question Store backed by SQLAlchemy.

Every read and write the quiz engine performs goes through this class, so the
engine components never build queries themselves. Writes are flushed, not
committed: the caller owns the transaction.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from studyflow.db.models import Chapter, Course, Question, QuizResult, StudySession


class QuestionStore:
    """Read/write access to courses, questions, sessions and results."""

    def __init__(self, session: Session):
        self.session = session

    # ========================================
    # Courses & Chapters
    # ========================================

    def get_course(self, course_id: UUID) -> Course | None:
        """Get a course by ID."""
        return self.session.get(Course, course_id)

    def get_course_chapter_ids(self, course_id: UUID) -> list[UUID]:
        """All chapter ids of a course, in chapter order."""
        result = self.session.execute(
            select(Chapter.id)
            .where(Chapter.course_id == course_id)
            .order_by(Chapter.sort_order, Chapter.created_at)
        )
        return list(result.scalars().all())

    def get_chapter_owners(self, chapter_ids: Iterable[UUID]) -> dict[UUID, tuple[UUID, str]]:
        """
        Map chapter ids to (course_id, course owner).

        Unknown chapter ids are simply absent from the result.
        """
        ids = list(dict.fromkeys(chapter_ids))
        if not ids:
            return {}

        result = self.session.execute(
            select(Chapter.id, Chapter.course_id, Course.user_id)
            .join(Course, Course.id == Chapter.course_id)
            .where(Chapter.id.in_(ids))
        )
        return {row.id: (row.course_id, row.user_id) for row in result}

    # ========================================
    # Questions
    # ========================================

    def get_questions_for_chapters(
        self,
        chapter_ids: Iterable[UUID],
        question_type: str,
    ) -> list[Question]:
        """All questions of one type belonging to the given chapters."""
        ids = list(dict.fromkeys(chapter_ids))
        if not ids:
            return []

        result = self.session.execute(
            select(Question)
            .where(Question.chapter_id.in_(ids), Question.type == question_type)
            .order_by(Question.created_at, Question.id)
        )
        return list(result.scalars().all())

    # ========================================
    # Sessions & Results
    # ========================================

    def get_recent_results(self, user_id: str, limit: int) -> list[QuizResult]:
        """A user's most recent quiz results, newest first."""
        if limit <= 0:
            return []

        result = self.session.execute(
            select(QuizResult)
            .where(QuizResult.user_id == user_id)
            .order_by(QuizResult.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    def get_study_session(self, session_id: UUID) -> StudySession | None:
        """Get a study session by ID."""
        return self.session.get(StudySession, session_id)

    def create_study_session(self, user_id: str, chapter_ids: Sequence[UUID]) -> StudySession:
        """Persist a new study session covering the given chapters."""
        study_session = StudySession(
            user_id=user_id,
            chapters_covered=[str(chapter_id) for chapter_id in chapter_ids],
        )
        self.session.add(study_session)
        self.session.flush()
        return study_session

    def create_quiz_result(
        self,
        user_id: str,
        session_id: UUID | None,
        records: list[dict[str, Any]],
        score: float,
        includes_review: bool,
    ) -> QuizResult:
        """Persist a new quiz result."""
        quiz_result = QuizResult(
            user_id=user_id,
            session_id=session_id,
            questions=records,
            score=score,
            includes_review=includes_review,
        )
        self.session.add(quiz_result)
        self.session.flush()
        return quiz_result

    # ========================================
    # Bank Loading
    # ========================================

    def create_course(self, user_id: str, title: str, original_filename: str | None = None) -> Course:
        """Create a course owned by user_id."""
        course = Course(user_id=user_id, title=title, original_filename=original_filename)
        self.session.add(course)
        self.session.flush()
        return course

    def create_chapter(self, course: Course, title: str, sort_order: int = 0) -> Chapter:
        """Create a chapter inside a course."""
        chapter = Chapter(course_id=course.id, title=title, sort_order=sort_order)
        self.session.add(chapter)
        self.session.flush()
        return chapter

    def create_question(
        self,
        chapter: Chapter,
        question: str,
        question_type: str = "exam",
        suggested_answer: str | None = None,
    ) -> Question:
        """Create a question inside a chapter."""
        row = Question(
            chapter_id=chapter.id,
            type=question_type,
            question=question,
            suggested_answer=suggested_answer,
        )
        self.session.add(row)
        self.session.flush()
        return row
