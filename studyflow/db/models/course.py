"""
Course content models: the question bank the quiz engine reads from.

Implements:
- Course: An uploaded course owned by one user
- Chapter: A section of a course, ordered by sort_order
- Question: A stored question tagged by chapter and type

Question Types:
- exam: Short exam-style question with a suggested answer (used in quizzes)
- discussion: Open discussion prompt (never selected into quizzes)
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

QUESTION_TYPES = ("exam", "discussion")
COURSE_STATUSES = ("uploaded", "processing", "ready", "error")


class Course(Base):
    """A course owned by a single user."""

    __tablename__ = "courses"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    original_filename: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(Text, default="ready")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    chapters: Mapped[List["Chapter"]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Chapter.sort_order",
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('uploaded', 'processing', 'ready', 'error')",
            name="ck_courses_status",
        ),
    )

    def __repr__(self) -> str:
        return f"<Course(title={self.title!r}, user={self.user_id})>"


class Chapter(Base):
    """A chapter of a course."""

    __tablename__ = "chapters"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    course_id: Mapped[UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    course: Mapped[Course] = relationship(back_populates="chapters")
    questions: Mapped[List["Question"]] = relationship(
        back_populates="chapter",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Chapter(title={self.title!r}, order={self.sort_order})>"


class Question(Base):
    """
    A stored question. Immutable from the quiz engine's point of view.

    Only questions with type 'exam' are candidates for quiz selection;
    'discussion' prompts are kept for study material but never quizzed.
    """

    __tablename__ = "questions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    chapter_id: Mapped[UUID] = mapped_column(
        ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(Text, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    suggested_answer: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    chapter: Mapped[Chapter] = relationship(back_populates="questions")

    __table_args__ = (
        CheckConstraint("type IN ('exam', 'discussion')", name="ck_questions_type"),
        Index("idx_questions_chapter_type", "chapter_id", "type"),
    )

    def __repr__(self) -> str:
        return f"<Question(type={self.type}, chapter={self.chapter_id})>"
