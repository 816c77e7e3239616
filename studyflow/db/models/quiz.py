"""
Quiz history models: the feedback loop of the review engine.

Implements:
- StudySession: One quiz-generation event and the chapters it covered
- QuizResult: The learner's self-assessed answers for a quiz

QuizResult.questions holds the embedded answer records as JSON:

    [
        {
            "question_id": "uuid",
            "from_chapter": "uuid",
            "user_answer": "free text",
            "self_correct": true,
            "is_review": false
        }
    ]

The from_chapter values of a user's most recent results decide which
chapters resurface as review material in later quizzes.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow


class StudySession(Base):
    """A quiz-generation event. Created once per generate call, never mutated."""

    __tablename__ = "study_sessions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    # Ordered chapter ids (as strings) requested for this quiz
    chapters_covered: Mapped[List[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    results: Mapped[List["QuizResult"]] = relationship(back_populates="session")

    def __repr__(self) -> str:
        return f"<StudySession(user={self.user_id}, chapters={len(self.chapters_covered or [])})>"


class QuizResult(Base):
    """A scored, self-assessed quiz attempt. Created once per submit, never updated."""

    __tablename__ = "quiz_results"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    session_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("study_sessions.id", ondelete="SET NULL")
    )
    questions: Mapped[List[dict]] = mapped_column(JSON, nullable=False)
    score: Mapped[Optional[float]] = mapped_column(Numeric(5, 2, asdecimal=False))
    includes_review: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    session: Mapped[Optional[StudySession]] = relationship(back_populates="results")

    __table_args__ = (
        Index("idx_quiz_results_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<QuizResult(user={self.user_id}, score={self.score}, review={self.includes_review})>"

    @property
    def answered_chapter_ids(self) -> list[str]:
        """Originating chapter ids of the embedded answers, in answer order."""
        return [
            str(record["from_chapter"])
            for record in self.questions or []
            if record.get("from_chapter")
        ]
