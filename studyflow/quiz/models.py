"""
Value objects passed between the quiz engine components.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID

from studyflow.db.models import Question, QuizResult


@dataclass
class AnswerRecord:
    """
    One self-assessed answer, embedded in a QuizResult.

    Attributes:
        question_id: Question that was answered
        chapter_id: Originating chapter (drives future review selection)
        user_answer: Learner's free-text answer
        self_correct: Learner's own judgement of correctness
        is_review: Whether the question came from the review pool
    """
    question_id: UUID
    chapter_id: Optional[UUID]
    user_answer: str = ""
    self_correct: bool = False
    is_review: bool = False

    def to_record(self) -> dict[str, Any]:
        """Convert to the JSON shape stored in quiz_results.questions."""
        return {
            "question_id": str(self.question_id),
            "from_chapter": str(self.chapter_id) if self.chapter_id else None,
            "user_answer": self.user_answer,
            "self_correct": self.self_correct,
            "is_review": self.is_review,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "AnswerRecord":
        """Create from a stored JSON record."""
        chapter = data.get("from_chapter")
        return cls(
            question_id=UUID(str(data["question_id"])),
            chapter_id=UUID(str(chapter)) if chapter else None,
            user_answer=data.get("user_answer") or "",
            self_correct=bool(data.get("self_correct")),
            is_review=bool(data.get("is_review")),
        )


@dataclass
class SessionQuestion:
    """A question placed into a quiz, tagged with its pool of origin."""
    id: UUID
    chapter_id: UUID
    type: str
    question: str
    suggested_answer: Optional[str]
    is_review: bool

    @classmethod
    def from_question(cls, question: Question, is_review: bool) -> "SessionQuestion":
        return cls(
            id=question.id,
            chapter_id=question.chapter_id,
            type=question.type,
            question=question.question,
            suggested_answer=question.suggested_answer,
            is_review=is_review,
        )


@dataclass
class QuestionPools:
    """Candidate questions computed by the selection policy."""
    new_pool: list[Question] = field(default_factory=list)
    review_pool: list[Question] = field(default_factory=list)
    review_chapter_ids: list[UUID] = field(default_factory=list)


@dataclass
class GeneratedQuiz:
    """An assembled quiz and the study session it was recorded under."""
    session_id: UUID
    questions: list[SessionQuestion]
    includes_review: bool

    @property
    def new_count(self) -> int:
        return sum(1 for q in self.questions if not q.is_review)

    @property
    def review_count(self) -> int:
        return sum(1 for q in self.questions if q.is_review)


@dataclass
class RecordedResult:
    """A persisted quiz result and its score."""
    result: QuizResult
    score: float
