"""
Quiz router for generation, submission and history.

Endpoints for:
- Generating a mixed quiz of new and review questions
- Submitting self-assessed answers
- Reading back recent results for a course

Every endpoint acts on behalf of the authenticated user from the request header.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studyflow.api.dependencies import get_current_user_id, get_quiz_engine
from studyflow.db.database import get_session
from studyflow.db.models import QuizResult
from studyflow.quiz import (
    AnswerRecord,
    NotFoundError,
    OwnershipError,
    QuizEngine,
    QuizEngineError,
    QuizValidationError,
)

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class GenerateRequest(BaseModel):
    """Request model for generating a quiz."""

    course_id: Optional[UUID] = Field(None, description="Course the chapters belong to")
    chapter_ids: List[UUID] = Field(
        default_factory=list,
        description="Chapters to draw new questions from",
    )


class QuizQuestionResponse(BaseModel):
    """A question placed in a generated quiz."""

    id: str
    chapter_id: str
    type: str
    question: str
    suggested_answer: Optional[str]
    is_review: bool


class GenerateResponse(BaseModel):
    """Response model for a generated quiz."""

    session_id: str
    questions: List[QuizQuestionResponse]
    includes_review: bool


class AnswerSubmission(BaseModel):
    """A single self-assessed answer."""

    question_id: UUID = Field(..., description="Question that was answered")
    chapter_id: Optional[UUID] = Field(None, description="Chapter the question came from")
    user_answer: str = Field("", description="Learner's free-text answer")
    self_correct: bool = Field(False, description="Learner's own judgement of correctness")
    is_review: bool = Field(False, description="Question came from the review pool")


class SubmitRequest(BaseModel):
    """Request model for submitting quiz answers."""

    session_id: Optional[UUID] = Field(None, description="Study session the quiz came from")
    answers: List[AnswerSubmission] = Field(default_factory=list)


class QuizResultResponse(BaseModel):
    """Response model for a stored quiz result."""

    id: str
    session_id: Optional[str]
    score: Optional[float]
    includes_review: bool
    created_at: datetime
    questions: List[Dict[str, Any]]


class SubmitResponse(BaseModel):
    """Response model for a submission."""

    result: QuizResultResponse
    score: float


class HistoryResponse(BaseModel):
    """Response model for quiz history."""

    history: List[QuizResultResponse]


def _result_to_response(result: QuizResult) -> QuizResultResponse:
    return QuizResultResponse(
        id=str(result.id),
        session_id=str(result.session_id) if result.session_id else None,
        score=float(result.score) if result.score is not None else None,
        includes_review=bool(result.includes_review),
        created_at=result.created_at,
        questions=list(result.questions or []),
    )


def _engine_error_to_http(exc: QuizEngineError) -> HTTPException:
    if isinstance(exc, QuizValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, OwnershipError):
        return HTTPException(status_code=403, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# ========================================
# Quiz Endpoints
# ========================================


@router.post("/generate", response_model=GenerateResponse, summary="Generate quiz")
def generate_quiz(
    request: GenerateRequest,
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
    db: Session = Depends(get_session),
) -> GenerateResponse:
    """
    Generate a quiz mixing new and review questions.

    - Up to 6 exam questions from the requested chapters
    - Up to 4 exam questions from other chapters of the course answered in
      the last 5 results
    - The combined list is shuffled; each question carries is_review
    """
    logger.info(
        f"Generating quiz for user {user_id} "
        f"(course={request.course_id}, chapters={len(request.chapter_ids)})"
    )

    try:
        quiz = engine.generate(user_id, request.course_id, request.chapter_ids)
        db.commit()
    except QuizEngineError as exc:
        raise _engine_error_to_http(exc)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to generate quiz")
        raise HTTPException(status_code=500, detail=str(exc))

    return GenerateResponse(
        session_id=str(quiz.session_id),
        questions=[
            QuizQuestionResponse(
                id=str(q.id),
                chapter_id=str(q.chapter_id),
                type=q.type,
                question=q.question,
                suggested_answer=q.suggested_answer,
                is_review=q.is_review,
            )
            for q in quiz.questions
        ],
        includes_review=quiz.includes_review,
    )


@router.post("/submit", response_model=SubmitResponse, summary="Submit quiz answers")
def submit_quiz(
    request: SubmitRequest,
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
    db: Session = Depends(get_session),
) -> SubmitResponse:
    """
    Store self-assessed answers and return the score.

    Score is the percentage of answers marked self_correct. session_id is
    optional; without it the result is stored unlinked.
    """
    answers = [
        AnswerRecord(
            question_id=answer.question_id,
            chapter_id=answer.chapter_id,
            user_answer=answer.user_answer,
            self_correct=answer.self_correct,
            is_review=answer.is_review,
        )
        for answer in request.answers
    ]

    try:
        recorded = engine.submit(user_id, answers, session_id=request.session_id)
        db.commit()
    except QuizEngineError as exc:
        raise _engine_error_to_http(exc)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to record quiz result")
        raise HTTPException(status_code=500, detail=str(exc))

    return SubmitResponse(result=_result_to_response(recorded.result), score=recorded.score)


@router.get("/history/{course_id}", response_model=HistoryResponse, summary="Get quiz history")
def get_quiz_history(
    course_id: UUID,
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
) -> HistoryResponse:
    """
    Recent quiz results (newest first, at most 20).

    Returns an empty history for a course without chapters. Results are the
    user's overall history, not only those touching this course.
    """
    try:
        results = engine.history(user_id, course_id)
    except SQLAlchemyError as exc:
        logger.exception(f"Failed to load history for course {course_id}")
        raise HTTPException(status_code=500, detail=str(exc))

    return HistoryResponse(history=[_result_to_response(result) for result in results])
