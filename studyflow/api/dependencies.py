"""FastAPI dependencies shared by the routers."""
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from studyflow.config import get_settings
from studyflow.db.database import get_session
from studyflow.quiz import QuestionStore, QuizEngine, QuizPolicy


def get_current_user_id(request: Request) -> str:
    """
    Opaque user id set by the authentication layer in front of this service.

    The header name is configurable (user_id_header); a missing or blank
    header is rejected with 401.
    """
    settings = get_settings()
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing authenticated user")
    return user_id


def get_quiz_engine(db: Session = Depends(get_session)) -> QuizEngine:
    """Quiz engine bound to the request's database session."""
    return QuizEngine(QuestionStore(db), policy=QuizPolicy.from_settings(get_settings()))
