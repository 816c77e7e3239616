"""API routers for the StudyFlow quiz service."""

from studyflow.api.routers import quiz_router

__all__ = [
    "quiz_router",
]
