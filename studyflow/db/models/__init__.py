# SQLAlchemy models
from .base import Base
from .course import (
    Chapter,
    Course,
    Question,
)
from .quiz import (
    QuizResult,
    StudySession,
)

__all__ = [
    # Base
    "Base",
    # Course content
    "Course",
    "Chapter",
    "Question",
    # Quiz history
    "StudySession",
    "QuizResult",
]
