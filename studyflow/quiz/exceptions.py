"""Error taxonomy for the quiz engine.

Store failures are not wrapped: SQLAlchemy errors propagate to the caller as-is.
"""
from __future__ import annotations


class QuizEngineError(Exception):
    """Base class for conditions raised by the quiz engine."""


class QuizValidationError(QuizEngineError):
    """A required input is missing or empty."""


class NotFoundError(QuizEngineError):
    """A course, chapter or session lookup resolved to nothing."""


class OwnershipError(QuizEngineError):
    """A caller-supplied identifier exists but belongs to another course or user."""
