"""
Quiz module: generation and spaced-repetition review.

This module provides:
- SelectionPolicy: New and review candidate pools
- SessionAssembler: Capped, shuffled quiz assembly
- ResultRecorder: Self-assessed scoring
- HistoryReporter: Recent results
- QuizEngine: Facade over the four, with ownership checks

Mixing Policy:
- new: up to 6 exam questions from the requested chapters
- review: up to 4 exam questions from chapters answered in the last 5 results
"""

from .engine import QuizEngine
from .exceptions import NotFoundError, OwnershipError, QuizEngineError, QuizValidationError
from .models import AnswerRecord, GeneratedQuiz, QuestionPools, RecordedResult, SessionQuestion
from .ownership import OwnershipVerifier, StoreOwnershipVerifier, TrustingOwnershipVerifier
from .policy import QuizPolicy
from .store import QuestionStore

__all__ = [
    "QuizEngine",
    "QuizPolicy",
    "QuestionStore",
    # Ownership
    "OwnershipVerifier",
    "StoreOwnershipVerifier",
    "TrustingOwnershipVerifier",
    # Value objects
    "AnswerRecord",
    "GeneratedQuiz",
    "QuestionPools",
    "RecordedResult",
    "SessionQuestion",
    # Errors
    "QuizEngineError",
    "QuizValidationError",
    "NotFoundError",
    "OwnershipError",
]
