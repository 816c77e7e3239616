"""StudyFlow: quiz generation and spaced-repetition review for uploaded courses."""

__version__ = "0.1.0"
