from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all StudyFlow tables."""


def utcnow() -> datetime:
    """Timezone-aware creation timestamp."""
    return datetime.now(timezone.utc)
