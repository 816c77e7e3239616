"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
Every test runs against an in-memory SQLite question store.
"""
import os
from datetime import datetime, timedelta, timezone

# Must be set before studyflow.config settings are first loaded
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studyflow.db.models import Base, QuizResult
from studyflow.quiz import QuestionStore

USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (API over SQLite)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "smoke" in path:
            item.add_marker(pytest.mark.smoke)


@pytest.fixture
def db_engine():
    """Fresh in-memory database shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return QuestionStore(db_session)


@pytest.fixture
def make_course(store):
    """
    Build a course with chapters and questions.

    Usage:
        course, chapters = make_course({"C1": 3, "C2": 2}, discussion=1)

    Each chapter gets the given number of exam questions plus `discussion`
    discussion prompts. Returns the course and a dict of chapter title -> Chapter.
    """

    def _make(chapter_layout, user_id=USER_ID, discussion=0, title="Biology"):
        course = store.create_course(user_id, title)
        chapters = {}
        for order, (name, exam_count) in enumerate(chapter_layout.items()):
            chapter = store.create_chapter(course, name, sort_order=order)
            for i in range(exam_count):
                store.create_question(chapter, f"{name} exam question {i}", "exam", f"{name} answer {i}")
            for i in range(discussion):
                store.create_question(chapter, f"{name} discussion prompt {i}", "discussion")
            chapters[name] = chapter
        return course, chapters

    return _make


@pytest.fixture
def add_past_result(db_session):
    """
    Insert a past quiz result answering questions from the given chapters.

    `minutes_ago` controls recency ordering explicitly.
    """

    def _add(chapters, user_id=USER_ID, minutes_ago=0, self_correct=True):
        records = [
            {
                "question_id": f"00000000-0000-0000-0000-{index:012d}",
                "from_chapter": str(chapter.id),
                "user_answer": "answer",
                "self_correct": self_correct,
                "is_review": False,
            }
            for index, chapter in enumerate(chapters)
        ]
        result = QuizResult(
            user_id=user_id,
            questions=records,
            score=100.0 if self_correct else 0.0,
            includes_review=False,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )
        db_session.add(result)
        db_session.flush()
        return result

    return _add


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def other_user_id():
    return OTHER_USER_ID
