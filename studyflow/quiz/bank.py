"""
Question bank import.

Loads a course and its pre-generated questions from a JSON document:

    {
        "title": "Cell Biology",
        "chapters": [
            {
                "title": "Membranes",
                "questions": [
                    {"type": "exam", "question": "...", "suggested_answer": "..."},
                    {"type": "discussion", "question": "..."}
                ]
            }
        ]
    }
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field

from studyflow.db.models import Course
from studyflow.quiz.store import QuestionStore


class BankQuestion(BaseModel):
    type: Literal["exam", "discussion"] = "exam"
    question: str = Field(..., min_length=1)
    suggested_answer: Optional[str] = None


class BankChapter(BaseModel):
    title: str = Field(..., min_length=1)
    questions: List[BankQuestion] = Field(default_factory=list)


class QuestionBank(BaseModel):
    title: str = Field(..., min_length=1)
    original_filename: Optional[str] = None
    chapters: List[BankChapter] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path) -> "QuestionBank":
        """Parse and validate a bank file."""
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)


def import_bank(store: QuestionStore, user_id: str, bank: QuestionBank) -> Course:
    """
    Create the course, chapters and questions of a bank for user_id.

    Chapters keep the file order as sort_order.
    """
    course = store.create_course(user_id, bank.title, original_filename=bank.original_filename)

    question_count = 0
    for order, chapter_data in enumerate(bank.chapters):
        chapter = store.create_chapter(course, chapter_data.title, sort_order=order)
        for item in chapter_data.questions:
            store.create_question(
                chapter,
                item.question,
                question_type=item.type,
                suggested_answer=item.suggested_answer,
            )
            question_count += 1

    logger.info(
        f"Imported course {course.id} for user {user_id}: "
        f"{len(bank.chapters)} chapter(s), {question_count} question(s)"
    )
    return course
