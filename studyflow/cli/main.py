"""
Typer CLI for the StudyFlow quiz service.

Commands:
    studyflow db init          - Initialize database tables
    studyflow bank import      - Load a course question bank from JSON
    studyflow quiz generate    - Generate a quiz for a user
    studyflow quiz history     - Show a user's recent results
    studyflow serve            - Run the HTTP API

Usage:
    studyflow --help
    studyflow db init
    studyflow bank import biology.json --user alice
    studyflow quiz generate --user alice --course <uuid> --chapter <uuid>
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional
from uuid import UUID

import typer
from loguru import logger
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studyflow.config import get_settings
from studyflow.logging_config import configure_logging

app = typer.Typer(
    help="StudyFlow CLI: quiz generation and spaced-repetition review",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info-level logs"),
) -> None:
    """StudyFlow quiz engine."""
    configure_logging(get_settings(), level="INFO" if verbose else "WARNING")


def _parse_uuid(value: str, name: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise typer.BadParameter(f"{value!r} is not a valid UUID", param_hint=name) from None


# ========================================
# Database Commands
# ========================================

db_app = typer.Typer(help="Database management")
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """
    Initialize database tables from SQLAlchemy models.

    Safe to run multiple times (idempotent).
    """
    from studyflow.db.database import init_db

    logger.info("Initializing database tables...")
    init_db()
    rprint("[green]✓[/green] Database initialized!")


# ========================================
# Question Bank Commands
# ========================================

bank_app = typer.Typer(help="Question bank management")
app.add_typer(bank_app, name="bank")


@bank_app.command("import")
def bank_import(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Bank JSON file"),
    user: str = typer.Option(..., "--user", "-u", help="Owner of the imported course"),
) -> None:
    """Load a course with its chapters and questions."""
    from studyflow.db.database import session_scope
    from studyflow.quiz import QuestionStore
    from studyflow.quiz.bank import QuestionBank, import_bank

    try:
        bank = QuestionBank.from_file(path)
    except (ValueError, ValidationError) as exc:
        rprint(f"[red]✗[/red] Invalid bank file: {escape(str(exc))}")
        raise typer.Exit(code=1)

    with session_scope() as session:
        store = QuestionStore(session)
        course = import_bank(store, user, bank)
        course_id = course.id
        chapter_ids = store.get_course_chapter_ids(course_id)

    rprint(f"[green]✓[/green] Imported course [bold]{escape(bank.title)}[/bold] ({course_id})")

    table = Table(title="Chapters")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Questions", justify="right")
    table.add_column("Chapter ID", style="dim")
    for index, (chapter, chapter_id) in enumerate(zip(bank.chapters, chapter_ids)):
        table.add_row(str(index + 1), escape(chapter.title), str(len(chapter.questions)), str(chapter_id))
    console.print(table)


# ========================================
# Quiz Commands
# ========================================

quiz_app = typer.Typer(help="Quiz generation and history")
app.add_typer(quiz_app, name="quiz")


@quiz_app.command("generate")
def quiz_generate(
    user: str = typer.Option(..., "--user", "-u", help="Learner id"),
    course: str = typer.Option(..., "--course", help="Course UUID"),
    chapter: List[str] = typer.Option(..., "--chapter", "-c", help="Chapter UUID (repeatable)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible shuffle"),
) -> None:
    """Generate a quiz mixing new and review questions."""
    from studyflow.db.database import session_scope
    from studyflow.quiz import QuestionStore, QuizEngine, QuizEngineError, QuizPolicy

    course_id = _parse_uuid(course, "--course")
    chapter_ids = [_parse_uuid(value, "--chapter") for value in chapter]
    rng = random.Random(seed) if seed is not None else None

    try:
        with session_scope() as session:
            engine = QuizEngine(
                QuestionStore(session),
                policy=QuizPolicy.from_settings(get_settings()),
                rng=rng,
            )
            quiz = engine.generate(user, course_id, chapter_ids)
    except QuizEngineError as exc:
        rprint(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    table = Table(title=f"Quiz {quiz.session_id}")
    table.add_column("#", justify="right")
    table.add_column("Question")
    table.add_column("Source")
    for index, question in enumerate(quiz.questions, start=1):
        source = "[yellow]review[/yellow]" if question.is_review else "new"
        table.add_row(str(index), escape(question.question), source)
    console.print(table)

    rprint(f"{quiz.new_count} new, {quiz.review_count} review")


@quiz_app.command("history")
def quiz_history(
    user: str = typer.Option(..., "--user", "-u", help="Learner id"),
    course: str = typer.Option(..., "--course", help="Course UUID"),
) -> None:
    """Show recent quiz results."""
    from studyflow.db.database import session_scope
    from studyflow.quiz import QuestionStore, QuizEngine, QuizPolicy

    course_id = _parse_uuid(course, "--course")

    with session_scope() as session:
        engine = QuizEngine(QuestionStore(session), policy=QuizPolicy.from_settings(get_settings()))
        rows = [
            (result.created_at, result.score, len(result.questions or []), result.includes_review)
            for result in engine.history(user, course_id)
        ]

    if not rows:
        rprint("[dim]No quiz results yet.[/dim]")
        return

    table = Table(title="Quiz history")
    table.add_column("Taken")
    table.add_column("Score", justify="right")
    table.add_column("Answers", justify="right")
    table.add_column("Review")
    for created_at, score, answer_count, includes_review in rows:
        table.add_row(
            created_at.strftime("%Y-%m-%d %H:%M"),
            f"{score:.0f}%" if score is not None else "-",
            str(answer_count),
            "yes" if includes_review else "no",
        )
    console.print(table)


# ========================================
# Server
# ========================================


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind host (settings.api_host)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (settings.api_port)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "studyflow.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
