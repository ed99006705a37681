"""
Typer CLI for the cefr-quiz assessment engine.

Commands:
    cefr-quiz db init                      - Create question bank tables
    cefr-quiz bank counts                  - Questions per CEFR level
    cefr-quiz bank coverage --minimum 5    - Check every level has enough questions
    cefr-quiz quiz sample --level B1       - Sample a quiz from the bank
    cefr-quiz assess results.json --start B1
                                           - Recommend a level from scored answers

Usage:
    cefr-quiz --help
    cefr-quiz bank coverage --minimum 10
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from config import get_settings
from cefr_quiz.core.exceptions import QuizEngineError, QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import QuestionEvaluation, QuizAttemptResult
from cefr_quiz.db.store import IQuestionStore
from cefr_quiz.logging_setup import configure_logging
from cefr_quiz.quiz import LevelEstimator, QuestionBank

console = Console()

app = typer.Typer(
    help="cefr-quiz CLI: leveled question bank and adaptive CEFR assessment",
    no_args_is_help=True,
)
db_app = typer.Typer(help="Database management")
bank_app = typer.Typer(help="Question bank maintenance")
quiz_app = typer.Typer(help="Quiz sampling")

app.add_typer(db_app, name="db")
app.add_typer(bank_app, name="bank")
app.add_typer(quiz_app, name="quiz")


def _get_store() -> IQuestionStore:
    from cefr_quiz.db.database import SessionLocal
    from cefr_quiz.db.sql_store import SqlQuestionStore

    return SqlQuestionStore(SessionLocal)


def _fail(exc: QuizEngineError) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


@app.callback()
def main_callback() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)


# ========================================
# db
# ========================================


@db_app.command("init")
def db_init() -> None:
    """Create question bank tables."""
    from cefr_quiz.db.database import init_db

    init_db()
    console.print("[green]Database initialized[/green]")


# ========================================
# bank
# ========================================


def _counts_table(counts: dict[ProficiencyLevel, int], minimum: int | None = None) -> Table:
    table = Table(title="Questions by level")
    table.add_column("Level", style="cyan")
    table.add_column("Name")
    table.add_column("Questions", justify="right")
    for level, count in counts.items():
        style = "red" if minimum is not None and count < minimum else ""
        table.add_row(level.value, level.display_name, f"[{style}]{count}[/{style}]" if style else str(count))
    return table


@bank_app.command("counts")
def bank_counts() -> None:
    """Show the number of questions at each CEFR level."""
    bank = QuestionBank(_get_store())
    console.print(_counts_table(bank.counts_by_level()))


@bank_app.command("coverage")
def bank_coverage(
    minimum: int = typer.Option(1, "--minimum", "-m", help="Minimum questions per level"),
) -> None:
    """Exit non-zero unless every level has at least MINIMUM questions."""
    bank = QuestionBank(_get_store())
    try:
        covered = bank.coverage_check(minimum)
    except QuizEngineError as exc:
        _fail(exc)

    console.print(_counts_table(bank.counts_by_level(), minimum))
    if not covered:
        console.print(f"[red]Coverage not met:[/red] some levels have fewer than {minimum} questions")
        raise typer.Exit(code=1)
    console.print(f"[green]Coverage met[/green] ({minimum}+ questions per level)")


# ========================================
# quiz
# ========================================


@quiz_app.command("sample")
def quiz_sample(
    level: ProficiencyLevel = typer.Option(ProficiencyLevel.B1, "--level", "-l", help="CEFR level"),
    question_type: Optional[QuestionType] = typer.Option(None, "--type", "-t", help="Question type"),
    count: int = typer.Option(10, "--count", "-n", help="Number of questions"),
    exclude: List[int] = typer.Option([], "--exclude", "-x", help="Question ID to exclude"),
    seed: Optional[str] = typer.Option(None, "--seed", help="Seed for reproducible sampling"),
) -> None:
    """Sample a quiz and list its questions."""
    bank = QuestionBank(_get_store())
    try:
        questions = bank.sample(level, question_type, count=count, excluded_ids=exclude, seed=seed)
    except QuizEngineError as exc:
        _fail(exc)

    table = Table(title=f"{len(questions)} question(s) at {level.value}")
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Topic")
    table.add_column("Question")
    for question in questions:
        table.add_row(str(question.id), question.question_type.value, question.topic or "", question.text)
    console.print(table)


# ========================================
# assess
# ========================================


def _load_attempt(path: Path) -> QuizAttemptResult:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        evaluations = tuple(
            QuestionEvaluation(
                question_id=int(item["question_id"]),
                level=ProficiencyLevel(item["level"]),
                correct=bool(item["correct"]),
            )
            for item in raw
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        raise QuizValidationError(f"Malformed results file {path}: {exc}") from exc
    if not evaluations:
        raise QuizValidationError(f"No evaluations in {path}")
    correct = sum(1 for e in evaluations if e.correct)
    return QuizAttemptResult(
        evaluations=evaluations,
        correct_answers=correct,
        total_questions=len(evaluations),
        accuracy=correct / len(evaluations),
    )


@app.command("assess")
def assess(
    results_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of evaluations"),
    start: ProficiencyLevel = typer.Option(ProficiencyLevel.B1, "--start", "-s", help="Starting level"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Recommend a CEFR level from a file of scored answers."""
    try:
        attempt = _load_attempt(results_file)
    except QuizEngineError as exc:
        _fail(exc)
    logger.debug(f"Loaded {attempt.total_questions} evaluations from {results_file}")
    result = LevelEstimator().estimate(start, attempt)

    if as_json:
        console.print_json(data=result.to_dict())
        return

    table = Table(title="Adaptive assessment")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Starting level", result.starting_level.value)
    table.add_row("Baseline level", result.baseline_level.value)
    table.add_row(
        "Recommended level",
        f"[bold green]{result.recommended_level.value}[/bold green] ({result.recommended_level.display_name})",
    )
    table.add_row("Correct", f"{result.correct_answers}/{result.total_questions}")
    table.add_row("Accuracy", f"{result.accuracy:.0%}")
    console.print(table)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
