"""YouTubeFit command line.

Runs the API server and exercises the same catalog, import and
recommendation code paths locally against the configured database.
"""

from __future__ import annotations

import random
from pathlib import Path

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from youtubefit.config.settings import settings
from youtubefit.core.logger import setup_logger_from_settings
from youtubefit.db.init_db import init_db
from youtubefit.db.models import Workout
from youtubefit.db.session import get_engine, get_session
from youtubefit.ingestion.csv_import import ImportResult, import_history_from_csv, import_workouts_from_csv
from youtubefit.recommendation.engine import RecommendationEngine
from youtubefit.recommendation.errors import CollaboratorUnavailableError, NoCandidatesError
from youtubefit.recommendation.filters import sanitize_filters

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="youtubefit",
    help="YouTubeFit CLI - serve the API, import CSV files and get a recommendation",
    add_completion=False,
)

MAX_ERRORS_SHOWN = 10


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger_from_settings(level="DEBUG" if debug else None)


@app.command()
def serve(
    host: str = typer.Option(settings.host, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("youtubefit.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db_command() -> None:
    """Create tables and reclassify yoga workouts."""
    init_db()
    console.print(Panel(Text("Database initialized", style="bold green"), subtitle=settings.database_url, border_style="green"))


@app.command("check-db")
def check_db() -> None:
    """Verify the database connection is working."""
    try:
        with get_session() as db:
            db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        console.print(Panel(Text("Database connection failed", style="bold red"), subtitle=str(e), border_style="red"))
        raise typer.Exit(1) from e
    console.print(Panel(Text("Database connection OK", style="bold green"), subtitle=settings.database_url, border_style="green"))


def _print_import_result(title: str, result: ImportResult) -> None:
    table = Table(title=title, show_header=False)
    table.add_row("Imported", str(result.imported))
    table.add_row("Skipped", str(result.skipped))
    table.add_row("Errors", str(len(result.errors)))
    console.print(table)
    for error in result.errors[:MAX_ERRORS_SHOWN]:
        console.print(f"  [red]✗[/red] {error}")
    if len(result.errors) > MAX_ERRORS_SHOWN:
        console.print(f"  [dim]... and {len(result.errors) - MAX_ERRORS_SHOWN} more[/dim]")


def _require_file(path: Path) -> None:
    if not path.is_file():
        console.print(f"[red]Error:[/red] file not found: {path}", style="bold red")
        raise typer.Exit(1)


@app.command("import-workouts")
def import_workouts(path: Path = typer.Argument(None, help="Workouts CSV (defaults to WORKOUTS_CSV_PATH)")) -> None:
    """Import the workout catalog from CSV."""
    csv_path = path or Path(settings.workouts_csv_path)
    _require_file(csv_path)
    init_db()
    with get_session() as db:
        result = import_workouts_from_csv(db, csv_path)
    _print_import_result(f"Workouts: {csv_path.name}", result)


@app.command("import-history")
def import_history(path: Path = typer.Argument(None, help="History CSV (defaults to HISTORY_CSV_PATH)")) -> None:
    """Import completed sessions from CSV."""
    csv_path = path or Path(settings.history_csv_path)
    _require_file(csv_path)
    init_db()
    with get_session() as db:
        result = import_history_from_csv(db, csv_path)
    _print_import_result(f"History: {csv_path.name}", result)


def _workout_line(label: str, workout: Workout | None) -> str:
    if workout is None:
        return f"[dim]{label}: none[/dim]"
    return f"[bold]{label}:[/bold] {workout.title} ({workout.duration_min} min) {workout.video_url}"


@app.command()
def recommend(
    target: str | None = typer.Option(None, "--target", help="Target muscle group"),
    duration_min: str | None = typer.Option(None, "--duration-min", help="Minimum duration (minutes)"),
    duration_max: str | None = typer.Option(None, "--duration-max", help="Maximum duration (minutes)"),
    intensity: str | None = typer.Option(None, "--intensity", help="low, medium or high"),
    equipment: str | None = typer.Option(None, "--equipment", help="none, bands, dumbbells or other"),
    yoga: bool = typer.Option(False, "--yoga", help="Recommend a yoga session"),
    special_tag: str | None = typer.Option(None, "--special-tag", help="Secondary tag to require"),
    channels: str | None = typer.Option(None, "--channels", help="Comma-separated channel names"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for a reproducible pick"),
) -> None:
    """Print today's recommendation."""
    filters = sanitize_filters(
        target=target,
        duration_min=duration_min,
        duration_max=duration_max,
        intensity=intensity,
        equipment=equipment,
        yoga="true" if yoga else None,
        special_tag=special_tag,
        channels=channels,
    )
    with Session(get_engine()) as db:
        engine = RecommendationEngine.from_session(db, rng=random.Random(seed))
        try:
            recommendation = engine.recommend(filters)
        except NoCandidatesError as e:
            console.print(Panel(Text(e.reason, style="bold yellow"), title="No recommendation", border_style="yellow"))
            raise typer.Exit(1) from e
        except CollaboratorUnavailableError as e:
            console.print(Panel(Text(str(e), style="bold red"), title="Database unavailable", border_style="red"))
            raise typer.Exit(2) from e

        selected = recommendation.selected
        workout = selected.workout
        body = "\n".join(
            [
                _workout_line("Workout", workout),
                f"  {workout.channel_name} | {workout.primary_target} | {workout.intensity} | {workout.equipment}",
                f"  score={selected.score} completed={selected.stats.count} last={selected.stats.last_date or '-'}",
                _workout_line("Warmup", recommendation.warmup),
                _workout_line("Cooldown", recommendation.cooldown),
            ]
        )
        subtitle = f"{recommendation.candidate_count} candidates, pool of {recommendation.pool_size}"
        console.print(Panel(body, title="Today's workout", subtitle=subtitle, border_style="green"))


if __name__ == "__main__":
    app()
