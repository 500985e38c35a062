"""Typer entry-point wiring for the Corporate Combat CLI."""

from __future__ import annotations

import logging

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import benchmark
from ..ai.difficulty import Difficulty
from ..state import GameConfig
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def setup_logging(level: str = "WARNING") -> None:
    """Route stdlib logging through Rich at ``level``."""

    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level {level!r}.")
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.command()
def play(
    difficulty: Difficulty = typer.Option(Difficulty.MEDIUM, help="AI opponent difficulty."),
    delay: float = typer.Option(1.0, min=0.0, help="Seconds the AI waits before taking its turn."),
    purge: bool = typer.Option(False, "--purge/--no-purge", help="Enable the optional 7-card purge rule."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    log_level: str = typer.Option("WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Play against the AI on the interactive board."""

    setup_logging(log_level)
    config = GameConfig(
        ai_difficulty=difficulty,
        ai_turn_delay=delay,
        enable_purge=purge,
        seed=seed,
    )
    run_textual_app(config)


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(20, min=1, help="Number of AI-vs-AI games."),
    baseline: Difficulty = typer.Option(Difficulty.MEDIUM, help="Difficulty of the baseline agent."),
    challenger: Difficulty = typer.Option(Difficulty.HARD, help="Difficulty of the challenger agent."),
    purge: bool = typer.Option(False, "--purge/--no-purge", help="Enable the optional 7-card purge rule."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    log_level: str = typer.Option("WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Run a baseline vs. challenger benchmark."""

    setup_logging(log_level)
    report = benchmark.run_head_to_head(
        games,
        baseline,
        challenger,
        seed=seed,
        enable_purge=purge,
    )

    table = Table(title="Head-to-Head Benchmark", box=box.SIMPLE_HEAVY)
    table.add_column("Agent", justify="center")
    table.add_column("Difficulty", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Turns to win", justify="right")
    for label, breakdown in (("Baseline", report.baseline), ("Challenger", report.challenger)):
        table.add_row(
            label,
            breakdown.difficulty.value,
            str(breakdown.wins),
            f"{breakdown.mean_turns_to_win:.1f}",
        )
    console.print(table)
    console.print(
        f"[cyan]{len(report.history.games)} game(s) simulated; "
        f"turns {report.mean_turns:.1f} ± {report.std_turns:.1f}.[/cyan]"
    )
    if report.unfinished:
        console.print(f"[yellow]{report.unfinished} game(s) hit the turn limit.[/yellow]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, min=1, max=65535, help="Port to listen on."),
    log_level: str = typer.Option("INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Serve the game store over HTTP and the realtime relay over WebSocket."""

    import uvicorn

    from ..server import create_app

    setup_logging(log_level)
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level.lower())


def main() -> None:
    """Entry-point for ``python -m corporate_combat.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
