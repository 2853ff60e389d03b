"""CLI entrypoint for the Shadows of the Knight search agent."""

from __future__ import annotations

import sys
from dataclasses import asdict

import typer
from rich import print
from rich.console import Console

from shadows_knight.config import settings
from shadows_knight.errors import ShadowsKnightError
from shadows_knight.models import Bounds, Coordinate
from shadows_knight.protocol import run_session
from shadows_knight.referee import Referee
from shadows_knight.search import create_strategy
from shadows_knight.session import SessionState, SessionStatus, TurnLoop
from shadows_knight.telemetry.logging import configure_logging

app = typer.Typer(help="Binary-search agent for the Shadows of the Knight puzzle")

_stderr = Console(stderr=True)


def _fail(exc: ShadowsKnightError) -> typer.Exit:
    _stderr.print(f"[bold red]{type(exc).__name__}[/]: {exc}", highlight=False)
    return typer.Exit(code=exc.exit_code)


class _RecordingSink:
    """Collects every jump the agent makes."""

    def __init__(self) -> None:
        self.jumps: list[Coordinate] = []

    def emit(self, coordinate: Coordinate) -> None:
        self.jumps.append(coordinate)


def _summary(state: SessionState, referee: Referee) -> dict:
    return {
        "status": state.status.value,
        "target": asdict(referee.target),
        "turns_taken": state.turns_taken,
        "turns_remaining": state.turns_remaining,
        "window": asdict(state.search.window),
        "final_probe": asdict(state.search.last_probe),
    }


@app.command("show-config")
def show_config() -> None:
    """Show the effective runtime settings."""
    print(settings.model_dump())


@app.command()
def play() -> None:
    """Play the interactive protocol on stdin/stdout."""
    configure_logging(settings.log_level, settings.log_file)
    try:
        run_session(sys.stdin, sys.stdout, strategy=create_strategy(settings.strategy))
    except ShadowsKnightError as exc:
        raise _fail(exc)


@app.command()
def simulate(
    width: int = typer.Option(..., help="Building width in windows"),
    height: int = typer.Option(..., help="Building height in windows"),
    target_x: int = typer.Option(..., help="Planted bomb column"),
    target_y: int = typer.Option(..., help="Planted bomb row (0 is the top floor)"),
    start_x: int = typer.Option(0, help="Starting column"),
    start_y: int = typer.Option(0, help="Starting row"),
    turns: int | None = typer.Option(None, help="Turn budget; defaults to SHADOWS_KNIGHT_SIMULATION_TURNS"),
    trace: bool = typer.Option(False, help="Print every jump and the feedback that judged it"),
) -> None:
    """Run a full session against a local referee with a planted target."""
    configure_logging(settings.log_level, settings.log_file)
    try:
        bounds = Bounds(width=width, height=height)
        referee = Referee(bounds=bounds, target=Coordinate(target_x, target_y))
        loop = TurnLoop(
            bounds=bounds,
            turns=turns if turns is not None else settings.simulation_turns,
            start=Coordinate(start_x, start_y),
            strategy=create_strategy(settings.strategy),
        )
        sink = _RecordingSink()
        state = loop.run(referee, sink)
    except ShadowsKnightError as exc:
        raise _fail(exc)

    if trace:
        print(
            {
                "jumps": [str(jump) for jump in sink.jumps],
                "feedback": [probe.feedback.value for probe in state.history],
            }
        )
    print(_summary(state, referee))
    if state.status != SessionStatus.FOUND:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
