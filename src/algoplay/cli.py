# src/algoplay/cli.py
"""
algoplay Command Line Interface (CLI).

This module implements the terminal front end using `typer` and `rich`. The
terminal acts as a presentation sink: every committed playback position is
rendered as a rule, the step description, and the highlighted pseudo-code.

Commands
--------
- **list**: Catalog of bundled demonstrations, grouped by category.
- **show**: Print every step of one trace as a table.
- **play**: Autoplay a trace in real time at a chosen speed.
- **explore**: Step through a trace interactively (next/prev/reset/autoplay).

Usage
-----
    $ algoplay list
    $ algoplay show bubble-sort --input '{"array": [3, 1, 2]}'
    $ algoplay play kmp --speed 2
    $ algoplay explore binary-search --seed 7
"""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from algoplay.algorithms.catalog import AlgorithmEntry, categories, create_session, lookup
from algoplay.core.playback import PlaybackSession, StepFrame, ThreadingScheduler
from algoplay.core.result import Result, err, ok
from algoplay.core.settings import load_settings
from algoplay.core.trace import thaw

load_dotenv()

app = typer.Typer(
    help="algoplay: step through textbook algorithms one state at a time.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Input & Lookup
# --------------------------------------------------------------------------- #


def _parse_input(raw: str | None) -> Result[Any, str]:
    """Decode the ``--input`` JSON payload (``None`` means "random sample")."""
    if raw is None:
        return ok(None)
    try:
        return ok(json.loads(raw))
    except json.JSONDecodeError as e:
        return err(f"--input is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})")


def _fail(message: str) -> typer.Exit:
    console.print(f"[bold red]❌ {message}[/bold red]")
    return typer.Exit(code=1)


def _resolve(algorithm: str) -> AlgorithmEntry:
    found = lookup(algorithm)
    if found.is_err():
        raise _fail(found.unwrap_err())
    return found.unwrap()


# --------------------------------------------------------------------------- #
# Helpers: Rendering (the terminal presentation sink)
# --------------------------------------------------------------------------- #


def _render_array(data: Mapping[str, Any]) -> Text:
    """Colour array cells: comparing (yellow), active (red), sorted (green)."""
    comparing = set(data.get("comparing", ()))
    active = set(data.get("active", ()))
    done = set(data.get("sorted", ()))
    text = Text("[ ")
    for i, value in enumerate(data["array"]):
        style = "bold red" if i in active else "bold yellow" if i in comparing else "green" if i in done else ""
        text.append(f"{value}", style=style)
        text.append(" ")
    text.append("]")
    return text


def _render_frame(frame: StepFrame[Any]) -> None:
    snap = frame.snapshot
    console.rule(f"[bold]{frame.label()}[/bold]")
    style = "bold red" if snap.is_error else ""
    console.print(Text(snap.description, style=style))

    data = snap.data
    if isinstance(data, Mapping) and "array" in data and "comparing" in data:
        console.print(_render_array(data))
    elif data is not None:
        console.print(Pretty(thaw(data), max_length=24))

    if snap.code_highlight:
        console.print(Panel(snap.code_highlight, title="Relevant Code", border_style="cyan", expand=False))
    if snap.complexity_info:
        console.print(f"[dim]Complexity: {snap.complexity_info}[/dim]")


def _open_session(
    entry: AlgorithmEntry,
    input_json: str | None,
    *,
    speed: float = 1.0,
    delay: float | None = None,
    seed: int | None = None,
) -> PlaybackSession[Any]:
    parsed = _parse_input(input_json)
    if parsed.is_err():
        raise _fail(parsed.unwrap_err())
    created = create_session(
        entry.id,
        parsed.unwrap(),
        scheduler=ThreadingScheduler(),
        sink=_render_frame,
        speed_multiplier=speed,
        base_delay_ms=delay,
        seed=seed,
    )
    if created.is_err():
        raise _fail(created.unwrap_err())
    return created.unwrap()


def _autoplay(session: PlaybackSession[Any]) -> None:
    """Start autoplay and block until it stops on its own or on Ctrl-C."""
    session.play()
    try:
        while session.is_playing:
            time.sleep(0.02)
    except KeyboardInterrupt:
        session.pause()
        console.print("\n[yellow]⏸ Paused.[/yellow]")


# --------------------------------------------------------------------------- #
# Shared options
# --------------------------------------------------------------------------- #

AlgorithmArg = Annotated[str, typer.Argument(help="Algorithm id (see `algoplay list`).")]
InputOpt = Annotated[
    str | None,
    typer.Option("--input", "-i", help="JSON input, e.g. '{\"array\": [3, 1, 2]}'. Random if omitted."),
]
SeedOpt = Annotated[int | None, typer.Option("--seed", help="Seed for the random sample input.")]


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command("list")  # type: ignore[misc]
def list_algorithms() -> None:
    """List every bundled demonstration, grouped by category."""
    table = Table(title="Algorithms", show_lines=False)
    table.add_column("Category", style="magenta")
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for category, entries in categories().items():
        for entry in entries:
            table.add_row(category, entry.id, entry.name, entry.description)
    console.print(table)


@app.command()  # type: ignore[misc]
def show(algorithm: AlgorithmArg, input_json: InputOpt = None, seed: SeedOpt = None) -> None:
    """Print every step of the trace for one input."""
    entry = _resolve(algorithm)
    parsed = _parse_input(input_json)
    if parsed.is_err():
        raise _fail(parsed.unwrap_err())
    data = parsed.unwrap()
    trace = entry.trace(data if data is not None else entry.sample_input(seed))

    table = Table(title=f"{entry.name}: {len(trace)} steps")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Description")
    table.add_column("Code", style="cyan")
    for i, snap in enumerate(trace):
        table.add_row(str(i + 1), snap.description, snap.code_highlight or "")
    console.print(table)


@app.command()  # type: ignore[misc]
def play(
    algorithm: AlgorithmArg,
    input_json: InputOpt = None,
    seed: SeedOpt = None,
    speed: Annotated[float, typer.Option("--speed", "-s", min=0.01, help="Speed multiplier.")] = 1.0,
    delay: Annotated[
        float | None,
        typer.Option("--delay", help="Base delay between steps in ms (default from settings)."),
    ] = None,
) -> None:
    """Autoplay a trace from the first to the last step."""
    entry = _resolve(algorithm)
    console.print(
        Panel.fit(
            f"[bold cyan]{entry.name}[/bold cyan]\n{entry.description}",
            border_style="cyan",
        )
    )
    with _open_session(entry, input_json, speed=speed, delay=delay, seed=seed) as session:
        _autoplay(session)
        if session.at_end:
            console.print(f"\n[bold green]✅ Complete![/bold green] ({session.total_steps} steps)")


@app.command()  # type: ignore[misc]
def explore(
    algorithm: AlgorithmArg,
    input_json: InputOpt = None,
    seed: SeedOpt = None,
    delay: Annotated[
        float | None,
        typer.Option("--delay", help="Base delay between autoplay steps in ms."),
    ] = None,
) -> None:
    """
    Step through a trace interactively.

    Keys: **n** next, **p** previous, **r** reset, **a** autoplay to the end,
    **s** change speed, **q** quit.
    """
    entry = _resolve(algorithm)
    speeds = [str(s) for s in load_settings().speed_options]
    with _open_session(entry, input_json, delay=delay, seed=seed) as session:
        while True:
            choice = Prompt.ask(
                f"[dim]{session.frame.label()} @ {session.speed_multiplier}x[/dim]",
                choices=["n", "p", "r", "a", "s", "q"],
                default="n",
                console=console,
            )
            if choice == "q":
                break
            if choice == "n":
                if session.at_end:
                    console.print("[dim]Already at the last step.[/dim]")
                session.step_forward()
            elif choice == "p":
                if session.at_start:
                    console.print("[dim]Already at the first step.[/dim]")
                session.step_backward()
            elif choice == "r":
                session.reset()
            elif choice == "a":
                _autoplay(session)
            elif choice == "s":
                current = str(session.speed_multiplier)
                default = current if current in speeds else speeds[0]
                picked = Prompt.ask("Speed", choices=speeds, default=default, console=console)
                session.set_speed(float(picked))


if __name__ == "__main__":
    app()
