"""CLI for the scicalc expression engine.

Usage:
    python -m scicalc eval "2^3^2"                # Evaluate an expression
    python -m scicalc eval "sin(90)" --angle rad  # Radians instead of degrees
    python -m scicalc press 2 sin 9 0 ")" =       # Feed keypad presses
    python -m scicalc press 5 ! = --trace         # Show state after each press
    python -m scicalc keypad --layout standard    # Show a keypad layout
    python -m scicalc repl                        # Interactive session with Ans
"""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from scicalc.builder import Calculator
from scicalc.config import Settings, load_settings, parse_angle_mode, parse_layout
from scicalc.engine import calculate
from scicalc.errors import CalcError
from scicalc.formatter import ERROR_TEXT, format_result
from scicalc.keypad import token_event
from scicalc.render import render_keypad, render_trace

app = typer.Typer(
    name="scicalc",
    help="Scientific calculator expression engine",
    no_args_is_help=True,
)
out = Console()
console = Console(stderr=True)
log = logging.getLogger("scicalc")


def _settings(angle: Optional[str] = None, layout: Optional[str] = None) -> Settings:
    """Environment settings with CLI overrides applied."""
    try:
        settings = load_settings()
        if angle:
            settings.angle_mode = parse_angle_mode(angle)
        if layout:
            settings.layout = parse_layout(layout)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    return settings


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Scientific calculator expression engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '3+4*2' or 'sin(90)'"),
    angle: Optional[str] = typer.Option(None, "--angle", help="Angle mode: deg or rad"),
    ans: float = typer.Option(0.0, "--ans", help="Value of the Ans variable"),
) -> None:
    """Evaluate an expression and print the formatted result."""
    settings = _settings(angle)
    try:
        value = calculate(expression, settings.angle_mode, ans)
    except CalcError as e:
        log.debug("Evaluation failed: %s", e)
        console.print(f"[red]{ERROR_TEXT}[/red]: {escape(str(e))}")
        raise typer.Exit(1)

    result = format_result(value)
    if result == ERROR_TEXT:
        console.print(f"[red]{ERROR_TEXT}[/red]: non-finite result ({value})")
        raise typer.Exit(1)
    out.print(result)


@app.command("press")
def cmd_press(
    keys: List[str] = typer.Argument(help="Button values, e.g. 2 sin 9 0 ')' ="),
    angle: Optional[str] = typer.Option(None, "--angle", help="Angle mode: deg or rad"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the state after every press"),
) -> None:
    """Feed button presses through the input builder."""
    settings = _settings(angle)
    calc = Calculator(angle_mode=settings.angle_mode)
    steps = []
    for key in keys:
        try:
            calc.press(token_event(key))
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        steps.append((key, calc.state))

    if trace:
        render_trace(steps, out)
        return
    if calc.preview:
        out.print(f"[dim]{escape(calc.preview)}[/dim]")
    out.print(escape(calc.display))


@app.command("keypad")
def cmd_keypad(
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout: basic, standard, scientific"),
    angle: Optional[str] = typer.Option(None, "--angle", help="Angle mode shown on the toggle"),
) -> None:
    """Show a keypad layout."""
    settings = _settings(angle, layout)
    render_keypad(settings.layout, settings.angle_mode, out)


@app.command("repl")
def cmd_repl(
    angle: Optional[str] = typer.Option(None, "--angle", help="Angle mode: deg or rad"),
) -> None:
    """Evaluate expressions interactively. 'angle' toggles the mode, 'quit' exits."""
    settings = _settings(angle)
    angle_mode = settings.angle_mode
    last_answer = 0.0

    console.print(f"[dim]scicalc — {angle_mode.value.upper()} mode, Ans = 0[/dim]")
    while True:
        try:
            line = console.input("[bold]>[/bold] ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line in ("quit", "exit"):
            break
        if line == "angle":
            angle_mode = angle_mode.toggled()
            console.print(f"[dim]{angle_mode.value.upper()} mode[/dim]")
            continue

        try:
            value = calculate(line, angle_mode, last_answer)
        except CalcError as e:
            log.debug("Evaluation failed: %s", e)
            out.print(f"[red]{ERROR_TEXT}[/red]")
            continue
        result = format_result(value)
        if result == ERROR_TEXT:
            out.print(f"[red]{ERROR_TEXT}[/red]")
            continue
        last_answer = value
        out.print(f"[green]{result}[/green]")


if __name__ == "__main__":
    app()
