"""Rich rendering for the CLI — keypad grids and key-press traces."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scicalc.keypad import LAYOUTS, Button, ButtonKind, Layout
from scicalc.models import AngleMode, CalculatorState

_KIND_STYLES = {
    ButtonKind.DIGIT: "white",
    ButtonKind.OPERATOR: "cyan",
    ButtonKind.FUNCTION: "magenta",
    ButtonKind.CONTROL: "red",
    ButtonKind.EQUALS: "bold green",
    ButtonKind.CONSTANT: "yellow",
    ButtonKind.TOGGLE: "blue",
}


def _cell(button: Button, angle_mode: AngleMode) -> str:
    # The toggle shows the active mode rather than a fixed label
    label = angle_mode.value.upper() if button.kind is ButtonKind.TOGGLE else button.label
    return f"[{_KIND_STYLES[button.kind]}]{escape(label)}[/]"


def keypad_rows(layout: Layout, angle_mode: AngleMode) -> list[list[str]]:
    """Lay the buttons out in grid rows; a wide button fills its extra cells with ""."""
    buttons, columns = LAYOUTS[layout]
    rows: list[list[str]] = []
    row: list[str] = []
    for button in buttons:
        row.append(_cell(button, angle_mode))
        row.extend([""] * (button.span - 1))
        if len(row) >= columns:
            rows.append(row)
            row = []
    if row:
        rows.append(row + [""] * (columns - len(row)))
    return rows


def render_keypad(layout: Layout, angle_mode: AngleMode, console: Console) -> None:
    """Render a keypad layout as a grid table."""
    _, columns = LAYOUTS[layout]
    table = Table(title=f"Keypad: {layout.value}", show_header=False, show_lines=True)
    for _ in range(columns):
        table.add_column(justify="center", min_width=5)
    for row in keypad_rows(layout, angle_mode):
        table.add_row(*row)
    console.print()
    console.print(table)
    console.print()


def render_trace(steps: list[tuple[str, CalculatorState]], console: Console) -> None:
    """Render the state after each key press."""
    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("Key", style="green")
    table.add_column("Expression", style="dim")
    table.add_column("Preview")
    table.add_column("Display", justify="right", style="bold")
    table.add_column("Phase", style="dim")
    table.add_column("Angle", justify="center")

    for key, state in steps:
        table.add_row(
            escape(key),
            escape(state.expression) or "--",
            escape(state.preview) or "--",
            escape(state.display),
            state.phase.value,
            state.angle_mode.value.upper(),
        )
    console.print(table)
