"""
render.py – builds the two-panel view from the menu state.

Left: the selectable menu. Right: the fixture text for the committed choice,
recomputed on every render so an expired cache entry is refetched on the
next frame.
"""

from __future__ import annotations

from rich.console import RenderableType
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from .menu import MenuState
from .model.queries import FixtureQueryService


TITLE = "Glory Glory Man United"
QUIT_TEXT = "Glory Glory Man United."
HELP_TEXT = "↑/↓ move • enter • q quit"
MENU_COLUMN_WIDTH = 30

TITLE_STYLE = "bold white on dark_magenta"
SELECTED_STYLE = "color(170)"
HELP_STYLE = "grey50"


def left_panel(state: MenuState) -> Text:
    text = Text()
    text.append("  ")
    text.append(f" {TITLE} ", style=TITLE_STYLE)
    text.append("\n\n")

    for i, entry in enumerate(state.entries):
        line = f"{i + 1}. {entry.label}"
        if i == state.index:
            text.append(f"  > {line}\n", style=SELECTED_STYLE)
        else:
            text.append(f"    {line}\n")

    text.append("\n")
    text.append(f"    {HELP_TEXT}", style=HELP_STYLE)
    return text


def right_panel(state: MenuState, service: FixtureQueryService) -> str:
    """Fixture text for the committed choice; '' until something is picked."""
    if state.choice is None:
        return ""
    return service.render(state.choice)


def compose(state: MenuState, service: FixtureQueryService) -> RenderableType:
    if state.quitting:
        return Padding(Text(QUIT_TEXT), (1, 0, 2, 4))

    grid = Table.grid(padding=(0, 2))
    grid.add_column(width=MENU_COLUMN_WIDTH, no_wrap=True)
    grid.add_column()
    if state.width > MENU_COLUMN_WIDTH:
        grid.width = state.width

    right = Padding(Text(right_panel(state, service)), (3, 0, 0, 0))
    grid.add_row(Padding(left_panel(state), (1, 0, 0, 0)), right)
    return grid
