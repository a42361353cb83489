"""
Menu state and the reducer that moves it in response to terminal events.

Keys:
  up / k       : move highlight up
  down / j     : move highlight down
  home / g     : first entry
  end / G      : last entry
  enter        : show fixtures for the highlighted entry
  q / ctrl+c   : quit
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from .model.queries import FixtureQuery


MENU_ENTRIES: Tuple[FixtureQuery, ...] = (
    FixtureQuery.LAST_MATCH,
    FixtureQuery.LAST_FIVE_MATCHES,
    FixtureQuery.NEXT_MATCH,
    FixtureQuery.NEXT_FIVE_MATCHES,
)
DEFAULT_WIDTH = 20

UP_KEYS = {"up", "k"}
DOWN_KEYS = {"down", "j"}
HOME_KEYS = {"home", "g"}
END_KEYS = {"end", "G"}
CONFIRM_KEYS = {"enter"}
QUIT_KEYS = {"q", "ctrl+c"}


class Phase(Enum):
    BROWSING = "browsing"
    SELECTED = "selected"
    QUITTING = "quitting"


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int


Event = Union[KeyEvent, ResizeEvent]


@dataclass(frozen=True)
class MenuState:
    entries: Tuple[FixtureQuery, ...] = MENU_ENTRIES
    index: int = 0
    choice: Optional[FixtureQuery] = None
    quitting: bool = False
    width: int = DEFAULT_WIDTH

    @property
    def phase(self) -> Phase:
        if self.quitting:
            return Phase.QUITTING
        if self.choice is not None:
            return Phase.SELECTED
        return Phase.BROWSING

    @property
    def highlighted(self) -> FixtureQuery:
        return self.entries[self.index]


def update(state: MenuState, event: Event) -> MenuState:
    """Return the state after `event`. Quitting is terminal."""
    if state.quitting:
        return state

    if isinstance(event, ResizeEvent):
        return replace(state, width=event.width)

    key = event.key
    last = len(state.entries) - 1

    if key in QUIT_KEYS:
        return replace(state, quitting=True)
    if key in UP_KEYS:
        return replace(state, index=max(0, state.index - 1))
    if key in DOWN_KEYS:
        return replace(state, index=min(last, state.index + 1))
    if key in HOME_KEYS:
        return replace(state, index=0)
    if key in END_KEYS:
        return replace(state, index=last)
    if key in CONFIRM_KEYS:
        return replace(state, choice=state.highlighted)
    return state
