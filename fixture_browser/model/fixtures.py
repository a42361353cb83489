# fixture_browser/model/fixtures.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from ..errors import APIDecodeError


@dataclass(frozen=True)
class Team:
    id: int
    name: str


@dataclass(frozen=True)
class League:
    id: Optional[int]
    name: str


@dataclass(frozen=True)
class Venue:
    name: Optional[str] = None
    city: Optional[str] = None


@dataclass(frozen=True)
class FixtureRecord:
    """One played or scheduled match, as returned by /fixtures."""

    fixture_id: Optional[int]
    date: str
    league: League
    home: Team
    away: Team
    goals_home: Optional[int] = None
    goals_away: Optional[int] = None
    venue: Venue = Venue()
    timezone: Optional[str] = None

    @classmethod
    def from_api(cls, item: Any) -> "FixtureRecord":
        """
        Decode one element of the API-Football `response` array.

        The kickoff string is kept as-is; it is only parsed when the record
        is formatted for display.
        """
        if not isinstance(item, dict):
            raise APIDecodeError(f"Fixture entry is not an object: {item!r}")

        fixture = _require_obj(item, "fixture")
        league = _require_obj(item, "league")
        teams = _require_obj(item, "teams")
        home = _require_obj(teams, "home", "teams.home")
        away = _require_obj(teams, "away", "teams.away")
        goals = _optional_obj(item, "goals")
        venue = _optional_obj(fixture, "venue", "fixture.venue")

        date = fixture.get("date")
        if not isinstance(date, str):
            raise APIDecodeError(f"Fixture {fixture.get('id')} has no date")

        return cls(
            fixture_id=fixture.get("id"),
            date=date,
            timezone=fixture.get("timezone"),
            venue=Venue(name=venue.get("name"), city=venue.get("city")),
            league=League(id=league.get("id"), name=league.get("name") or ""),
            home=_team(home, "teams.home"),
            away=_team(away, "teams.away"),
            goals_home=goals.get("home"),
            goals_away=goals.get("away"),
        )


QueryResult = Tuple[FixtureRecord, ...]


def decode_fixtures(items: Iterable[Any]) -> QueryResult:
    return tuple(FixtureRecord.from_api(item) for item in items)


# ----------------------------------------------------------------------
# Kickoff parsing / display
# ----------------------------------------------------------------------

_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d{1,9}))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})\Z"
)


class KickoffParseError(APIDecodeError):
    """A fixture's date isn't a timezone-qualified RFC3339 timestamp."""


def parse_kickoff(value: str) -> datetime:
    """Parse an RFC3339 timestamp; the offset it carries is kept."""
    match = _RFC3339_RE.match(value)
    if match is None:
        raise KickoffParseError(f'cannot parse "{value}" as RFC3339 timestamp')

    # strptime's %f stops at microseconds
    frac = (match.group("frac") or "0")[:6]
    offset = match.group("offset").replace("Z", "+00:00")
    try:
        return datetime.strptime(
            f"{match.group('base')}.{frac}{offset}", "%Y-%m-%dT%H:%M:%S.%f%z"
        )
    except ValueError as exc:
        raise KickoffParseError(
            f'cannot parse "{value}" as RFC3339 timestamp: {exc}'
        ) from exc


def format_kickoff(moment: datetime) -> str:
    """e.g. 2024 Mar 16 5:30 PM"""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment.year} {moment:%b} {moment.day} {hour}:{moment:%M} {meridiem}"


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _require_obj(parent: Dict[str, Any], key: str, label: Optional[str] = None) -> Dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        raise APIDecodeError(f"Fixture entry is missing '{label or key}'")
    return value


def _optional_obj(parent: Dict[str, Any], key: str, label: Optional[str] = None) -> Dict[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise APIDecodeError(f"Fixture entry has a malformed '{label or key}': {value!r}")
    return value


def _team(obj: Dict[str, Any], label: str) -> Team:
    team_id = obj.get("id")
    if not isinstance(team_id, int):
        raise APIDecodeError(f"Fixture entry has no id for '{label}'")
    return Team(id=team_id, name=obj.get("name") or "")
