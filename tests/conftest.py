"""Shared fakes and payload builders for the fixture browser tests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import pytest

from fixture_browser.model.cache import ResultCache
from fixture_browser.model.fixtures import QueryResult, decode_fixtures
from fixture_browser.model.queries import FixtureQueryService


MAN_UNITED = {"id": 33, "name": "Man United"}
LIVERPOOL = {"id": 40, "name": "Liverpool"}


def make_item(
    date: str = "2024-03-16T17:30:00+08:00",
    home: Optional[Dict[str, Any]] = None,
    away: Optional[Dict[str, Any]] = None,
    goals_home: Optional[int] = 2,
    goals_away: Optional[int] = 1,
    league: str = "Premier League",
    fixture_id: int = 1035,
) -> Dict[str, Any]:
    """One element of the /fixtures `response` array."""
    return {
        "fixture": {
            "id": fixture_id,
            "date": date,
            "timezone": "Australia/Perth",
            "venue": {"name": "Old Trafford", "city": "Manchester"},
        },
        "league": {"id": 39, "name": league},
        "teams": {"home": home or MAN_UNITED, "away": away or LIVERPOOL},
        "goals": {"home": goals_home, "away": goals_away},
    }


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Stands in for APISportsClient; records every call."""

    def __init__(self, result: QueryResult = (), error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def fetch_fixtures(self, params: Mapping[str, Any]) -> QueryResult:
        self.calls.append(dict(params))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture
def cache(clock: FakeClock) -> ResultCache:
    return ResultCache(ttl=600, purge_interval=900, clock=clock)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(decode_fixtures([make_item()]))


@pytest.fixture
def service(fetcher: FakeFetcher, cache: ResultCache) -> FixtureQueryService:
    return FixtureQueryService(fetcher=fetcher, cache=cache, team_id=33)
