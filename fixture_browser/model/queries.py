"""
queries.py – the four fixture queries behind the menu.

Each query resolves through the ResultCache before falling through to the
API client, then formats the records into display lines:

    [Home]  2024 Mar 16 5:30 PM  ->  Man United (2) vs Liverpool (1)  [Premier League]

Failed fetches are returned as panel text and never cached.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Protocol

from ..config import DEFAULT_TIMEZONE, MANCHESTER_UNITED_ID, TimestampPolicy
from ..errors import APISportsError
from .cache import ResultCache
from .fixtures import (
    FixtureRecord,
    KickoffParseError,
    QueryResult,
    format_kickoff,
    parse_kickoff,
)


logger = logging.getLogger(__name__)


class FixtureQuery(Enum):
    """The menu entries. Values are (label, direction, count)."""

    LAST_MATCH = ("Last match", "last", 1)
    LAST_FIVE_MATCHES = ("Last 5 matches", "last", 5)
    NEXT_MATCH = ("Next match", "next", 1)
    NEXT_FIVE_MATCHES = ("Next 5 matches", "next", 5)

    def __init__(self, label: str, direction: str, count: int) -> None:
        self.label = label
        self.direction = direction
        self.count = count

    @property
    def cache_key(self) -> str:
        return f"{self.direction}-{self.count}"

    @property
    def is_last(self) -> bool:
        return self.direction == "last"

    @property
    def not_found_text(self) -> str:
        return "Match not found." if self.count == 1 else "Matches not found."


class FixtureFetcher(Protocol):
    def fetch_fixtures(self, params: Mapping[str, Any]) -> QueryResult:
        ...


class FixtureQueryService:
    """
    Resolve and format the four fixture queries for one team.

    Parameters
    ----------
    fetcher : FixtureFetcher
        Usually an APISportsClient.
    cache : ResultCache
        Shared by all four queries; one entry per query.
    team_id : int
        Decides the [Home]/[Away] tag.
    timezone : str
        Sent upstream; kickoffs come back already in this zone.
    timestamp_policy : TimestampPolicy
        FAIL_BATCH lets one bad kickoff replace the whole panel text.
    """

    def __init__(
        self,
        fetcher: FixtureFetcher,
        cache: ResultCache,
        team_id: int = MANCHESTER_UNITED_ID,
        timezone: str = DEFAULT_TIMEZONE,
        timestamp_policy: TimestampPolicy = TimestampPolicy.FAIL_BATCH,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.team_id = team_id
        self.timezone = timezone
        self.timestamp_policy = timestamp_policy

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    def params_for(self, query: FixtureQuery) -> Dict[str, Any]:
        params: Dict[str, Any] = {"team": self.team_id, query.direction: query.count}
        if query.is_last:
            # future matches have no result status
            params["status"] = "FT"
        params["timezone"] = self.timezone
        return params

    def resolve(self, query: FixtureQuery) -> QueryResult:
        cached = self.cache.get(query.cache_key)
        if cached is not None:
            return cached

        result = self.fetcher.fetch_fixtures(self.params_for(query))
        self.cache.set(query.cache_key, result)
        return result

    def last_match(self) -> QueryResult:
        return self.resolve(FixtureQuery.LAST_MATCH)

    def last_five_matches(self) -> QueryResult:
        return self.resolve(FixtureQuery.LAST_FIVE_MATCHES)

    def next_match(self) -> QueryResult:
        return self.resolve(FixtureQuery.NEXT_MATCH)

    def next_five_matches(self) -> QueryResult:
        return self.resolve(FixtureQuery.NEXT_FIVE_MATCHES)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    def is_home(self, record: FixtureRecord) -> bool:
        return record.home.id == self.team_id

    def format_record(self, query: FixtureQuery, record: FixtureRecord) -> str:
        kickoff = format_kickoff(parse_kickoff(record.date))
        tag = "[Home]" if self.is_home(record) else "[Away]"

        if query.is_last:
            teams = (
                f"{record.home.name} ({_goals(record.goals_home)}) vs "
                f"{record.away.name} ({_goals(record.goals_away)})"
            )
        else:
            teams = f"{record.home.name} vs {record.away.name}"

        return f"{tag}  {kickoff}  ->  {teams}  [{record.league.name}]"

    def format_result(self, query: FixtureQuery, result: QueryResult) -> str:
        if not result:
            return query.not_found_text

        lines: List[str] = []
        for record in result:
            try:
                lines.append(self.format_record(query, record))
            except KickoffParseError as exc:
                if self.timestamp_policy is TimestampPolicy.FAIL_BATCH:
                    return str(exc)
                lines.append(str(exc))
        return "\n".join(lines)

    def render(self, query: FixtureQuery) -> str:
        """Panel text for `query`: fixtures, not-found text or the error."""
        try:
            result = self.resolve(query)
        except APISportsError as exc:
            logger.warning("%s query failed: %s", query.label, exc)
            return str(exc)
        return self.format_result(query, result)


def _goals(value: Any) -> str:
    return "-" if value is None else str(value)
