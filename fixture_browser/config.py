"""
config.py – central configuration for the fixture browser.

Handles the RapidAPI secrets and the handful of fixed settings for the one
team we follow. Secrets come from a .env file (strictly parsed) with the
process environment as a fallback:

    RAPIDAPI_HOST=api-football-v1.p.rapidapi.com
    RAPIDAPI_KEY=your_key_here
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv.parser import parse_stream


MANCHESTER_UNITED_ID = 33
PREMIER_LEAGUE_ID = 39
RAPIDAPI_BASE_URL = "https://api-football-v1.p.rapidapi.com/v3"
DEFAULT_TIMEZONE = "Australia/Perth"

ENV_FILE_VAR = "FIXTURE_BROWSER_ENV_FILE"
REQUIRED_SECRETS = ("RAPIDAPI_HOST", "RAPIDAPI_KEY")


class ConfigError(RuntimeError):
    """Missing or malformed configuration; fatal at startup."""


class TimestampPolicy(str, Enum):
    """What to do when one fixture in a batch has an unparseable kickoff."""

    FAIL_BATCH = "fail-batch"  # the parse error replaces the whole panel
    PER_RECORD = "per-record"  # only the offending line shows the error


@dataclass(frozen=True)
class APISportsConfig:
    api_host: str
    api_key: str
    base_url: str = RAPIDAPI_BASE_URL
    team_id: int = MANCHESTER_UNITED_ID
    league_id: int = PREMIER_LEAGUE_ID
    timezone: str = DEFAULT_TIMEZONE
    timeout: float = 5.0
    cache_ttl: float = 10 * 60
    cache_purge_interval: float = 15 * 60
    timestamp_policy: TimestampPolicy = TimestampPolicy.FAIL_BATCH
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def read_env_file(path: Union[str, Path]) -> Dict[str, str]:
    """
    Parse a .env file, failing on the first line that is not KEY=VALUE.

    Blank lines and comments are allowed. A bare KEY with no '=' counts as
    malformed since it can't carry a secret.
    """
    values: Dict[str, str] = {}
    with open(path, encoding="utf-8") as stream:
        for binding in parse_stream(stream):
            if binding.error:
                raise ConfigError(
                    f"Malformed line {binding.original.line} in {path}: "
                    f"{binding.original.string.strip()!r}"
                )
            if binding.key is None:
                continue
            if binding.value is None:
                raise ConfigError(
                    f"Malformed line {binding.original.line} in {path}: "
                    f"{binding.key!r} has no value"
                )
            values[binding.key] = binding.value
    return values


def _parse_policy(raw: Optional[str]) -> TimestampPolicy:
    if not raw:
        return TimestampPolicy.FAIL_BATCH
    try:
        return TimestampPolicy(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in TimestampPolicy)
        raise ConfigError(
            f"Unknown FIXTURE_TIMESTAMP_POLICY {raw!r} (expected one of: {allowed})"
        ) from None


def load_config(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> APISportsConfig:
    """
    Build the app config from a .env file and the process environment.

    Values in the .env file win over the environment. Either required secret
    being absent or blank raises ConfigError.
    """
    if environ is None:
        environ = os.environ

    if env_file is None:
        env_file = environ.get(ENV_FILE_VAR) or ".env"

    file_values: Dict[str, str] = {}
    if Path(env_file).is_file():
        file_values = read_env_file(env_file)

    def lookup(name: str) -> str:
        value = file_values.get(name)
        if value is None:
            value = environ.get(name, "")
        return value.strip()

    secrets = {}
    for name in REQUIRED_SECRETS:
        value = lookup(name)
        if not value:
            raise ConfigError(f"missing env: {name}")
        secrets[name] = value

    return APISportsConfig(
        api_host=secrets["RAPIDAPI_HOST"],
        api_key=secrets["RAPIDAPI_KEY"],
        timestamp_policy=_parse_policy(lookup("FIXTURE_TIMESTAMP_POLICY")),
        log_level=lookup("LOG_LEVEL").upper() or "WARNING",
        log_file=lookup("LOG_FILE") or None,
    )
