"""
api_sports_client.py

Thin wrapper around the API-FOOTBALL v3 fixtures endpoint, served through
RapidAPI.

Docs:
    https://www.api-football.com/documentation-v3

Core ideas:
    - Single client class: APISportsClient
    - Handles headers, base URL, timeout and basic error checking
    - One network call per fetch; failures are reported, never retried
    - Returns decoded FixtureRecord tuples rather than raw JSON

Usage:

    from fixture_browser.api_sports_client import APISportsClient

    client = APISportsClient(api_host="api-football-v1.p.rapidapi.com",
                             api_key="YOUR_KEY_HERE")

    fixtures = client.fetch_fixtures({"team": 33, "next": 5,
                                      "timezone": "Australia/Perth"})
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .errors import (
    APIDecodeError,
    APINetworkError,
    APISportsError,
    APIStatusError,
    APITimeoutError,
)
from .model.fixtures import QueryResult, decode_fixtures


logger = logging.getLogger(__name__)

__all__ = [
    "APIDecodeError",
    "APINetworkError",
    "APISportsClient",
    "APISportsError",
    "APIStatusError",
    "APITimeoutError",
]


class APISportsClient:
    """
    Small client for the API-FOOTBALL v3 fixtures endpoint on RapidAPI.

    Parameters
    ----------
    api_host : str
        RapidAPI host identifier, sent as `x-rapidapi-host`.
    api_key : str
        RapidAPI key, sent as `x-rapidapi-key`.
    base_url : str, optional
        Base URL for the API.
    timeout : int or float, optional
        Timeout (seconds) for HTTP requests. Default is 5.
    session : requests.Session, optional
        Optional custom session; if not provided, a new Session is created.
    """

    def __init__(
        self,
        api_host: str,
        api_key: str,
        base_url: str = "https://api-football-v1.p.rapidapi.com/v3",
        timeout: Union[int, float] = 5,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_host or not api_key:
            raise ValueError("Both api_host and api_key are required.")

        self.api_host = api_host
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        self.session.headers.update(
            {
                "x-rapidapi-host": self.api_host,
                "x-rapidapi-key": self.api_key,
                "Accept": "application/json",
            }
        )

    # ------------------------------------------------------------------
    # Low-level request helper
    # ------------------------------------------------------------------
    def _request(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        GET an endpoint and return the parsed JSON object.

        Raises
        ------
        APITimeoutError
            The request took longer than `timeout`.
        APINetworkError
            Any other transport failure.
        APIStatusError
            Non-200 status, or an `errors` entry in the payload.
        APIDecodeError
            Body isn't a JSON object.
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("API request: GET %s params=%s", url, params)

        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise APITimeoutError(
                f"request timed out after {self.timeout}s: {endpoint}"
            ) from exc
        except requests.RequestException as exc:
            raise APINetworkError(f"Network error: {exc}") from exc

        if resp.status_code != 200:
            raise APIStatusError(f"unsuccessful request: {_request_uri(resp, url)}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise APIDecodeError(f"Invalid JSON response from {endpoint}") from exc

        if not isinstance(data, dict):
            raise APIDecodeError(f"Unexpected response format for {endpoint}")

        # API-FOOTBALL reports auth / quota problems with a 200 and an
        # `errors` list or dict.
        errors = data.get("errors") or []
        if isinstance(errors, dict):
            errors = list(errors.values())
        if errors:
            raise APIStatusError(f"API returned errors: {errors}")

        return data

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_fixtures(self, params: Mapping[str, Any]) -> QueryResult:
        """
        Fetch fixtures matching `params` and decode them.

        Parameters
        ----------
        params : mapping
            Query parameters for /fixtures, e.g.
            {"team": 33, "last": 5, "status": "FT", "timezone": "Australia/Perth"}.

        Returns
        -------
        tuple of FixtureRecord
            In the order the API returned them; empty when nothing matched.
        """
        data = self._request("/fixtures", params)
        items = data.get("response")
        if items is None:
            items = []
        if not isinstance(items, list):
            raise APIDecodeError(
                f"Unexpected response format for /fixtures: {items!r}"
            )

        result = decode_fixtures(items)
        logger.debug("Decoded %d fixtures for params=%s", len(result), dict(params))
        return result


def _request_uri(resp: requests.Response, fallback: str) -> str:
    """Path plus query string of the request behind `resp`."""
    request = getattr(resp, "request", None)
    path_url = getattr(request, "path_url", None)
    return path_url or fallback
