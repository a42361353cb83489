"""
Terminal UI for browsing the team's recent and upcoming fixtures.

Run with:

    fixture-browser

or

    python -m fixture_browser

from a directory holding a .env with RAPIDAPI_HOST and RAPIDAPI_KEY.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler

from .api_sports_client import APISportsClient
from .config import APISportsConfig, ConfigError, load_config
from .menu import KeyEvent, MenuState, ResizeEvent, update
from .model.cache import ResultCache
from .model.queries import FixtureQueryService
from .render import compose
from .terminal import KeyReader, cbreak


logger = logging.getLogger(__name__)

POLL_SECONDS = 0.25


def configure_logging(cfg: APISportsConfig, console: Console) -> None:
    """
    Log to LOG_FILE when set. Otherwise records go through the live
    console, so they are drawn with the display instead of over it.
    """
    level = getattr(logging, cfg.log_level, logging.WARNING)
    if cfg.log_file:
        logging.basicConfig(
            level=level,
            filename=cfg.log_file,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def build_service(cfg: APISportsConfig) -> FixtureQueryService:
    client = APISportsClient(
        api_host=cfg.api_host,
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        timeout=cfg.timeout,
    )
    cache = ResultCache(ttl=cfg.cache_ttl, purge_interval=cfg.cache_purge_interval)
    return FixtureQueryService(
        fetcher=client,
        cache=cache,
        team_id=cfg.team_id,
        timezone=cfg.timezone,
        timestamp_policy=cfg.timestamp_policy,
    )


def run(service: FixtureQueryService, console: Optional[Console] = None) -> None:
    """Event loop: read keys, update state, re-render until the user quits."""
    console = console or Console()
    size = console.size
    state = MenuState(width=size.width)

    with cbreak() as fd, Live(
        compose(state, service),
        console=console,
        auto_refresh=False,
        screen=True,
    ) as live:
        reader = KeyReader(fd)
        while not state.quitting:
            try:
                events = reader.poll(POLL_SECONDS)
            except KeyboardInterrupt:
                events = [KeyEvent("ctrl+c")]

            if console.size != size:
                size = console.size
                events.append(ResizeEvent(size.width))

            if not events:
                continue

            for event in events:
                state = update(state, event)
            if state.quitting:
                break

            try:
                live.update(compose(state, service), refresh=True)
            except KeyboardInterrupt:
                # interrupted mid-fetch
                state = update(state, KeyEvent("ctrl+c"))

    logger.debug("Quit requested")
    console.print(compose(state, service))


def main() -> int:
    try:
        cfg = load_config()
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("%s", exc)
        return 1

    console = Console()
    configure_logging(cfg, console)
    service = build_service(cfg)

    try:
        run(service, console)
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        logger.exception("Render loop failed")
        print("Error running program:", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
