"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It owns the viewer state
and is the only place that replaces it.
"""

import asyncio
import logging
from typing import Any

from src.core.config import Config
from src.core.earthquake import normalize_features
from src.core.errors import FeedError
from src.core.state import (
    ViewerState,
    close,
    fetch_failed,
    fetch_succeeded,
    initial_state,
    is_current,
    set_threshold,
    start_fetch,
)
from src.core.static_map import create_map_config
from src.core.view import QuakeView, compose_view
from src.shell.usgs_client import USGSClient
from src.shell.static_map_client import MapImageResult, StaticMapClient


logger = logging.getLogger(__name__)


class Orchestrator:
    """Coordinates loading, filtering and rendering of the earthquake feed.

    This class wires together:
    - USGS client (fetches the feed)
    - Core functions (normalization, state transitions, view composition)
    - Static map client (renders the map image)

    A fetch is split in two halves. begin_fetch() enters LOADING and
    returns a generation number; complete_fetch() or fail_fetch() applies
    the result only if that generation is still current and the
    orchestrator has not been closed.
    """

    def __init__(
        self,
        config: Config,
        usgs_client: USGSClient | None = None,
        static_map_client: StaticMapClient | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            usgs_client: USGS client (created if not provided)
            static_map_client: Static map client (created if not provided)
        """
        self.config = config
        self.usgs_client = usgs_client or USGSClient(
            feed_url=config.feed_url,
            timeout=config.request_timeout_seconds,
        )
        self.static_map_client = static_map_client or StaticMapClient(
            tile_url=config.map.tile_url,
        )
        self._state = initial_state(config.min_magnitude)

    @property
    def state(self) -> ViewerState:
        """Current viewer state."""
        return self._state

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._state.closed

    def begin_fetch(self) -> int:
        """Enter LOADING.

        Returns:
            Generation number to pass to complete_fetch()/fail_fetch()
        """
        self._state = start_fetch(self._state)
        logger.info("Starting feed fetch (generation %d)", self._state.generation)
        return self._state.generation

    def complete_fetch(self, generation: int, geojson: dict[str, Any]) -> bool:
        """Normalize and apply a fetched feed.

        Args:
            generation: Generation returned by begin_fetch()
            geojson: Raw feed payload

        Returns:
            True if the result was applied, False if it was stale
        """
        if not is_current(self._state, generation):
            logger.info("Discarding stale feed result (generation %d)", generation)
            return False

        try:
            quakes = normalize_features(geojson)
        except FeedError as e:
            return self.fail_fetch(generation, str(e))
        except Exception as e:
            logger.exception("Unexpected error normalizing feed")
            return self.fail_fetch(generation, f"Malformed feed data: {e}")

        self._state = fetch_succeeded(self._state, generation, quakes)
        logger.info("Loaded %d earthquakes", len(quakes))
        return True

    def fail_fetch(self, generation: int, message: str) -> bool:
        """Apply a failed fetch.

        Returns:
            True if the failure was applied, False if it was stale
        """
        if not is_current(self._state, generation):
            logger.info("Discarding stale feed failure (generation %d)", generation)
            return False

        self._state = fetch_failed(self._state, generation, message)
        logger.error("Failed to load earthquake feed: %s", self._state.error)
        return True

    def load(self) -> ViewerState:
        """Fetch the feed synchronously and apply the result.

        Returns:
            The state after the fetch resolved
        """
        if self.closed:
            logger.info("Orchestrator closed, skipping feed fetch")
            return self._state

        generation = self.begin_fetch()
        try:
            geojson = self.usgs_client.fetch_feed()
        except FeedError as e:
            self.fail_fetch(generation, str(e))
        else:
            self.complete_fetch(generation, geojson)
        return self._state

    async def load_async(self) -> ViewerState:
        """Fetch the feed without blocking the event loop.

        The HTTP request runs in a worker thread; the state is only
        touched from the event loop once the request has resolved.

        Returns:
            The state after the fetch resolved
        """
        if self.closed:
            logger.info("Orchestrator closed, skipping feed fetch")
            return self._state

        generation = self.begin_fetch()
        try:
            geojson = await asyncio.to_thread(self.usgs_client.fetch_feed)
        except FeedError as e:
            self.fail_fetch(generation, str(e))
        else:
            self.complete_fetch(generation, geojson)
        return self._state

    def set_threshold(self, value: float) -> ViewerState:
        """Set the minimum magnitude filter.

        Raises:
            ValueError: If value is NaN
        """
        self._state = set_threshold(self._state, value)
        logger.debug("Threshold set to %.1f", self._state.threshold)
        return self._state

    def view(self, threshold: float | None = None) -> QuakeView:
        """Compose the current list and map view.

        Args:
            threshold: Minimum magnitude to use instead of the current one
        """
        return compose_view(
            self._state,
            threshold=threshold,
            padding=self.config.map.padding_px,
        )

    def render_map(self, view: QuakeView | None = None) -> MapImageResult:
        """Render the map image for a view (the current one by default)."""
        if view is None:
            view = self.view()

        map_config = create_map_config(
            list(view.markers),
            view.frame,
            self.config.map,
        )
        return self.static_map_client.generate_map(map_config)

    def close(self) -> None:
        """Tear down. Fetches still in flight will not change the state."""
        self._state = close(self._state)
        logger.info("Orchestrator closed")
