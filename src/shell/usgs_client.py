"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS GeoJSON summary feed.
All I/O is contained here; normalization is in the core module.
"""

import logging
from typing import Any

import requests

from src.core.config import USGS_FEED_URL
from src.core.errors import MalformedDataError, NetworkError


logger = logging.getLogger(__name__)


class USGSClient:
    """Client for fetching the earthquake feed from USGS.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        feed_url: str = USGS_FEED_URL,
        timeout: float | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            feed_url: GeoJSON feed URL
            timeout: Request timeout in seconds, None to wait indefinitely
        """
        self.feed_url = feed_url
        self.timeout = timeout

    def fetch_feed(self) -> dict[str, Any]:
        """Fetch the GeoJSON feed.

        This method performs HTTP I/O.

        Returns:
            Parsed GeoJSON FeatureCollection

        Raises:
            NetworkError: If the request fails or returns a non-2xx status
            MalformedDataError: If the body is not a JSON object
        """
        logger.info("Fetching earthquake feed from %s", self.feed_url)

        try:
            response = requests.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Feed request failed: %s", e)
            raise NetworkError(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Feed returned invalid JSON: %s", e)
            raise MalformedDataError(f"Invalid JSON in feed response: {e}") from e

        if not isinstance(data, dict):
            raise MalformedDataError(
                f"Expected a GeoJSON object, got {type(data).__name__}"
            )

        logger.info(
            "Fetched %d earthquakes from USGS",
            len(data.get("features") or []),
        )

        return data
