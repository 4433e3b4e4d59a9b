"""Static Map Client - Imperative Shell.

This module handles generating map images using OpenStreetMap tiles.
All I/O is contained here; markers and framing are computed in the core module.
"""

import io
import logging
from dataclasses import dataclass

from staticmap import StaticMap, CircleMarker

from src.core.static_map import MapConfig, MarkerDescriptor


logger = logging.getLogger(__name__)

DEFAULT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"

# Width of the white ring drawn around each marker
OUTLINE_WIDTH = 1


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class StaticMapClient:
    """Client for generating map images.

    This is part of the imperative shell - it handles I/O (fetching map tiles
    and rendering images).
    """

    def __init__(self, tile_url: str | None = None) -> None:
        """Initialize static map client.

        Args:
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
        """
        self.tile_url = tile_url or DEFAULT_TILE_URL

    def generate_map(self, config: MapConfig) -> MapImageResult:
        """Generate a map image with one circle per marker.

        With a frame, the zoom and center are chosen by staticmap so that
        every marker fits inside the padded image. Without one, the map is
        rendered at the default center and zoom.

        This method performs I/O (fetches map tiles from tile server).

        Args:
            config: Map configuration from core module

        Returns:
            MapImageResult with image bytes or error
        """
        logger.info(
            "Generating map with %d markers (%s)",
            len(config.markers),
            "fit to bounds" if config.frame is not None else "default view",
        )

        try:
            padding_x, padding_y = config.frame.padding if config.frame else (0, 0)

            static_map = StaticMap(
                config.width,
                config.height,
                padding_x=padding_x,
                padding_y=padding_y,
                url_template=config.tile_url or self.tile_url,
            )

            for marker in config.markers:
                self._add_marker(static_map, marker)

            if config.frame is not None and config.markers:
                image = static_map.render()
            else:
                # (lon, lat) order for staticmap
                image = static_map.render(
                    zoom=config.default_zoom,
                    center=[config.default_longitude, config.default_latitude],
                )

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated map image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to generate map: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )

    def _add_marker(self, static_map: StaticMap, marker: MarkerDescriptor) -> None:
        """Add a marker as a colored circle on a white ring."""
        coord = (marker.longitude, marker.latitude)  # (lon, lat) order for staticmap

        # Outline first so it renders behind the circle
        static_map.add_marker(CircleMarker(coord, "white", marker.radius + OUTLINE_WIDTH))
        static_map.add_marker(CircleMarker(coord, marker.color, marker.radius))
