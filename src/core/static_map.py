"""Map visual encoding and configuration - Pure functions.

This module maps magnitudes to marker sizes and colors and assembles the
parameters for a map image. The actual image generation (I/O) is handled
by the shell layer.
"""

import math
from dataclasses import dataclass, field

from src.core.config import MapSettings
from src.core.earthquake import NormalizedQuake, as_number
from src.core.formatter import format_popup
from src.core.geo import BoundingBox


# Smallest marker radius in pixels
MIN_MARKER_RADIUS = 4.0

# Magnitude step that doubles the marker radius
RADIUS_DOUBLING_MAGNITUDE = 1.4

# Color for quakes with unknown magnitude
UNKNOWN_MAGNITUDE_COLOR = "#999"

# (inclusive lower bound, color), checked top to bottom
MAGNITUDE_COLOR_SCALE: tuple[tuple[float, str], ...] = (
    (5.0, "#800026"),
    (4.0, "#BD0026"),
    (3.0, "#E31A1C"),
    (2.0, "#FC4E2A"),
    (1.0, "#FD8D3C"),
)
LOWEST_MAGNITUDE_COLOR = "#FED976"


@dataclass(frozen=True)
class MarkerDescriptor:
    """A circle marker to draw on the map.

    Attributes:
        id: Source quake ID
        latitude: Marker latitude
        longitude: Marker longitude
        radius: Circle radius in pixels
        color: Hex color for the circle
        popup: Popup text for the marker
    """
    id: str
    latitude: float
    longitude: float
    radius: float
    color: str
    popup: str


@dataclass(frozen=True)
class MapFrame:
    """Request to fit the map to a region.

    Attributes:
        bounds: Region that must be visible
        padding: (x, y) padding in pixels kept around the region
    """
    bounds: BoundingBox
    padding: tuple[int, int]


@dataclass(frozen=True)
class MapConfig:
    """Immutable configuration for a map image.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        markers: Circle markers to draw
        frame: Region to fit, or None to keep the default view
        default_latitude: Center latitude used when there is no frame
        default_longitude: Center longitude used when there is no frame
        default_zoom: Zoom level used when there is no frame
        tile_url: Tile URL template, None for the renderer's default
    """
    width: int
    height: int
    markers: tuple[MarkerDescriptor, ...] = field(default_factory=tuple)
    frame: MapFrame | None = None
    default_latitude: float = 20.0
    default_longitude: float = 0.0
    default_zoom: int = 2
    tile_url: str | None = None


def magnitude_to_radius(magnitude: float | None) -> float:
    """Get marker radius for a magnitude.

    Pure function. Every 1.4 magnitude units doubles the radius; the
    result never drops below MIN_MARKER_RADIUS. Magnitudes too large for
    a float radius give math.inf.

    Args:
        magnitude: Earthquake magnitude, None if unknown

    Returns:
        Marker radius in pixels
    """
    magnitude = as_number(magnitude)
    if magnitude is None:
        return MIN_MARKER_RADIUS
    try:
        radius = 2 ** (magnitude / RADIUS_DOUBLING_MAGNITUDE)
    except OverflowError:
        return math.inf
    return max(MIN_MARKER_RADIUS, radius)


def magnitude_to_color(magnitude: float | None) -> str:
    """Get hex color for magnitude visualization.

    Pure function. Six buckets from light (small) to dark (large), plus
    gray for unknown magnitudes and values that are not numbers.

    Args:
        magnitude: Earthquake magnitude, None if unknown

    Returns:
        Hex color string (e.g., "#E31A1C")
    """
    magnitude = as_number(magnitude)
    if magnitude is None:
        return UNKNOWN_MAGNITUDE_COLOR
    for lower_bound, color in MAGNITUDE_COLOR_SCALE:
        if magnitude >= lower_bound:
            return color
    return LOWEST_MAGNITUDE_COLOR


def create_marker(quake: NormalizedQuake) -> MarkerDescriptor | None:
    """Build the map marker for a quake.

    Pure function.

    Args:
        quake: Quake to draw

    Returns:
        MarkerDescriptor, or None if the quake has no location
    """
    if not quake.has_location:
        return None

    return MarkerDescriptor(
        id=quake.id,
        latitude=quake.latitude,
        longitude=quake.longitude,
        radius=magnitude_to_radius(quake.magnitude),
        color=magnitude_to_color(quake.magnitude),
        popup=format_popup(quake),
    )


def create_markers(quakes: list[NormalizedQuake]) -> list[MarkerDescriptor]:
    """Build markers for every quake that has a location, in input order."""
    markers = [create_marker(q) for q in quakes]
    return [m for m in markers if m is not None]


def create_map_config(
    markers: list[MarkerDescriptor],
    frame: MapFrame | None,
    settings: MapSettings,
) -> MapConfig:
    """Create map configuration for a set of markers.

    Pure function.

    Args:
        markers: Markers to draw
        frame: Region to fit, None to use the default view
        settings: Map size, tile and default view settings

    Returns:
        MapConfig with all parameters set
    """
    return MapConfig(
        width=settings.width,
        height=settings.height,
        markers=tuple(markers),
        frame=frame,
        default_latitude=settings.default_latitude,
        default_longitude=settings.default_longitude,
        default_zoom=settings.default_zoom,
        tile_url=settings.tile_url,
    )
