"""Geographic calculations - Pure functions.

This module provides bounding box calculations for earthquake locations.
All functions are pure with no side effects.
"""

from dataclasses import dataclass
from typing import Iterable

from src.core.earthquake import as_number


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


def bounds_for_points(
    points: Iterable[tuple[float | None, float | None]],
) -> BoundingBox | None:
    """Smallest bounding box containing every (latitude, longitude) point.

    Pure function. Points with a missing or non-numeric coordinate are
    skipped.

    Args:
        points: (latitude, longitude) pairs

    Returns:
        BoundingBox, or None if there are no usable points
    """
    latitudes: list[float] = []
    longitudes: list[float] = []

    for latitude, longitude in points:
        if as_number(latitude) is None or as_number(longitude) is None:
            continue
        latitudes.append(latitude)
        longitudes.append(longitude)

    if not latitudes:
        return None

    return BoundingBox(
        min_latitude=min(latitudes),
        max_latitude=max(latitudes),
        min_longitude=min(longitudes),
        max_longitude=max(longitudes),
    )
