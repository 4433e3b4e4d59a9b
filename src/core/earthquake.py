"""Earthquake data models, normalization and filtering - Pure functions.

This module turns USGS GeoJSON features into flat NormalizedQuake records
and filters them by a minimum magnitude.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.core.errors import MalformedDataError


# Minimum magnitude slider domain
MIN_THRESHOLD = 0.0
MAX_THRESHOLD = 6.0
THRESHOLD_STEP = 0.1


@dataclass(frozen=True)
class NormalizedQuake:
    """Flat, immutable earthquake record.

    Values are copied from the feed verbatim. Any of them may be None when
    the feed omits them; display code must tolerate that.

    Attributes:
        id: USGS event ID (unique within one fetch)
        magnitude: Event magnitude, None when unknown
        place: Human-readable location description
        time: Event time in milliseconds since epoch
        url: USGS event detail URL
        longitude: Epicenter longitude
        latitude: Epicenter latitude
        depth: Depth in kilometers, None when the feed gives no depth
    """
    id: str
    magnitude: float | None
    place: str | None
    time: int | None
    url: str | None
    longitude: float | None
    latitude: float | None
    depth: float | None = None

    @property
    def coordinates(self) -> tuple[float | None, float | None]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    @property
    def has_location(self) -> bool:
        """True if both latitude and longitude are numbers."""
        return as_number(self.latitude) is not None and as_number(self.longitude) is not None

    @property
    def timestamp(self) -> datetime | None:
        """Event time as a UTC datetime, or None if unknown or unusable."""
        millis = as_number(self.time)
        if millis is None:
            return None
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None


def as_number(value: Any) -> float | None:
    """Return value if it is an int or float (bools excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _as_mapping(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedDataError(f"Expected {what} to be an object, got {type(value).__name__}")
    return value


def normalize_feature(feature: dict[str, Any]) -> NormalizedQuake:
    """Normalize a single GeoJSON feature.

    Pure function. No field validation is done: whatever the feed sends
    is carried through, and missing fields become None.

    Args:
        feature: GeoJSON feature dict from the USGS feed

    Returns:
        NormalizedQuake for the feature

    Raises:
        MalformedDataError: If the feature (or its properties/geometry)
            is not a JSON object, or its coordinates are not a list
    """
    feature = _as_mapping(feature, "feature")
    props = _as_mapping(feature.get("properties"), "feature properties")
    geometry = _as_mapping(feature.get("geometry"), "feature geometry")
    coords = geometry.get("coordinates")
    if coords is None:
        coords = []
    elif not isinstance(coords, (list, tuple)):
        raise MalformedDataError(
            f"Expected 'coordinates' to be a list, got {type(coords).__name__}"
        )

    return NormalizedQuake(
        id=feature.get("id"),
        magnitude=props.get("mag"),
        place=props.get("place"),
        time=props.get("time"),
        url=props.get("url"),
        longitude=coords[0] if len(coords) > 0 else None,
        latitude=coords[1] if len(coords) > 1 else None,
        # Depth is optional in GeoJSON positions
        depth=coords[2] if len(coords) > 2 else None,
    )


def normalize_features(geojson: dict[str, Any]) -> list[NormalizedQuake]:
    """Normalize a USGS GeoJSON FeatureCollection.

    Pure function. The result has the same length and order as the
    feed's feature list; an absent feature list yields an empty result.

    Args:
        geojson: Full GeoJSON FeatureCollection from the feed

    Returns:
        List of NormalizedQuake, one per feature

    Raises:
        MalformedDataError: If the payload is not a feature collection
    """
    geojson = _as_mapping(geojson, "feed payload")
    features = geojson.get("features")
    if features is None:
        return []
    if not isinstance(features, list):
        raise MalformedDataError("Expected 'features' to be a list")

    return [normalize_feature(f) for f in features]


def effective_magnitude(value: NormalizedQuake | float | None) -> float:
    """Magnitude used for comparisons.

    An unknown magnitude counts as 0.0, so such events are hidden as soon
    as the threshold is above zero and sort after every event with a
    positive magnitude. A magnitude that is not a number (e.g. the string
    "4.5") is treated the same way. Only comparisons use this value;
    displays keep showing the raw magnitude.

    Args:
        value: A quake or a raw magnitude

    Returns:
        Magnitude as a float, 0.0 when unknown
    """
    if isinstance(value, NormalizedQuake):
        value = value.magnitude
    magnitude = as_number(value)
    if magnitude is None:
        return 0.0
    return magnitude


def filter_by_magnitude(
    quakes: list[NormalizedQuake],
    threshold: float,
) -> list[NormalizedQuake]:
    """Keep quakes whose effective magnitude is at least the threshold.

    Pure function. Input order is preserved.

    Args:
        quakes: Quakes to filter
        threshold: Minimum magnitude (inclusive)

    Returns:
        Filtered list of quakes
    """
    return [q for q in quakes if effective_magnitude(q) >= threshold]


def clamp_threshold(value: float) -> float:
    """Clamp a threshold into the slider domain and snap it to the step.

    Pure function.

    Args:
        value: Requested minimum magnitude

    Returns:
        Threshold in [MIN_THRESHOLD, MAX_THRESHOLD], a multiple of THRESHOLD_STEP

    Raises:
        ValueError: If value is NaN
    """
    value = float(value)
    if math.isnan(value):
        raise ValueError("Threshold must be a number")

    value = min(max(value, MIN_THRESHOLD), MAX_THRESHOLD)
    steps = round(value / THRESHOLD_STEP)
    return round(steps * THRESHOLD_STEP, 1)
