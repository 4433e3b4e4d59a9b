"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Feed normalization and magnitude filtering
- Visual encoding (marker radius and color)
- View composition (list order, map framing)
- Display formatting
- Viewer state transitions

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import (
    NormalizedQuake,
    as_number,
    clamp_threshold,
    effective_magnitude,
    filter_by_magnitude,
    normalize_features,
)
from src.core.errors import FeedError, MalformedDataError, NetworkError
from src.core.static_map import magnitude_to_color, magnitude_to_radius
from src.core.state import FetchStatus, ViewerState
from src.core.view import QuakeView, compose_view, compute_map_frame, sort_by_magnitude

__all__ = [
    # Earthquake
    "NormalizedQuake",
    "normalize_features",
    "as_number",
    "effective_magnitude",
    "filter_by_magnitude",
    "clamp_threshold",
    # Errors
    "FeedError",
    "NetworkError",
    "MalformedDataError",
    # Visual encoding
    "magnitude_to_radius",
    "magnitude_to_color",
    # State
    "FetchStatus",
    "ViewerState",
    # View
    "QuakeView",
    "compose_view",
    "compute_map_frame",
    "sort_by_magnitude",
]
