"""View composition - Pure functions.

This module derives everything the list and map displays need from the
viewer state: the filtered set, the list order, markers and the map
frame. It is recomputed in full after every state change.
"""

from dataclasses import dataclass, field

from src.core.earthquake import NormalizedQuake, effective_magnitude, filter_by_magnitude
from src.core.formatter import (
    IDLE_MESSAGE,
    LOADING_MESSAGE,
    NO_MATCHES_MESSAGE,
    format_error,
)
from src.core.geo import bounds_for_points
from src.core.state import FetchStatus, ViewerState
from src.core.static_map import MapFrame, MarkerDescriptor, create_markers


# Padding kept around fitted markers, in pixels
DEFAULT_FRAME_PADDING = 50


@dataclass(frozen=True)
class QuakeView:
    """Everything needed to render the list and the map.

    Attributes:
        status: Fetch lifecycle status
        threshold: Minimum magnitude applied
        total: Number of quakes in the loaded feed
        filtered: Quakes passing the threshold, in feed order
        sorted: Filtered quakes, largest magnitude first
        markers: Map markers for the filtered quakes
        frame: Region to fit the map to, None to leave the map as is
        message: Status text to show instead of data, if any
    """
    status: FetchStatus
    threshold: float
    total: int = 0
    filtered: tuple[NormalizedQuake, ...] = field(default_factory=tuple)
    sorted: tuple[NormalizedQuake, ...] = field(default_factory=tuple)
    markers: tuple[MarkerDescriptor, ...] = field(default_factory=tuple)
    frame: MapFrame | None = None
    message: str | None = None

    @property
    def showing(self) -> int:
        """Number of quakes passing the filter."""
        return len(self.filtered)


def sort_by_magnitude(quakes: list[NormalizedQuake]) -> list[NormalizedQuake]:
    """Order quakes by magnitude, largest first.

    Pure function. Unknown magnitudes compare as 0; equal magnitudes keep
    their input order.
    """
    return sorted(quakes, key=effective_magnitude, reverse=True)


def compute_map_frame(
    quakes: list[NormalizedQuake],
    padding: int = DEFAULT_FRAME_PADDING,
) -> MapFrame | None:
    """Compute the region the map should be fitted to.

    Pure function.

    Args:
        quakes: Quakes that must be visible
        padding: Pixels to keep around the points on each side

    Returns:
        MapFrame, or None if no quake has a location (map is left alone)
    """
    bounds = bounds_for_points(q.coordinates for q in quakes)
    if bounds is None:
        return None
    return MapFrame(bounds=bounds, padding=(padding, padding))


def _status_message(state: ViewerState, showing: int) -> str | None:
    if state.status is FetchStatus.IDLE:
        return IDLE_MESSAGE
    if state.status is FetchStatus.LOADING:
        return LOADING_MESSAGE
    if state.status is FetchStatus.FAILED:
        return format_error(state.error)
    if showing == 0:
        return NO_MATCHES_MESSAGE
    return None


def compose_view(
    state: ViewerState,
    threshold: float | None = None,
    padding: int = DEFAULT_FRAME_PADDING,
) -> QuakeView:
    """Derive the list and map view from the viewer state.

    Pure function.

    Args:
        state: Current viewer state
        threshold: Minimum magnitude to apply instead of the state's own
        padding: Map frame padding in pixels

    Returns:
        QuakeView for the state
    """
    if threshold is None:
        threshold = state.threshold

    quakes = list(state.visible_quakes)
    filtered = filter_by_magnitude(quakes, threshold)

    return QuakeView(
        status=state.status,
        threshold=threshold,
        total=len(quakes),
        filtered=tuple(filtered),
        sorted=tuple(sort_by_magnitude(filtered)),
        markers=tuple(create_markers(filtered)),
        frame=compute_map_frame(filtered, padding),
        message=_status_message(state, len(filtered)),
    )
