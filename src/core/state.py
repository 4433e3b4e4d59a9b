"""Viewer state and fetch transitions - Pure functions.

The viewer state is an immutable value. Every change goes through one of
the transition functions below, which return a new state.

Fetch lifecycle:

    IDLE -> LOADING -> LOADED
                    -> FAILED

Each start_fetch() bumps the generation. A completion carrying an older
generation, arriving when no fetch is in flight, or arriving after the
viewer was closed is stale and leaves the state untouched.
"""

from dataclasses import dataclass, replace
from enum import Enum

from src.core.earthquake import NormalizedQuake, clamp_threshold


class FetchStatus(str, Enum):
    """Where the viewer is in the fetch lifecycle."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewerState:
    """Immutable viewer state.

    Attributes:
        status: Fetch lifecycle status
        quakes: Normalized quakes from the last successful fetch
        threshold: Minimum magnitude filter
        error: Error message when status is FAILED
        generation: ID of the most recently started fetch
        closed: True once the viewer has been torn down
    """
    status: FetchStatus = FetchStatus.IDLE
    quakes: tuple[NormalizedQuake, ...] = ()
    threshold: float = 0.0
    error: str | None = None
    generation: int = 0
    closed: bool = False

    @property
    def visible_quakes(self) -> tuple[NormalizedQuake, ...]:
        """Quakes that may be shown; empty unless the last fetch succeeded."""
        if self.status is FetchStatus.LOADED:
            return self.quakes
        return ()


def initial_state(threshold: float = 0.0) -> ViewerState:
    """Create an idle state with the given threshold."""
    return ViewerState(threshold=clamp_threshold(threshold))


def is_current(state: ViewerState, generation: int) -> bool:
    """True if a result for this generation may still be applied."""
    return (
        not state.closed
        and state.status is FetchStatus.LOADING
        and state.generation == generation
    )


def start_fetch(state: ViewerState) -> ViewerState:
    """Enter LOADING for a new fetch.

    Allowed from any state so a refresh can re-enter LOADING. Quakes from
    a previous fetch are kept but hidden until the new fetch resolves.
    A closed state is returned unchanged.
    """
    if state.closed:
        return state
    return replace(
        state,
        status=FetchStatus.LOADING,
        error=None,
        generation=state.generation + 1,
    )


def fetch_succeeded(
    state: ViewerState,
    generation: int,
    quakes: list[NormalizedQuake],
) -> ViewerState:
    """Apply a successful fetch, replacing the quake set wholesale."""
    if not is_current(state, generation):
        return state
    return replace(
        state,
        status=FetchStatus.LOADED,
        quakes=tuple(quakes),
        error=None,
    )


def fetch_failed(state: ViewerState, generation: int, message: str) -> ViewerState:
    """Apply a failed fetch. No quakes are available afterwards."""
    if not is_current(state, generation):
        return state
    return replace(
        state,
        status=FetchStatus.FAILED,
        quakes=(),
        error=message or "Failed to load",
    )


def set_threshold(state: ViewerState, value: float) -> ViewerState:
    """Change the minimum magnitude filter.

    Raises:
        ValueError: If value is NaN
    """
    return replace(state, threshold=clamp_threshold(value))


def close(state: ViewerState) -> ViewerState:
    """Mark the viewer torn down; later fetch results are discarded."""
    return replace(state, closed=True)
