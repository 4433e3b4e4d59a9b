"""Tests for viewer state transitions - Pure functions.

The state is an immutable value, so every test just compares states.
"""

import pytest

from src.core.earthquake import NormalizedQuake
from src.core.state import (
    FetchStatus,
    ViewerState,
    close,
    fetch_failed,
    fetch_succeeded,
    initial_state,
    is_current,
    set_threshold,
    start_fetch,
)


def make_quake(quake_id: str, magnitude: float | None = 3.0) -> NormalizedQuake:
    return NormalizedQuake(
        id=quake_id,
        magnitude=magnitude,
        place=None,
        time=None,
        url=None,
        longitude=0.0,
        latitude=0.0,
    )


class TestInitialState:
    """Tests for initial_state()."""

    def test_starts_idle_with_no_data(self):
        state = initial_state()

        assert state.status is FetchStatus.IDLE
        assert state.quakes == ()
        assert state.error is None
        assert state.closed is False

    def test_threshold_is_clamped(self):
        assert initial_state(7.5).threshold == 6.0


class TestStartFetch:
    """Tests for start_fetch()."""

    def test_enters_loading(self):
        state = start_fetch(initial_state())

        assert state.status is FetchStatus.LOADING
        assert state.generation == 1

    def test_refresh_from_loaded_bumps_generation(self):
        state = start_fetch(initial_state())
        state = fetch_succeeded(state, 1, [make_quake("a")])

        state = start_fetch(state)

        assert state.status is FetchStatus.LOADING
        assert state.generation == 2

    def test_refresh_from_failed_clears_error(self):
        state = start_fetch(initial_state())
        state = fetch_failed(state, 1, "boom")

        state = start_fetch(state)

        assert state.status is FetchStatus.LOADING
        assert state.error is None

    def test_previous_quakes_hidden_while_loading(self):
        state = start_fetch(initial_state())
        state = fetch_succeeded(state, 1, [make_quake("a")])

        state = start_fetch(state)

        assert state.visible_quakes == ()

    def test_closed_state_does_not_start(self):
        state = close(initial_state())
        assert start_fetch(state) == state


class TestFetchSucceeded:
    """Tests for fetch_succeeded()."""

    def test_loads_quakes(self):
        state = start_fetch(initial_state())
        quakes = [make_quake("a"), make_quake("b")]

        state = fetch_succeeded(state, state.generation, quakes)

        assert state.status is FetchStatus.LOADED
        assert state.quakes == tuple(quakes)
        assert state.visible_quakes == tuple(quakes)

    def test_replaces_instead_of_merging(self):
        state = start_fetch(initial_state())
        state = fetch_succeeded(state, 1, [make_quake("a"), make_quake("b")])
        state = start_fetch(state)

        state = fetch_succeeded(state, 2, [make_quake("c")])

        assert [q.id for q in state.quakes] == ["c"]

    def test_stale_generation_is_ignored(self):
        state = start_fetch(initial_state())
        state = start_fetch(state)

        result = fetch_succeeded(state, 1, [make_quake("old")])

        assert result == state

    def test_ignored_after_close(self):
        state = start_fetch(initial_state())
        state = close(state)

        result = fetch_succeeded(state, 1, [make_quake("a")])

        assert result == state
        assert result.quakes == ()

    def test_ignored_when_not_loading(self):
        state = initial_state()
        assert fetch_succeeded(state, 0, [make_quake("a")]) == state


class TestFetchFailed:
    """Tests for fetch_failed()."""

    def test_records_error(self):
        state = start_fetch(initial_state())

        state = fetch_failed(state, 1, "Network response was not ok")

        assert state.status is FetchStatus.FAILED
        assert state.error == "Network response was not ok"
        assert state.visible_quakes == ()

    def test_clears_previous_quakes(self):
        state = start_fetch(initial_state())
        state = fetch_succeeded(state, 1, [make_quake("a")])
        state = start_fetch(state)

        state = fetch_failed(state, 2, "boom")

        assert state.quakes == ()

    def test_empty_message_gets_default(self):
        state = start_fetch(initial_state())
        assert fetch_failed(state, 1, "").error == "Failed to load"

    def test_stale_failure_is_ignored(self):
        state = start_fetch(start_fetch(initial_state()))
        assert fetch_failed(state, 1, "old") == state


class TestSetThreshold:
    """Tests for set_threshold()."""

    def test_does_not_touch_data(self):
        state = start_fetch(initial_state())
        state = fetch_succeeded(state, 1, [make_quake("a")])

        updated = set_threshold(state, 2.0)

        assert updated.threshold == 2.0
        assert updated.quakes == state.quakes
        assert updated.status is FetchStatus.LOADED

    def test_clamps(self):
        assert set_threshold(initial_state(), -3.0).threshold == 0.0

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            set_threshold(initial_state(), float("nan"))


class TestIsCurrent:
    """Tests for is_current()."""

    def test_current_generation_while_loading(self):
        state = start_fetch(initial_state())
        assert is_current(state, 1) is True

    def test_old_generation(self):
        state = start_fetch(start_fetch(initial_state()))
        assert is_current(state, 1) is False

    def test_closed(self):
        state = close(start_fetch(initial_state()))
        assert is_current(state, 1) is False

    def test_state_is_immutable(self):
        state = ViewerState()
        with pytest.raises(AttributeError):
            state.status = FetchStatus.LOADED
