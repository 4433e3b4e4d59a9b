"""Tests for display formatting - Pure functions."""

from src.core.earthquake import NormalizedQuake
from src.core.formatter import (
    PLACEHOLDER,
    format_depth,
    format_error,
    format_list_item,
    format_magnitude,
    format_place,
    format_popup,
    format_summary,
    format_time,
)


SAMPLE_QUAKE = NormalizedQuake(
    id="nc75095866",
    magnitude=4.2,
    place="10km NE of San Francisco, CA",
    time=1703001600000,  # 2023-12-19 12:00:00 UTC
    url="https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
    longitude=-122.4194,
    latitude=37.7749,
    depth=10.5,
)

SPARSE_QUAKE = NormalizedQuake(
    id="x",
    magnitude=None,
    place=None,
    time=None,
    url=None,
    longitude=1.0,
    latitude=2.0,
    depth=None,
)


class TestFormatValues:
    """Tests for single-value formatters."""

    def test_magnitude(self):
        assert format_magnitude(4.2) == "4.2"
        assert format_magnitude(1.0) == "1"

    def test_missing_magnitude(self):
        assert format_magnitude(None) == PLACEHOLDER

    def test_non_numeric_magnitude_shown_as_sent(self):
        assert format_magnitude("4.5") == "4.5"
        assert format_magnitude(True) == "True"

    def test_depth(self):
        assert format_depth(10.5) == "10.5 km"
        assert format_depth(0) == "0 km"

    def test_missing_or_non_numeric_depth(self):
        assert format_depth(None) == PLACEHOLDER
        assert format_depth("deep") == PLACEHOLDER

    def test_time(self):
        assert format_time(SAMPLE_QUAKE) == "2023-12-19 12:00:00 UTC"

    def test_missing_time(self):
        assert format_time(SPARSE_QUAKE) == PLACEHOLDER

    def test_place(self):
        assert format_place("Fiji") == "Fiji"
        assert format_place(None) == PLACEHOLDER


class TestFormatPopup:
    """Tests for format_popup()."""

    def test_includes_all_details(self):
        popup = format_popup(SAMPLE_QUAKE)

        assert popup.splitlines() == [
            "10km NE of San Francisco, CA",
            "Magnitude: 4.2",
            "Depth: 10.5 km",
            "Time: 2023-12-19 12:00:00 UTC",
            "More details: https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
        ]

    def test_missing_fields_use_placeholder(self):
        popup = format_popup(SPARSE_QUAKE)

        assert "Magnitude: —" in popup
        assert "Depth: —" in popup
        assert "More details" not in popup


class TestFormatListItem:
    """Tests for format_list_item()."""

    def test_list_item(self):
        assert format_list_item(SAMPLE_QUAKE) == (
            "M4.2 • 2023-12-19 12:00:00 UTC • 10km NE of San Francisco, CA"
        )

    def test_list_item_unknown_magnitude(self):
        assert format_list_item(SPARSE_QUAKE).startswith("M— • ")


class TestStatusText:
    """Tests for summary and error formatting."""

    def test_summary(self):
        assert format_summary(10, 4, 2.5) == (
            "Total quakes (past 24 hrs): 10 • Showing: 4 (min magnitude 2.5)"
        )

    def test_error(self):
        assert format_error("timeout") == "Error loading data: timeout"

    def test_error_without_message(self):
        assert format_error(None) == "Error loading data: Failed to load"
