"""Display formatting - Pure functions.

This module formats quakes and viewer status into display strings for the
list view, map popups and the command line.
All functions are pure with no side effects.
"""

from src.core.earthquake import NormalizedQuake, as_number


# Shown in place of a missing value
PLACEHOLDER = "—"

LOADING_MESSAGE = "Loading recent earthquakes..."
NO_MATCHES_MESSAGE = "No earthquakes match the filter."
IDLE_MESSAGE = "Earthquake data has not been requested yet."


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude for display, "—" if unknown.

    Values that are not numbers are shown as the feed sent them.
    """
    if magnitude is None:
        return PLACEHOLDER
    if as_number(magnitude) is None:
        return str(magnitude)
    return f"{magnitude:g}"


def format_depth(depth: float | None) -> str:
    """Format a depth in kilometers for display.

    Pure function. Anything that is not a number is shown as "—".
    """
    if as_number(depth) is None:
        return PLACEHOLDER
    return f"{depth:g} km"


def format_time(quake: NormalizedQuake) -> str:
    """Format the event time in UTC, "—" if unknown."""
    timestamp = quake.timestamp
    if timestamp is None:
        return PLACEHOLDER
    return timestamp.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_place(place: str | None) -> str:
    """Format a place name, "—" if missing."""
    return place if place else PLACEHOLDER


def format_popup(quake: NormalizedQuake) -> str:
    """Format the popup text shown for a map marker.

    Pure function.

    Args:
        quake: Quake to describe

    Returns:
        Multi-line popup text
    """
    lines = [
        format_place(quake.place),
        f"Magnitude: {format_magnitude(quake.magnitude)}",
        f"Depth: {format_depth(quake.depth)}",
        f"Time: {format_time(quake)}",
    ]
    if quake.url:
        lines.append(f"More details: {quake.url}")
    return "\n".join(lines)


def format_list_item(quake: NormalizedQuake) -> str:
    """Format a one-line list entry.

    Pure function.

    Args:
        quake: Quake to summarize

    Returns:
        e.g. "M4.2 • 2023-12-19 12:00:00 UTC • 10km NE of San Francisco, CA"
    """
    return (
        f"M{format_magnitude(quake.magnitude)} • {format_time(quake)} • "
        f"{format_place(quake.place)}"
    )


def format_summary(total: int, showing: int, threshold: float) -> str:
    """Format the counts line for the list view."""
    return (
        f"Total quakes (past 24 hrs): {total} • "
        f"Showing: {showing} (min magnitude {threshold:.1f})"
    )


def format_error(message: str | None) -> str:
    """Format the message shown when loading failed."""
    return f"Error loading data: {message or 'Failed to load'}"
