"""Feed error types.

The viewer collapses every way a fetch can go wrong into a single
"failed to load" state, but the shell still raises distinct types so
logs can tell a network problem from a bad payload.
"""


class FeedError(Exception):
    """Base class for anything that prevents a feed from loading."""


class NetworkError(FeedError):
    """The request failed or the server returned a non-success status."""


class MalformedDataError(FeedError):
    """The response body was not valid JSON or not a feature collection."""
