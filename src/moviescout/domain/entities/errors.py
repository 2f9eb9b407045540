"""Error taxonomy shared by adapters and use cases."""

from __future__ import annotations


class MovieScoutError(Exception):
    """Base class for all moviescout errors."""


class FetchFailed(MovieScoutError):
    """A catalog or loader request did not produce a usable response.

    Raised for non-2xx statuses, transport errors and undecodable bodies.
    ``status`` is None when no HTTP response was received.
    """

    def __init__(self, message: str, *, path: str = "", status: int | None = None):
        super().__init__(message)
        self.path = path
        self.status = status


class RecordFailed(MovieScoutError):
    """The trend store rejected a lookup or write."""


class SessionNotFound(MovieScoutError):
    """No search session is registered under the given id."""
