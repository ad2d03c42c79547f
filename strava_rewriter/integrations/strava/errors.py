"""Error types for the Strava API client.

Every failure the client can produce is a StravaError, so callers can decide
between aborting the run and carrying on without knowing about httpx or pydantic.
"""


class StravaError(Exception):
    """Base exception for all Strava client errors."""

    pass


class InvalidArgumentError(StravaError, ValueError):
    """Raised when the caller passes bad input (empty token, inverted date range)."""

    pass


class TransportError(StravaError):
    """Raised when a request never produced a response (network failure, deadline exceeded)."""

    pass


class UpstreamError(StravaError):
    """Raised when Strava answered with anything other than 200 OK."""

    def __init__(self, status_code: int, status: str | None = None):
        self.status_code = status_code
        self.status = status or str(status_code)
        super().__init__(f"request failed with status: {self.status}")


class DecodeError(StravaError):
    """Raised when a response body is not the JSON we expected."""

    pass
