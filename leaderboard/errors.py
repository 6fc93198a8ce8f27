"""Exceptions raised while fetching and assembling league standings."""


class LeaderboardError(Exception):
    """Base class for every error this package raises."""


class UpstreamError(LeaderboardError):
    """The FPL API could not be used for this request."""


class TransportError(UpstreamError):
    """Network failure or timeout while talking to the FPL API."""


class UpstreamStatusError(UpstreamError):
    """The FPL API answered with a non-200 status."""

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP Error: {status_code}")


class AggregationError(LeaderboardError):
    """A response arrived but lacked the structure we need."""


class InvalidInputError(LeaderboardError):
    """The caller supplied an unusable league id."""


class RateLimitedError(LeaderboardError):
    """A forced refresh was requested inside the cooldown window."""

    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(
            f"Rate limit exceeded. Please wait {remaining} seconds before refreshing again."
        )
