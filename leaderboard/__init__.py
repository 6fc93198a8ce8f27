"""
Core utilities for the FPL league leaderboard.

This package hosts shared logic so the Flask app and the scheduled
fetcher script can reuse the same FPL integration, cache and renderers.
"""

from .aggregator import Aggregator
from .cache import DiskCache
from .client import RemoteClient
from .models import LeagueSnapshot, StandingEntry
from .rate_limit import RateLimiter

__all__ = [
    "Aggregator",
    "DiskCache",
    "LeagueSnapshot",
    "RateLimiter",
    "RemoteClient",
    "StandingEntry",
]
