"""
Shared fixtures: a scripted stand-in for ``requests.Session``, a manual
clock, and a small FPL league served through them.
"""

import pytest
import requests

from leaderboard.aggregator import Aggregator
from leaderboard.cache import DiskCache
from leaderboard.client import RemoteClient

API_BASE = "https://fpl.test/api"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, raw=None):
        self.status_code = status_code
        self._payload = payload
        self._raw = raw

    def json(self):
        if self._raw is not None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Answers GETs from a ``url -> payload`` table and records every call."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None, allow_redirects=True):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if url not in self.routes:
            return FakeResponse(status_code=404)
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(payload=route)

    def close(self):
        self.closed = True

    def fail_everything(self, exc=None):
        exc = exc or requests.exceptions.ConnectionError("connection refused")
        for url in list(self.routes):
            self.routes[url] = exc


class ManualClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def league_routes(league_id=309812, members=None, events=None, league_name="Office League"):
    """Build FakeSession routes for one league.

    ``members`` is a list of ``(entry_id, entry_name, player_name, total,
    event_points, overall_rank)`` tuples in roster order.
    """
    if members is None:
        members = [
            (1, "Alpha FC", "Ann Example", 50, 10, 120_000),
            (2, "Bravo United", "Ben Example", 80, 25, 4_500),
            (3, "Charlie City", "Cat Example", 65, 12, 33_000),
        ]
    if events is None:
        events = [
            {"id": 1, "is_current": False, "finished": True},
            {"id": 2, "is_current": True, "finished": False},
            {"id": 3, "is_current": False, "finished": False},
        ]

    routes = {
        f"{API_BASE}/bootstrap-static/": {"events": events},
        f"{API_BASE}/leagues-classic/{league_id}/standings/": {
            "league": {"id": league_id, "name": league_name},
            "standings": {
                "results": [
                    # Roster totals deliberately disagree with the entry summaries.
                    {"entry": entry_id, "entry_name": name, "player_name": player, "total": 0}
                    for entry_id, name, player, *_ in members
                ]
            },
        },
    }
    for entry_id, _, _, total, event_points, overall_rank in members:
        routes[f"{API_BASE}/entry/{entry_id}/"] = {
            "summary_overall_points": total,
            "summary_event_points": event_points,
            "summary_overall_rank": overall_rank,
        }
    return routes


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session():
    return FakeSession(league_routes())


@pytest.fixture
def client(session):
    return RemoteClient(API_BASE, timeout=5, session=session)


@pytest.fixture
def cache(tmp_path, clock):
    return DiskCache(tmp_path / "cache", clock=clock)


@pytest.fixture
def aggregator(client, cache):
    return Aggregator(client, cache, ttl=240)
