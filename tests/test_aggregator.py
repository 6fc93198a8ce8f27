import errno

import pytest
import requests

from leaderboard.aggregator import Aggregator, current_gameweek, rank_standings
from leaderboard.client import RemoteClient
from leaderboard.errors import AggregationError, TransportError, UpstreamStatusError
from leaderboard.models import StandingEntry

from .conftest import API_BASE, FakeResponse, FakeSession, league_routes

LEAGUE_ID = 309812


def _entry(entry_id, total):
    return StandingEntry(entry_id, f"Team {entry_id}", f"Manager {entry_id}", total, 0, 1)


# ---------------------------------------------------------------------- #
# Gameweek selection
# ---------------------------------------------------------------------- #
def test_current_gameweek_prefers_flagged_current():
    events = [
        {"id": 1, "is_current": False, "finished": False},
        {"id": 2, "is_current": True, "finished": False},
    ]
    assert current_gameweek(events) == 2


def test_current_gameweek_falls_back_to_first_unfinished():
    events = [
        {"id": 1, "is_current": False, "finished": True},
        {"id": 2, "is_current": False, "finished": False},
        {"id": 3, "is_current": False, "finished": False},
    ]
    assert current_gameweek(events) == 2


def test_current_gameweek_defaults_to_one():
    events = [
        {"id": 37, "is_current": False, "finished": True},
        {"id": 38, "is_current": False, "finished": True},
    ]
    assert current_gameweek(events) == 1
    assert current_gameweek([]) == 1


# ---------------------------------------------------------------------- #
# Ranking
# ---------------------------------------------------------------------- #
def test_rank_standings_orders_by_points_descending():
    ranked = rank_standings([_entry(1, 50), _entry(2, 80)])

    assert [(e.entry_id, e.rank, e.total_points) for e in ranked] == [(2, 1, 80), (1, 2, 50)]


def test_rank_standings_keeps_roster_order_on_ties():
    ranked = rank_standings([_entry(1, 10), _entry(2, 30), _entry(3, 10), _entry(4, 30)])

    assert [e.entry_id for e in ranked] == [2, 4, 1, 3]
    assert [e.rank for e in ranked] == [1, 2, 3, 4]


# ---------------------------------------------------------------------- #
# Assembly
# ---------------------------------------------------------------------- #
def test_assemble_merges_and_ranks(aggregator):
    snapshot = aggregator.assemble(LEAGUE_ID)

    assert snapshot.league_id == LEAGUE_ID
    assert snapshot.league_name == "Office League"
    assert snapshot.current_gameweek == 2
    assert [e.entry_name for e in snapshot.standings] == [
        "Bravo United",
        "Charlie City",
        "Alpha FC",
    ]
    assert [e.rank for e in snapshot.standings] == [1, 2, 3]
    assert snapshot.error is None
    assert snapshot.last_updated is not None


def test_assemble_uses_entry_summary_points_not_roster_total(aggregator):
    snapshot = aggregator.assemble(LEAGUE_ID)
    bravo = snapshot.standings[0]

    assert bravo.entry_id == 2
    assert bravo.total_points == 80
    assert bravo.event_points == 25
    assert bravo.overall_rank == 4_500


def test_two_entry_example():
    members = [(1, "A", "Owner A", 50, 5, 10), (2, "B", "Owner B", 80, 8, 20)]
    session = FakeSession(league_routes(league_id=7, members=members))
    aggregator = Aggregator(RemoteClient(API_BASE, session=session), _NullCache())

    snapshot = aggregator.assemble(7)

    assert [(e.entry_name, e.rank, e.total_points) for e in snapshot.standings] == [
        ("B", 1, 80),
        ("A", 2, 50),
    ]


def test_assemble_writes_through_to_cache(aggregator, cache):
    snapshot = aggregator.assemble(LEAGUE_ID)

    assert cache.read(LEAGUE_ID) == snapshot
    assert snapshot.cached_at is not None


def test_fresh_cache_hit_makes_no_remote_calls(aggregator, session, clock):
    first = aggregator.assemble(LEAGUE_ID)
    calls_after_first = len(session.calls)

    clock.advance(100)
    second = aggregator.assemble(LEAGUE_ID)

    assert len(session.calls) == calls_after_first
    assert second.as_dict() == first.as_dict()


def test_expired_cache_triggers_refetch(aggregator, session, clock):
    aggregator.assemble(LEAGUE_ID)
    calls_after_first = len(session.calls)

    clock.advance(240)
    aggregator.assemble(LEAGUE_ID)

    assert len(session.calls) == 2 * calls_after_first


def test_force_refresh_bypasses_fresh_cache(aggregator, session):
    aggregator.assemble(LEAGUE_ID)
    calls_after_first = len(session.calls)

    aggregator.assemble(LEAGUE_ID, force_refresh=True)

    assert len(session.calls) == 2 * calls_after_first


def test_call_sequence_is_bootstrap_league_then_entries(aggregator, session):
    aggregator.assemble(LEAGUE_ID)

    assert [call["url"] for call in session.calls] == [
        f"{API_BASE}/bootstrap-static/",
        f"{API_BASE}/leagues-classic/{LEAGUE_ID}/standings/",
        f"{API_BASE}/entry/1/",
        f"{API_BASE}/entry/2/",
        f"{API_BASE}/entry/3/",
    ]


def test_failed_refresh_serves_stale_cache(aggregator, session):
    fresh = aggregator.assemble(LEAGUE_ID)
    session.fail_everything()

    stale = aggregator.assemble(LEAGUE_ID, force_refresh=True)

    assert stale.standings == fresh.standings
    assert stale.error.startswith("Using cached data due to API error: ")
    assert "connection refused" in stale.error


def test_stale_cache_served_regardless_of_age(aggregator, session, clock):
    aggregator.assemble(LEAGUE_ID)
    clock.advance(60 * 60 * 24)
    session.routes[f"{API_BASE}/entry/3/"] = FakeResponse(status_code=503)

    stale = aggregator.assemble(LEAGUE_ID)

    assert stale.error == "Using cached data due to API error: HTTP Error: 503"
    assert len(stale.standings) == 3


def test_failed_refresh_leaves_cache_untouched(aggregator, session, cache):
    fresh = aggregator.assemble(LEAGUE_ID)
    session.fail_everything()
    aggregator.assemble(LEAGUE_ID, force_refresh=True)

    assert cache.read(LEAGUE_ID) == fresh


def test_failure_without_cache_propagates(aggregator, session):
    session.fail_everything(requests.exceptions.Timeout("read timed out"))

    with pytest.raises(TransportError):
        aggregator.assemble(LEAGUE_ID)


def test_detail_status_error_without_cache_propagates(aggregator, session):
    session.routes[f"{API_BASE}/entry/2/"] = FakeResponse(status_code=500)

    with pytest.raises(UpstreamStatusError):
        aggregator.assemble(LEAGUE_ID)


def test_missing_roster_is_aggregation_error(aggregator, session):
    session.routes[f"{API_BASE}/leagues-classic/{LEAGUE_ID}/standings/"] = {"detail": "Not found."}

    with pytest.raises(AggregationError, match="Invalid league data received"):
        aggregator.assemble(LEAGUE_ID)


def test_empty_roster_is_aggregation_error(aggregator, session):
    session.routes[f"{API_BASE}/leagues-classic/{LEAGUE_ID}/standings/"] = {
        "league": {"name": "Empty"},
        "standings": {"results": []},
    }

    with pytest.raises(AggregationError):
        aggregator.assemble(LEAGUE_ID)


def test_null_summary_fields_count_as_zero(aggregator, session):
    session.routes[f"{API_BASE}/entry/1/"] = {
        "summary_overall_points": None,
        "summary_event_points": None,
        "summary_overall_rank": None,
    }

    snapshot = aggregator.assemble(LEAGUE_ID)
    alpha = snapshot.standings[-1]

    assert (alpha.entry_id, alpha.total_points, alpha.overall_rank) == (1, 0, 0)


def test_non_numeric_summary_is_aggregation_error(aggregator, session):
    session.routes[f"{API_BASE}/entry/1/"] = {"summary_overall_points": "lots"}

    with pytest.raises(AggregationError):
        aggregator.assemble(LEAGUE_ID)


def test_bootstrap_without_events_defaults_gameweek(aggregator, session):
    session.routes[f"{API_BASE}/bootstrap-static/"] = {}

    assert aggregator.assemble(LEAGUE_ID).current_gameweek == 1


class _NullCache:
    """Cache that never holds anything."""

    def is_fresh(self, league_id, ttl):
        return False

    def read(self, league_id):
        return None

    def write(self, league_id, snapshot):
        return snapshot


def test_cache_write_failure_returns_uncached_snapshot(aggregator, cache, monkeypatch):
    def read_only(league_id, snapshot):
        raise PermissionError(errno.EROFS, "Read-only file system")

    monkeypatch.setattr(cache, "write", read_only)

    snapshot = aggregator.assemble(LEAGUE_ID)

    assert [e.rank for e in snapshot.standings] == [1, 2, 3]
    assert snapshot.cached_at is None
    assert snapshot.error is None
