import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .cache import DiskCache
from .client import RemoteClient
from .errors import AggregationError, UpstreamError
from .models import LeagueSnapshot, StandingEntry
from .settings import CACHE_DURATION

logger = logging.getLogger(__name__)

STALE_NOTICE = "Using cached data due to API error: {}"


def current_gameweek(events: List[Dict]) -> int:
    """Pick the active gameweek from the bootstrap ``events`` list.

    First event flagged ``is_current``, else the first one not yet
    ``finished``, else 1. Ties are decided by list order.
    """
    for event in events:
        if event.get("is_current"):
            return int(event["id"])

    for event in events:
        if not event.get("finished"):
            return int(event["id"])

    return 1


def rank_standings(entries: List[StandingEntry]) -> List[StandingEntry]:
    """Order by total points (descending, stable) and assign ranks 1..N."""
    ranked = sorted(entries, key=lambda entry: entry.total_points, reverse=True)
    for idx, entry in enumerate(ranked):
        entry.rank = idx + 1
    return ranked


def _as_int(value: Any, field_name: str) -> int:
    # FPL reports null points/rank for entries that joined this gameweek.
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise AggregationError(f"Unexpected value for {field_name}: {value!r}") from exc


class Aggregator:
    """Assembles ranked league snapshots, reading through the disk cache."""

    def __init__(self, client: RemoteClient, cache: DiskCache, ttl: float = CACHE_DURATION):
        self.client = client
        self.cache = cache
        self.ttl = ttl

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def assemble(self, league_id: int, force_refresh: bool = False) -> LeagueSnapshot:
        if not force_refresh and self.cache.is_fresh(league_id, self.ttl):
            cached = self.cache.read(league_id)
            if cached is not None:
                logger.debug("Cache hit for league %s", league_id)
                return cached

        try:
            snapshot = self._fetch_snapshot(league_id)
        except (UpstreamError, AggregationError) as exc:
            stale = self.cache.read(league_id)
            if stale is None:
                logger.warning("League %s fetch failed with no cache: %s", league_id, exc)
                raise
            logger.warning("Serving stale cache for league %s: %s", league_id, exc)
            return stale.with_error(STALE_NOTICE.format(exc))

        try:
            return self.cache.write(league_id, snapshot)
        except OSError:
            logger.exception("Could not cache league %s; serving it uncached", league_id)
            return snapshot

    # ------------------------------------------------------------------ #
    # Upstream calls
    # ------------------------------------------------------------------ #
    def _fetch_snapshot(self, league_id: int) -> LeagueSnapshot:
        gameweek = self._get_current_gameweek()
        league_data = self.client.fetch(self.client.league_url(league_id))
        roster = self._extract_roster(league_data)

        entries = [self._build_entry(member) for member in roster]

        return LeagueSnapshot(
            league_id=int(league_id),
            league_name=self._extract_league_name(league_data, league_id),
            current_gameweek=gameweek,
            standings=rank_standings(entries),
            last_updated=datetime.now(timezone.utc).replace(microsecond=0),
        )

    def _get_current_gameweek(self) -> int:
        data = self.client.fetch(self.client.bootstrap_url())
        if not isinstance(data, dict):
            raise AggregationError("Invalid bootstrap data received")
        events = data.get("events") or []
        try:
            return current_gameweek(events)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise AggregationError(f"Invalid gameweek data received: {exc}") from exc

    def _extract_roster(self, league_data: Any) -> List[Dict]:
        try:
            roster = league_data["standings"]["results"]
        except (KeyError, TypeError):
            raise AggregationError("Invalid league data received") from None

        if not isinstance(roster, list):
            raise AggregationError("Invalid league data received")
        if not roster:
            raise AggregationError("League has no entries")
        return roster

    def _extract_league_name(self, league_data: Dict, league_id: int) -> str:
        league = league_data.get("league") or {}
        return league.get("name") or f"League {league_id}"

    def _build_entry(self, member: Dict) -> StandingEntry:
        try:
            entry_id = int(member["entry"])
        except (KeyError, TypeError, ValueError):
            raise AggregationError(f"Roster member without an entry id: {member!r}") from None

        # The roster's own total lags behind; the entry summary is authoritative.
        detail: Optional[Dict] = self.client.fetch(self.client.entry_url(entry_id))
        if not isinstance(detail, dict):
            raise AggregationError(f"Invalid entry data received for {entry_id}")

        return StandingEntry(
            entry_id=entry_id,
            entry_name=member.get("entry_name", ""),
            player_name=member.get("player_name", ""),
            total_points=_as_int(detail.get("summary_overall_points"), "summary_overall_points"),
            event_points=_as_int(detail.get("summary_event_points"), "summary_event_points"),
            overall_rank=_as_int(detail.get("summary_overall_rank"), "summary_overall_rank"),
        )
