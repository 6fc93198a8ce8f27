from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional

from .errors import AggregationError


@dataclass
class StandingEntry:
    entry_id: int
    entry_name: str
    player_name: str
    total_points: int
    event_points: int
    overall_rank: int
    rank: Optional[int] = None

    def as_dict(self) -> Dict:
        return {
            "rank": self.rank,
            "entry_id": self.entry_id,
            "entry_name": self.entry_name,
            "player_name": self.player_name,
            "total_points": self.total_points,
            "event_points": self.event_points,
            "overall_rank": self.overall_rank,
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "StandingEntry":
        return cls(
            entry_id=int(payload["entry_id"]),
            entry_name=payload["entry_name"],
            player_name=payload["player_name"],
            total_points=int(payload["total_points"]),
            event_points=int(payload["event_points"]),
            overall_rank=int(payload["overall_rank"]),
            rank=payload.get("rank"),
        )


@dataclass
class LeagueSnapshot:
    """Ranked state of one league at the moment it was assembled.

    ``error`` is only set when the snapshot is served stale after an
    upstream failure; ``cached_at`` is only set once it has been written
    to disk.
    """

    league_id: int
    league_name: str
    current_gameweek: int
    standings: List[StandingEntry] = field(default_factory=list)
    last_updated: Optional[datetime] = None
    cached_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def is_stale(self) -> bool:
        return self.error is not None

    def with_error(self, message: str) -> "LeagueSnapshot":
        return replace(self, error=message)

    def as_dict(self) -> Dict:
        payload = {
            "league": {
                "id": self.league_id,
                "name": self.league_name,
                "current_gameweek": self.current_gameweek,
            },
            "standings": [entry.as_dict() for entry in self.standings],
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }
        if self.cached_at is not None:
            payload["cached_at"] = self.cached_at.isoformat()
        if self.error is not None:
            payload["error"] = self.error
        return payload

    @classmethod
    def from_dict(cls, payload: Dict) -> "LeagueSnapshot":
        try:
            league = payload["league"]
            last_updated = payload.get("last_updated")
            cached_at = payload.get("cached_at")
            return cls(
                league_id=int(league["id"]),
                league_name=league["name"],
                current_gameweek=int(league["current_gameweek"]),
                standings=[StandingEntry.from_dict(item) for item in payload["standings"]],
                last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
                cached_at=datetime.fromisoformat(cached_at) if cached_at else None,
                error=payload.get("error"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AggregationError(f"Malformed snapshot payload: {exc}") from exc

