"""
Rendering of assembled league snapshots.

Everything here is a pure function of the snapshot it is handed: nothing
in this module talks to the FPL API or touches the cache.
"""

import csv
import io
import json
from datetime import datetime
from typing import Optional

from jinja2 import Environment

from .models import LeagueSnapshot
from .settings import REFRESH_COOLDOWN
from .templates import HOMEPAGE_TEMPLATE, LEADERBOARD_TEMPLATE

FORMATS = ("html", "json", "csv")
DEFAULT_FORMAT = "html"

CONTENT_TYPES = {
    "html": "text/html; charset=utf-8",
    "json": "application/json",
    "csv": "text/csv",
}

CSV_HEADER = ["Rank", "Team Name", "Manager Name", "Total Points", "Gameweek Points", "Overall Rank"]

_env = Environment(autoescape=True)
_env.filters["thousands"] = lambda value: f"{int(value):,}"

_leaderboard_template = _env.from_string(LEADERBOARD_TEMPLATE)
_homepage_template = _env.from_string(HOMEPAGE_TEMPLATE)


def normalize_format(value: Optional[str]) -> str:
    """Lower-case and validate a requested format; unknown values become html."""
    fmt = (value or "").strip().lower()
    return fmt if fmt in FORMATS else DEFAULT_FORMAT


def render(
    snapshot: LeagueSnapshot,
    fmt: str,
    cache_age: Optional[str] = None,
    cooldown: int = REFRESH_COOLDOWN,
) -> bytes:
    fmt = normalize_format(fmt)
    if fmt == "json":
        return render_json(snapshot)
    if fmt == "csv":
        return render_csv(snapshot)
    return render_html(snapshot, cache_age=cache_age, cooldown=cooldown)


def render_json(snapshot: LeagueSnapshot) -> bytes:
    return json.dumps(snapshot.as_dict(), indent=4, ensure_ascii=False).encode("utf-8")


def render_csv(snapshot: LeagueSnapshot) -> bytes:
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for standing in snapshot.standings:
        writer.writerow(
            [
                standing.rank,
                standing.entry_name,
                standing.player_name,
                standing.total_points,
                standing.event_points,
                standing.overall_rank,
            ]
        )
    return buffer.getvalue().encode("utf-8")


def render_html(
    snapshot: LeagueSnapshot,
    cache_age: Optional[str] = None,
    cooldown: int = REFRESH_COOLDOWN,
) -> bytes:
    payload = snapshot.as_dict()
    html = _leaderboard_template.render(
        league=payload["league"],
        standings=snapshot.standings,
        last_updated=payload["last_updated"] or "",
        cache_age=cache_age or "Never",
        error=snapshot.error,
        cooldown=int(cooldown),
    )
    return html.encode("utf-8")


def render_homepage(error: Optional[str] = None) -> bytes:
    """Instructions page with the league form, optionally showing an error."""
    return _homepage_template.render(error=error).encode("utf-8")


def csv_filename(snapshot: LeagueSnapshot, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"fpl_league_{snapshot.league_id}_{now.strftime('%Y-%m-%d_%H%M%S')}.csv"
