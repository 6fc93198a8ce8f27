"""
FPL Real-Time Leaderboard
=========================
Flask front door for the leaderboard:
- ``/?league=<id>`` renders the ranked standings (html, json or csv)
- ``&refresh=1`` bypasses the cache, subject to a per-session cooldown
- no league id shows the instructions page
"""

import logging
import re
import uuid
from typing import Optional

from flask import Flask, Response, jsonify, request, session

from . import presenter
from .aggregator import Aggregator
from .cache import DiskCache, describe_age
from .client import RemoteClient
from .errors import InvalidInputError, LeaderboardError, RateLimitedError
from .rate_limit import RateLimiter
from .settings import Settings

logger = logging.getLogger(__name__)

INVALID_LEAGUE_MESSAGE = "Invalid league ID. Please enter a numeric league ID."
LEAGUE_ID_PATTERN = re.compile(r"[0-9]+")


def parse_league_id(raw: Optional[str]) -> Optional[int]:
    """Return the league id, ``None`` when absent, or raise ``InvalidInputError``."""
    value = (raw or "").strip()
    if not value:
        return None
    if not LEAGUE_ID_PATTERN.fullmatch(value) or int(value) <= 0:
        raise InvalidInputError(INVALID_LEAGUE_MESSAGE)
    return int(value)


class LeaderboardApp:
    """Flask wrapper around the aggregator, cache and rate limiter."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        aggregator: Optional[Aggregator] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.settings = settings or Settings.from_env()
        if aggregator is None:
            cache = DiskCache(self.settings.cache_dir)
            client = RemoteClient(self.settings.api_base, timeout=self.settings.api_timeout)
            aggregator = Aggregator(client, cache, ttl=self.settings.cache_ttl)
        self.aggregator = aggregator
        self.rate_limiter = rate_limiter or RateLimiter(cooldown=self.settings.refresh_cooldown)

        self.app = Flask(__name__)
        self.app.secret_key = self.settings.secret_key
        self._setup_routes()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _session_id(self) -> str:
        if "sid" not in session:
            session["sid"] = uuid.uuid4().hex
        return session["sid"]

    def _homepage(self, error: Optional[str] = None) -> Response:
        return Response(presenter.render_homepage(error), content_type=presenter.CONTENT_TYPES["html"])

    def _render_snapshot(self, snapshot, fmt: str) -> Response:
        if fmt == "json":
            return Response(presenter.render_json(snapshot), content_type=presenter.CONTENT_TYPES["json"])

        if fmt == "csv":
            response = Response(presenter.render_csv(snapshot), content_type=presenter.CONTENT_TYPES["csv"])
            filename = presenter.csv_filename(snapshot)
            response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
            return response

        cache_age = describe_age(self.aggregator.cache.age(snapshot.league_id))
        body = presenter.render_html(
            snapshot,
            cache_age=cache_age,
            cooldown=self.rate_limiter.cooldown,
        )
        return Response(body, content_type=presenter.CONTENT_TYPES["html"])

    # ------------------------------------------------------------------ #
    # Routes
    # ------------------------------------------------------------------ #
    def _setup_routes(self):
        @self.app.after_request
        def add_header(response):
            response.cache_control.no_cache = True
            response.cache_control.must_revalidate = True
            response.cache_control.no_store = True
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
            return response

        @self.app.route("/")
        def leaderboard():
            fmt = presenter.normalize_format(request.args.get("format"))
            force_refresh = request.args.get("refresh") == "1"

            try:
                league_id = parse_league_id(request.args.get("league"))
            except InvalidInputError as exc:
                return self._homepage(str(exc))
            if league_id is None:
                return self._homepage()

            if force_refresh:
                try:
                    self.rate_limiter.enforce(self._session_id(), league_id)
                except RateLimitedError as exc:
                    logger.info("Refresh of league %s throttled (%ss left)", league_id, exc.remaining)
                    if fmt == "json":
                        body = {"error": True, "message": str(exc), "retry_after": exc.remaining}
                        return jsonify(body), 429
                    return self._homepage(str(exc))

            try:
                snapshot = self.aggregator.assemble(league_id, force_refresh=force_refresh)
            except LeaderboardError as exc:
                logger.warning("Failed to fetch league %s: %s", league_id, exc)
                if fmt == "json":
                    return jsonify({"error": True, "message": str(exc)}), 500
                return self._homepage(f"Failed to fetch league data: {exc}")

            return self._render_snapshot(snapshot, fmt)

        @self.app.route("/healthz")
        def healthz():
            return jsonify({"status": "ok"})

    def run(self, host="0.0.0.0", port: Optional[int] = None, debug: bool = False):
        if port is None:
            port = self.settings.port
        self.app.run(host=host, port=port, debug=debug)
