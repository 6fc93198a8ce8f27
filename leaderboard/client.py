import logging
import time
from typing import Any, Optional

import requests

from .errors import AggregationError, TransportError, UpstreamStatusError
from .settings import API_TIMEOUT, FPL_API_BASE

logger = logging.getLogger(__name__)


class RemoteClient:
    """Thin GET-and-decode wrapper around the public FPL API."""

    HEADERS = {
        "Cache-Control": "no-cache, no-store, must-revalidate",
        "Pragma": "no-cache",
        "Expires": "0",
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    }

    def __init__(
        self,
        api_base: str = FPL_API_BASE,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._last_token = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.session.close()

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #
    def bootstrap_url(self) -> str:
        return f"{self.api_base}/bootstrap-static/"

    def league_url(self, league_id: int) -> str:
        return f"{self.api_base}/leagues-classic/{league_id}/standings/"

    def entry_url(self, entry_id: int) -> str:
        return f"{self.api_base}/entry/{entry_id}/"

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #
    def fetch(self, url: str) -> Any:
        """GET ``url`` and return the decoded JSON body.

        A cache-busting ``_`` parameter is added to every call. Nothing is
        retried: timeouts and connection failures raise ``TransportError``,
        any status other than 200 raises ``UpstreamStatusError``.
        """
        try:
            response = self.session.get(
                url,
                params={"_": self._cache_buster()},
                headers=self.HEADERS,
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.exceptions.Timeout as exc:
            raise TransportError(f"Timed out after {self.timeout}s fetching {url}") from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning("FPL API returned %s for %s", response.status_code, url)
            raise UpstreamStatusError(response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            raise AggregationError(f"Invalid JSON received from {url}") from exc

    def _cache_buster(self) -> int:
        token = int(time.time() * 1000)
        if token <= self._last_token:
            token = self._last_token + 1
        self._last_token = token
        return token
