import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional, Tuple

from .errors import RateLimitedError
from .settings import REFRESH_COOLDOWN

CooldownKey = Tuple[str, int]


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int = 0


class RateLimiter:
    """Per-session, per-league cooldown for forced refreshes.

    ``store`` maps ``(session_id, league_id)`` to the time the last allowed
    refresh started. Any mutable mapping works; the default is a plain dict
    living as long as the process.
    """

    def __init__(
        self,
        cooldown: float = REFRESH_COOLDOWN,
        store: Optional[MutableMapping[CooldownKey, float]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cooldown = cooldown
        self.store = store if store is not None else {}
        self.clock = clock
        self._lock = threading.Lock()

    def check_and_consume(self, session_id: str, league_id: int) -> RateLimitDecision:
        key = (session_id, int(league_id))
        with self._lock:
            now = self.clock()
            self._prune(now)
            started = self.store.get(key)
            if started is not None:
                elapsed = now - started
                if elapsed < self.cooldown:
                    return RateLimitDecision(
                        allowed=False,
                        remaining=max(1, math.ceil(self.cooldown - elapsed)),
                    )
            self.store[key] = now
            return RateLimitDecision(allowed=True)

    def _prune(self, now: float):
        # Caller holds the lock.
        expired = [key for key, started in self.store.items() if now - started >= self.cooldown]
        for key in expired:
            del self.store[key]

    def enforce(self, session_id: str, league_id: int):
        decision = self.check_and_consume(session_id, league_id)
        if not decision.allowed:
            raise RateLimitedError(decision.remaining)
