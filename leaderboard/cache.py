import json
import logging
import os
import tempfile
import time
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from .errors import AggregationError
from .models import LeagueSnapshot

logger = logging.getLogger(__name__)

# mkstemp creates 0600 files.
CACHE_FILE_MODE = 0o644


class DiskCache:
    """One JSON file per league; freshness comes from the file's mtime."""

    def __init__(self, cache_dir, clock: Callable[[], float] = time.time):
        self.cache_dir = Path(cache_dir)
        self.clock = clock

    def ensure_directory(self):
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, league_id: int) -> Path:
        return self.cache_dir / f"fpl_cache_{league_id}.json"

    def exists(self, league_id: int) -> bool:
        return self.path_for(league_id).is_file()

    def read(self, league_id: int) -> Optional[LeagueSnapshot]:
        path = self.path_for(league_id)
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", path, exc)
            return None

        try:
            return LeagueSnapshot.from_dict(payload)
        except AggregationError as exc:
            logger.warning("Ignoring malformed cache file %s: %s", path, exc)
            return None

    def write(self, league_id: int, snapshot: LeagueSnapshot) -> LeagueSnapshot:
        """Replace the league's cache file and return the stamped snapshot."""
        self.ensure_directory()
        stamped = replace(
            snapshot,
            cached_at=datetime.fromtimestamp(self.clock(), tz=timezone.utc),
            error=None,
        )
        target = self.path_for(league_id)

        # Write beside the target then swap, so readers never see half a file.
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=target.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(stamped.as_dict(), handle)
            os.chmod(tmp_name, CACHE_FILE_MODE)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        mtime = self.clock()
        os.utime(target, (mtime, mtime))
        logger.info("Cached league %s (%d entries)", league_id, len(stamped.standings))
        return stamped

    def age(self, league_id: int) -> Optional[float]:
        try:
            modified = self.path_for(league_id).stat().st_mtime
        except OSError:
            return None
        return max(0.0, self.clock() - modified)

    def is_fresh(self, league_id: int, ttl: float) -> bool:
        age = self.age(league_id)
        return age is not None and age < ttl


def describe_age(age: Optional[float]) -> str:
    """Human readable cache age, e.g. ``"3 minutes ago"``."""
    if age is None:
        return "Never"

    seconds = int(age)
    if seconds < 60:
        return f"{seconds} seconds ago"
    if seconds < 3600:
        minutes = seconds // 60
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    hours = seconds // 3600
    return f"{hours} hour{'s' if hours != 1 else ''} ago"
