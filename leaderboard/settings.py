import logging
import os
import secrets
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

FPL_API_BASE = "https://fantasy.premierleague.com/api"
CACHE_DURATION = 240  # 4 minutes
API_TIMEOUT = 15
REFRESH_COOLDOWN = 30


def _env_int(name: str, default: int) -> int:
    configured = os.getenv(name)
    if not configured:
        return default
    try:
        return int(configured)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, configured, default)
        return default


@dataclass
class Settings:
    api_base: str = FPL_API_BASE
    cache_dir: str = "cache"
    cache_ttl: int = CACHE_DURATION
    api_timeout: int = API_TIMEOUT
    refresh_cooldown: int = REFRESH_COOLDOWN
    secret_key: Optional[str] = None
    port: int = 5000

    def __post_init__(self):
        if not self.secret_key:
            logger.warning(
                "FLASK_SECRET_KEY is unset; using a per-process key, so sessions and "
                "refresh cooldowns will not survive restarts or span workers."
            )
            self.secret_key = secrets.token_hex(16)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_base=os.getenv("FPL_API_BASE", FPL_API_BASE).rstrip("/"),
            cache_dir=os.getenv("FPL_CACHE_DIR", "cache"),
            cache_ttl=_env_int("FPL_CACHE_TTL", CACHE_DURATION),
            api_timeout=_env_int("FPL_API_TIMEOUT", API_TIMEOUT),
            refresh_cooldown=_env_int("FPL_REFRESH_COOLDOWN", REFRESH_COOLDOWN),
            secret_key=os.getenv("FLASK_SECRET_KEY"),
            port=_env_int("PORT", 5000),
        )
