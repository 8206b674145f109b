"""
Environment & configuration.

Secrets and tunables come from the process environment, with a `.env` file
in the project root loaded for development.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent  # project root “…/”
ENV_FILE = ROOT_DIR / ".env"

load_dotenv(ENV_FILE, override=False)  # no-op if vars already set


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


BOT_TOKEN: str = os.getenv("BOT_TOKEN", "")
ALLOWED_ORIGIN: str = os.getenv(  # where the Mini-App is hosted
    "ALLOWED_ORIGIN", "https://akrpnk.github.io"
)
ADMIN_IDS: FrozenSet[str] = frozenset(
    uid.strip() for uid in os.getenv("ADMIN_IDS", "").split(",") if uid.strip()
)
RATE_LIMIT: str = os.getenv("RATE_LIMIT", "5/second")
RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", True)
INIT_DATA_LIFETIME: int = _env_int("INIT_DATA_LIFETIME", 3600)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class GameRules:
    """Fixed stat tunables shared by decay, feeding and training."""

    max_stat: int = 100
    decay_interval: int = 3600  # seconds per decay step
    decay_rate: int = 1  # points lost per step
    feed_replenish: int = 25
    train_xp_gain: int = 10
    train_happiness_cost: int = 5

    def __post_init__(self):
        if self.max_stat <= 0:
            raise ValueError("max_stat must be positive")
        if self.decay_interval <= 0:
            raise ValueError("decay_interval must be positive")
        for name in ("decay_rate", "feed_replenish", "train_xp_gain", "train_happiness_cost"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_env(cls) -> "GameRules":
        return cls(
            max_stat=_env_int("MAX_STAT", 100),
            decay_interval=_env_int("STAT_DECAY_INTERVAL", 3600),
            decay_rate=_env_int("STAT_DECAY_RATE", 1),
            feed_replenish=_env_int("FEED_REPLENISH", 25),
            train_xp_gain=_env_int("TRAIN_XP_GAIN", 10),
            train_happiness_cost=_env_int("TRAIN_HAPPINESS_COST", 5),
        )


# admin-owned defaults, mutable at runtime through AdminSettings
XP_PER_LEVEL: int = _env_int("XP_PER_LEVEL", 50)
MINTING_ALLOWED: bool = _env_bool("MINTING_ALLOWED", True)
