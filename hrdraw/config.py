"""Runtime settings sourced from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_DB_URL = "sqlite+pysqlite:///:memory:"
DEFAULT_ANIMATION_TICKS = 21
DEFAULT_ANIMATION_INTERVAL_MS = 80
DEFAULT_FALLBACK_ENCODING = "cp950"


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"Environment variable '{name}' must not be negative")
    return value


@dataclass(frozen=True)
class Settings:
    """Configuration shared by the session store, lottery and CLI.

    Attributes
    ----------
    database_url : str
        SQLAlchemy URL of the session store. The default is an in-memory
        SQLite database that disappears with the process.
    animation_ticks : int
        Number of spinning picks shown before a winner is finalized.
    animation_interval_ms : int
        Delay between two spinning picks, in milliseconds.
    fallback_encoding : str
        Legacy code page tried when file bytes are not valid UTF-8.
    log_level : str
        Logging level name used by the command line.
    """

    database_url: str = DEFAULT_DB_URL
    animation_ticks: int = DEFAULT_ANIMATION_TICKS
    animation_interval_ms: int = DEFAULT_ANIMATION_INTERVAL_MS
    fallback_encoding: str = DEFAULT_FALLBACK_ENCODING
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ`` after loading ``.env``)."""
        if env is None:
            load_dotenv()
            env = os.environ

        return cls(
            database_url=env.get("HRDRAW_DB_URL") or DEFAULT_DB_URL,
            animation_ticks=_int_from_env(
                env, "HRDRAW_ANIMATION_TICKS", DEFAULT_ANIMATION_TICKS
            ),
            animation_interval_ms=_int_from_env(
                env, "HRDRAW_ANIMATION_INTERVAL_MS", DEFAULT_ANIMATION_INTERVAL_MS
            ),
            fallback_encoding=env.get("HRDRAW_FALLBACK_ENCODING") or DEFAULT_FALLBACK_ENCODING,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def animation_interval(self) -> float:
        """Tick interval in seconds."""
        return self.animation_interval_ms / 1000.0


__all__ = ["Settings", "DEFAULT_DB_URL"]
