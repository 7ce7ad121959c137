"""
Environment-driven settings shared by the FastAPI and Flask entrypoints.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

DEFAULT_EXPLICIT_ORIGINS: Sequence[str] = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5000",
    "http://127.0.0.1:5173",
]

# Hosted preview deployments of the dashboard client.
DEFAULT_REGEX_ORIGINS: Sequence[str] = [r"https://(.+\.)?vercel\.app"]

DEFAULT_MONGODB_DB = "airline-analyzer"
TRUTHY = {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: Sequence[str]) -> List[str]:
    """Comma-separated env list; unset or blank values fall back to ``default``."""
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    values = [entry.strip() for entry in raw.split(",") if entry.strip()]
    return values or list(default)


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    try:
        value = int(raw) if raw else default
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUTHY


def get_cors_settings() -> Tuple[List[str], List[str]]:
    """
    Returns the explicit origins and regex-based origins allowed by the server.

    * CORS_ALLOW_ORIGINS controls the explicit list (comma-separated).
    * CORS_ALLOW_ORIGIN_REGEXES controls regex patterns (comma-separated).
    """
    explicit = _env_list("CORS_ALLOW_ORIGINS", DEFAULT_EXPLICIT_ORIGINS)
    regexes = _env_list("CORS_ALLOW_ORIGIN_REGEXES", DEFAULT_REGEX_ORIGINS)
    # '*' belongs in the explicit list, never in a regex.
    regexes = [pattern for pattern in regexes if pattern != "*"]
    return explicit, regexes


def combine_regex_patterns(patterns: Sequence[str]) -> Optional[str]:
    """Join several origin patterns into the single regex CORSMiddleware accepts."""
    if not patterns:
        return None
    return "|".join(f"(?:{pattern})" for pattern in patterns)


@dataclass
class Settings:
    port: int = 8000
    log_level: str = "INFO"
    log_format: str = "json"
    rate_limit_per_minute: int = 120
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_EXPLICIT_ORIGINS))
    cors_origin_regexes: List[str] = field(default_factory=lambda: list(DEFAULT_REGEX_ORIGINS))
    mongodb_uri: Optional[str] = None
    mongodb_db: str = DEFAULT_MONGODB_DB
    mongodb_timeout_ms: int = 5000
    seed_reference_data: bool = True

    @property
    def use_mongodb(self) -> bool:
        return bool(self.mongodb_uri)

    @classmethod
    def from_env(cls) -> "Settings":
        explicit, regexes = get_cors_settings()
        log_format = os.environ.get("LOG_FORMAT", "json").strip().lower()
        return cls(
            port=_env_int("PORT", 8000),
            log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            log_format=log_format if log_format in {"json", "text"} else "json",
            rate_limit_per_minute=_env_int("RATE_LIMIT_PER_MINUTE", 120),
            cors_origins=explicit,
            cors_origin_regexes=regexes,
            mongodb_uri=(os.environ.get("MONGODB_URI") or "").strip() or None,
            mongodb_db=(os.environ.get("MONGODB_DB") or "").strip() or DEFAULT_MONGODB_DB,
            mongodb_timeout_ms=_env_int("MONGODB_TIMEOUT_MS", 5000),
            seed_reference_data=_env_bool("SEED_REFERENCE_DATA", True),
        )
