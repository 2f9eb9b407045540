"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "moviescout",
    "environment": "dev",
    "tmdb": {
        "base_url": "https://api.themoviedb.org/3",
    },
    "http": {
        "timeout_seconds": 30.0,
        "user_agent": "MovieScout/0.1.0",
    },
    "search": {
        "debounce_ms": 500,
        "trending_limit": 5,
        "max_sessions": 1000,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
