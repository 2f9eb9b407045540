"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from moviescout.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from moviescout.application.sessions import SessionRegistry
    from moviescout.application.use_cases.loaders import CatalogSnapshot
    from moviescout.application.use_cases.trend_recorder import TrendRecorder
    from moviescout.domain.ports import CachePort, CatalogClientPort, TrendStorePort
    from moviescout.interfaces.api.auth import IdentityGate


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Identity gate (set in create_app, before any request)
    identity_gate: IdentityGate

    # Infrastructure
    cache: CachePort | None
    http_client: httpx.AsyncClient

    # Domain Ports
    catalog: CatalogClientPort
    trend_store: TrendStorePort

    # Application Services
    trend_recorder: TrendRecorder
    catalog_snapshot: CatalogSnapshot
    sessions: SessionRegistry
