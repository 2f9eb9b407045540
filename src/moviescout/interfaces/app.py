"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from moviescout.infrastructure.config import AppConfig
from moviescout.interfaces.api.auth import IdentityGate
from moviescout.interfaces.app_state import AppState
from moviescout.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create the FastAPI app. Configuration only, no resource initialization.

    Resources (HTTP client, trend store, sessions) are created in lifespan().
    """
    app = FastAPI(
        title="MovieScout",
        description="Movie discovery: debounced search, genre filter, trending terms",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config
    app.state.identity_gate = IdentityGate(
        config.auth_api_tokens,
        allow_anonymous=config.environment != "prod",
    )
    if not app.state.identity_gate.enabled:
        log.warning("identity_gate_open", environment=config.environment)

    from moviescout.interfaces.api.discover import router as discover_router

    app.include_router(discover_router, prefix="/api/v1")

    @app.get("/api/v1/healthz")
    async def healthz() -> dict[str, str | int]:
        """Liveness probe; 200 as long as the process is running."""
        snapshot = getattr(app.state, "catalog_snapshot", None)
        sessions = getattr(app.state, "sessions", None)
        return {
            "status": "ok",
            "genres": len(snapshot.genres) if snapshot else 0,
            "sessions": len(sessions) if sessions else 0,
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
