"""Discover API endpoints (genres, trending, search sessions)."""

from __future__ import annotations

from typing import Any, Callable

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from moviescout.application.sessions import SessionRegistry
from moviescout.application.use_cases.loaders import CatalogSnapshot
from moviescout.application.use_cases.search_coordinator import SearchCoordinator
from moviescout.domain.entities.errors import SessionNotFound
from moviescout.interfaces.api.auth import require_identity
from moviescout.interfaces.api.discover.presenter import (
    present_genre_filter,
    present_search,
    present_trending,
)

log = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/discover",
    tags=["discover"],
    dependencies=[Depends(require_identity)],
)


class TermBody(BaseModel):
    term: str = Field(default="", max_length=200)


class GenreBody(BaseModel):
    genre_id: str | None = None


class PageBody(BaseModel):
    page: int = Field(ge=1)


def _sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def _snapshot(request: Request) -> CatalogSnapshot:
    return request.app.state.catalog_snapshot


def _not_found(session_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "session_not_found", "session_id": session_id},
    )


async def _apply(
    request: Request,
    session_id: str,
    intent: Callable[[SearchCoordinator], Any],
    wait: bool,
) -> JSONResponse:
    """Run one intent against a session and return the resulting view."""
    try:
        coordinator = _sessions(request).get(session_id)
    except SessionNotFound:
        log.debug("search_session_missing", session_id=session_id)
        return _not_found(session_id)

    intent(coordinator)
    if wait:
        await coordinator.wait_idle()
    return JSONResponse(present_search(session_id, coordinator.state))


@router.get("/genres")
async def genres(request: Request) -> dict[str, Any]:
    return present_genre_filter(_snapshot(request).genres)


@router.get("/trending")
async def trending(request: Request) -> dict[str, Any]:
    return present_trending(_snapshot(request).trending)


@router.post("/sessions", status_code=201)
async def create_session(request: Request, wait: bool = False) -> dict[str, Any]:
    session_id, coordinator = await _sessions(request).create()
    if wait:
        await coordinator.wait_idle()
    return present_search(session_id, coordinator.state)


@router.get("/sessions/{session_id}")
async def get_session(request: Request, session_id: str, wait: bool = False) -> JSONResponse:
    return await _apply(request, session_id, lambda c: None, wait)


@router.put("/sessions/{session_id}/term")
async def set_term(
    request: Request, session_id: str, body: TermBody, wait: bool = False
) -> JSONResponse:
    return await _apply(request, session_id, lambda c: c.set_term(body.term), wait)


@router.put("/sessions/{session_id}/genre")
async def set_genre(
    request: Request, session_id: str, body: GenreBody, wait: bool = False
) -> JSONResponse:
    return await _apply(request, session_id, lambda c: c.set_genre(body.genre_id), wait)


@router.put("/sessions/{session_id}/page")
async def set_page(
    request: Request, session_id: str, body: PageBody, wait: bool = False
) -> JSONResponse:
    return await _apply(request, session_id, lambda c: c.set_page(body.page), wait)


@router.post("/sessions/{session_id}/page/next")
async def next_page(request: Request, session_id: str, wait: bool = False) -> JSONResponse:
    return await _apply(request, session_id, lambda c: c.next_page(), wait)


@router.post("/sessions/{session_id}/page/prev")
async def prev_page(request: Request, session_id: str, wait: bool = False) -> JSONResponse:
    return await _apply(request, session_id, lambda c: c.prev_page(), wait)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(request: Request, session_id: str) -> Response:
    try:
        await _sessions(request).close(session_id)
    except SessionNotFound:
        return _not_found(session_id)
    return Response(status_code=204)
