"""Identity gate: the signed-in check performed at the API boundary."""

from __future__ import annotations

import hmac
from typing import Iterable

import structlog
from fastapi import HTTPException, Request, status

log = structlog.get_logger(__name__)

SIGN_IN_MESSAGE = "Sign in to continue."


class IdentityGate:
    """Boolean signed-in/signed-out check against configured bearer tokens.

    With no tokens configured the gate is either open (``allow_anonymous``)
    or permanently closed. No identity data is passed further in.
    """

    def __init__(self, tokens: Iterable[str] = (), *, allow_anonymous: bool = False) -> None:
        self._tokens = tuple(t for t in tokens if t)
        self._allow_anonymous = allow_anonymous and not self._tokens

    @property
    def enabled(self) -> bool:
        return not self._allow_anonymous

    def is_signed_in(self, authorization: str | None) -> bool:
        if self._allow_anonymous:
            return True
        if not authorization:
            return False
        scheme, _, credential = authorization.partition(" ")
        if scheme.lower() != "bearer" or not credential:
            return False
        presented = credential.strip().encode()
        return any(hmac.compare_digest(presented, t.encode()) for t in self._tokens)


async def require_identity(request: Request) -> None:
    """FastAPI dependency: 401 unless the request carries a signed-in identity."""
    gate: IdentityGate = request.app.state.identity_gate
    if gate.is_signed_in(request.headers.get("Authorization")):
        return
    log.info("identity_gate_rejected", path=request.url.path)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "unauthenticated", "message": SIGN_IN_MESSAGE},
        headers={"WWW-Authenticate": "Bearer"},
    )
