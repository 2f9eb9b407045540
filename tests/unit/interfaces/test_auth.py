"""Tests for the identity gate."""

from __future__ import annotations

import pytest

from moviescout.interfaces.api.auth import IdentityGate


class TestIdentityGate:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer alpha", True),
            ("bearer beta", True),
            ("Bearer  alpha ", True),
            ("Bearer gamma", False),
            ("Basic alpha", False),
            ("Bearer", False),
            ("", False),
            (None, False),
        ],
    )
    def test_token_check(self, header: str | None, expected: bool) -> None:
        gate = IdentityGate(["alpha", "beta"])
        assert gate.is_signed_in(header) is expected

    def test_closed_without_tokens(self) -> None:
        gate = IdentityGate()
        assert gate.enabled
        assert not gate.is_signed_in("Bearer anything")

    def test_anonymous_when_allowed_and_no_tokens(self) -> None:
        gate = IdentityGate(allow_anonymous=True)
        assert not gate.enabled
        assert gate.is_signed_in(None)

    def test_tokens_override_anonymous(self) -> None:
        gate = IdentityGate(["alpha"], allow_anonymous=True)
        assert gate.enabled
        assert not gate.is_signed_in(None)
