"""Tests for the moviescout console entrypoint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from moviescout.interfaces.cli import cli


@pytest.fixture()
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    calls: dict[str, Any] = {}

    def fake_configure_logging(config: Any) -> dict[str, Any]:
        calls["config"] = config
        return {"version": 1}

    def fake_run(app: Any, **kwargs: Any) -> None:
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(cli, "configure_logging", fake_configure_logging)
    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("MOVIESCOUT_LOG_LEVEL", raising=False)
    return calls


class TestStart:
    def test_defaults(self, captured: dict[str, Any]) -> None:
        cli.start([])

        assert captured["host"] == "0.0.0.0"
        assert captured["port"] == 8080
        assert captured["log_config"] == {"version": 1}
        assert captured["app"].title == "MovieScout"

    def test_port_from_env(
        self, captured: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PORT", "9001")
        cli.start([])
        assert captured["port"] == 9001

    def test_flags_override(self, captured: dict[str, Any], tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("search:\n  debounce_ms: 200\n", encoding="utf-8")

        cli.start(
            [
                "--host",
                "127.0.0.1",
                "--port",
                "7000",
                "--config",
                str(config_file),
                "--log-level",
                "DEBUG",
                "--log-format",
                "json",
            ]
        )

        config = captured["config"]
        assert captured["host"] == "127.0.0.1"
        assert captured["port"] == 7000
        assert config.search_debounce_ms == 200
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_invalid_log_level_exits(self, captured: dict[str, Any]) -> None:
        with pytest.raises(SystemExit):
            cli.start(["--log-level", "TRACE"])
