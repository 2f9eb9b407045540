"""Tests for the structlog/stdlib logging configuration builder."""

from __future__ import annotations

import logging

import structlog

from moviescout.infrastructure.config import AppConfig
from moviescout.infrastructure.logging.setup import (
    _LevelRangeFilter,
    _renderer,
    build_logging_config,
)


def _record(level: int) -> logging.LogRecord:
    return logging.LogRecord("t", level, __file__, 1, "msg", None, None)


class TestBuildLoggingConfig:
    def test_applies_level_except_httpx(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))

        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"

    def test_all_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())

        assert set(cfg["formatters"]) == {"structlog"}
        assert all(h["formatter"] == "structlog" for h in cfg["handlers"].values())

    def test_does_not_mutate_base_config(self) -> None:
        build_logging_config(AppConfig(log_level="ERROR"))
        cfg = build_logging_config(AppConfig(log_level="INFO"))
        assert cfg["loggers"]["uvicorn"]["level"] == "INFO"


class TestRenderer:
    def test_json_in_prod(self) -> None:
        renderer = _renderer(AppConfig(environment="prod"))
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_in_dev(self) -> None:
        renderer = _renderer(AppConfig(environment="dev"))
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)


def test_level_range_filter_splits_streams() -> None:
    stdout_filter = _LevelRangeFilter(max_level=logging.WARNING)
    stderr_filter = _LevelRangeFilter(min_level=logging.ERROR)

    assert stdout_filter.filter(_record(logging.INFO))
    assert not stdout_filter.filter(_record(logging.ERROR))
    assert stderr_filter.filter(_record(logging.ERROR))
    assert not stderr_filter.filter(_record(logging.WARNING))
