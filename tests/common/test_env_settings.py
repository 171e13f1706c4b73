from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_bool, env_float, env_int, env_str
from common.logging import resolve_level, setup_default_logging


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FCK_TEST_INT", raising=False)
    assert env_int("FCK_TEST_INT", 5) == 5
    monkeypatch.setenv("FCK_TEST_INT", " 12 ")
    assert env_int("FCK_TEST_INT", 5) == 12
    monkeypatch.setenv("FCK_TEST_INT", "-3")
    assert env_int("FCK_TEST_INT", 5, min_value=0) == 0
    monkeypatch.setenv("FCK_TEST_INT", "abc")
    assert env_int("FCK_TEST_INT", 5) == 5


def test_env_float_rejects_non_finite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FCK_TEST_FLOAT", "nan")
    assert env_float("FCK_TEST_FLOAT", 1.5) == 1.5
    monkeypatch.setenv("FCK_TEST_FLOAT", "0.25")
    assert env_float("FCK_TEST_FLOAT", 1.5, min_value=1.0) == 1.0


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("off", False), ("maybe", False)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("FCK_TEST_BOOL", raw)
    assert env_bool("FCK_TEST_BOOL", False) is expected


def test_env_str_blank_is_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FCK_TEST_STR", "   ")
    assert env_str("FCK_TEST_STR", "dflt") == "dflt"


def test_settings_reload_from_env(reload_settings: pytest.MonkeyPatch) -> None:
    reload_settings.setenv("FCK_NODE_CAPACITY", "128")
    reload_settings.setenv("FCK_DEBUG_CULLING", "1")
    reload_settings.setenv("FCK_TARGET_FPS", "0.5")
    reload_settings.setenv("FCK_LOG_LEVEL", "debug")
    settings.reload_from_env()
    s = settings.get()
    assert s.NODE_CAPACITY == 128
    assert s.DEBUG_CULLING is True
    assert s.TARGET_FPS == 1.0
    assert s.LOG_LEVEL == "DEBUG"


def test_node_capacity_from_settings_is_used(reload_settings: pytest.MonkeyPatch, make_clock) -> None:
    reload_settings.setenv("FCK_NODE_CAPACITY", "32")
    settings.reload_from_env()
    clock = make_clock(0.0)
    assert clock._buffers.capacity == 32  # type: ignore[attr-defined]


def test_debug_culling_logs_per_depth(
    reload_settings: pytest.MonkeyPatch, make_clock, clip_rect, caplog
) -> None:
    reload_settings.setenv("FCK_DEBUG_CULLING", "1")
    settings.reload_from_env()
    clock = make_clock(0.0, depth=2)
    with caplog.at_level(logging.DEBUG, logger="engine.clock.fractal"):
        clock.render(clip_rect)
    assert sum("segments visible" in r.getMessage() for r in caplog.records) == 2


def test_resolve_level() -> None:
    assert resolve_level(None) == logging.INFO
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(30) == logging.WARNING


def test_setup_default_logging_is_noop_with_existing_handlers(monkeypatch) -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [handler])
    setup_default_logging("DEBUG")
    assert root.handlers == [handler]
