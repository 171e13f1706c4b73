from __future__ import annotations

from pathlib import Path

import pytest

import api.clock as runner
from engine.clock.config import ClockConfig
from engine.clock.fractal_clock import FractalClock
from engine.clock.time_source import fixed_time
from engine.ui.hud.config import HUDConfig
from engine.ui.persistence import save_config


@pytest.mark.io
# What this tests
# - run_clock(init_only=True) returns the engine before importing pyglet / creating a window.
def test_run_clock_init_only_headless(tmp_path: Path):
    """`init_only=True` なら Window を作らずにエンジンを返す。"""
    from api import run_clock

    clock = run_clock(
        init_only=True,
        persist=False,
        config=ClockConfig(depth=4),
        time_source=fixed_time(0.0),
        state_path=tmp_path / "unused.json",
    )
    assert isinstance(clock, FractalClock)
    assert clock.config.depth == 4
    assert clock.time_label == "00:00:00.000"


@pytest.mark.io
# - 保存済み設定 > YAML `clock` 節 > 既定値 の順で初期設定を決める。
def test_initial_config_prefers_saved_state(tmp_path: Path):
    state = tmp_path / "clock.json"
    save_config(ClockConfig(depth=3), state)
    yaml_cfg = {"clock": {"depth": 9}}
    assert runner.resolve_initial_config(yaml_cfg, state_path=state).depth == 3
    assert runner.resolve_initial_config(yaml_cfg, state_path=state, restore=False).depth == 9
    assert runner.resolve_initial_config({}, state_path=tmp_path / "none.json") == ClockConfig()


def test_resolve_fps_priority(reload_settings: pytest.MonkeyPatch):
    assert runner.resolve_fps(30, {"fps": 10}) == 30.0
    assert runner.resolve_fps(None, {"fps": 10}) == 10.0
    assert runner.resolve_fps(None, {"fps": "fast"}) == 60.0
    assert runner.resolve_fps(0, {}) == 1.0
    reload_settings.setenv("FCK_TARGET_FPS", "24")
    from common import settings

    settings.reload_from_env()
    assert runner.resolve_fps(None, {}) == 24.0


def test_resolve_hud_config_priority():
    yaml_cfg = {"hud": {"enabled": False, "font_size": 12}}
    assert runner.resolve_hud_config(yaml_cfg, None, None).enabled is False
    assert runner.resolve_hud_config(yaml_cfg, True, None).enabled is True
    explicit = HUDConfig(font_size=20)
    resolved = runner.resolve_hud_config(yaml_cfg, None, explicit)
    assert resolved.font_size == 20 and resolved.enabled is True
