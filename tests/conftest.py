"""共通フィクスチャ。

- 固定時刻の FractalClock（t=0 の一時停止状態など）
- 800x600 のクリップ矩形
- 環境変数設定の再読込
"""

from __future__ import annotations

import os
from typing import Iterator

# ディスプレイの無い環境では pyglet を headless (EGL) で読み込む。
if not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
    os.environ.setdefault("PYGLET_HEADLESS", "1")

import pytest

from common import settings
from engine.clock.config import ClockConfig
from engine.clock.fractal_clock import FractalClock
from engine.clock.time_source import fixed_time
from engine.core.geometry import Rect


@pytest.fixture()
def clip_rect() -> Rect:
    return Rect.from_min_size((0.0, 0.0), (800.0, 600.0))


@pytest.fixture()
def scenario_config() -> ClockConfig:
    """zoom 0.5 / depth 3 / 単色 / 輝度係数 1 / 一時停止。"""
    return ClockConfig(
        paused=True,
        zoom=0.5,
        depth=3,
        length_factor=0.75,
        width_factor=0.75,
        luminance_factor=1.0,
        rainbow_mode=False,
        branch_color=(115, 186, 37, 255),
    )


@pytest.fixture()
def scenario_clock(scenario_config: ClockConfig) -> FractalClock:
    return FractalClock(scenario_config, time_source=fixed_time(0.0))


@pytest.fixture()
def make_clock():
    """`make_clock(t, **config)` で固定時刻の時計を作るファクトリ。"""

    def _make(t: float = 0.0, *, node_capacity: int | None = None, **changes) -> FractalClock:
        return FractalClock(
            ClockConfig(**changes),
            time_source=fixed_time(t),
            node_capacity=node_capacity,
        )

    return _make


@pytest.fixture()
def reload_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """環境変数を差し替えてから `reload_from_env()` する。終了時に既定へ戻す。"""
    yield monkeypatch
    monkeypatch.undo()
    settings.reload_from_env()
