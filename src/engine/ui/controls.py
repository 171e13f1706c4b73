"""
どこで: `engine.ui.controls`。
何を: キー名（pyglet の `symbol_string` 表記）から時計設定の変更アクションへの対応表。
なぜ: 設定パネル無しでも主要パラメータを調整できるようにし、pyglet 無しで単体テストするため。

既定の割り当て:
- SPACE: 一時停止/再開
- UP / DOWN: 深さ ±1
- PLUS(EQUAL) / MINUS: ズーム ±ZOOM_STEP
- BRACKETRIGHT / BRACKETLEFT: 長さ係数 ±FACTOR_STEP
- PERIOD / COMMA: 輝度係数 ±FACTOR_STEP
- APOSTROPHE / SEMICOLON: 線幅係数 ±FACTOR_STEP
- R: 虹色モード切替、G: 虹色スタイル切替
- F: フルスクリーン切替、B: 透明背景切替
- BACKSPACE: 既定値へリセット
"""

from __future__ import annotations

import logging
from typing import Callable

from engine.clock.config import RAINBOW_STYLES
from engine.clock.fractal_clock import FractalClock

logger = logging.getLogger(__name__)

ZOOM_STEP = 0.05
FACTOR_STEP = 0.01

Action = Callable[[FractalClock], None]


def _step(name: str, delta: float) -> Action:
    def _apply(clock: FractalClock) -> None:
        current = getattr(clock.config, name)
        clock.update_config(**{name: round(current + delta, 6)})

    return _apply


def _toggle(name: str) -> Action:
    def _apply(clock: FractalClock) -> None:
        clock.update_config(**{name: not getattr(clock.config, name)})

    return _apply


def _cycle_rainbow_style(clock: FractalClock) -> None:
    idx = RAINBOW_STYLES.index(clock.config.rainbow_style)
    clock.update_config(rainbow_style=RAINBOW_STYLES[(idx + 1) % len(RAINBOW_STYLES)])


def _toggle_paused(clock: FractalClock) -> None:
    clock.toggle_paused()


def _reset(clock: FractalClock) -> None:
    clock.reset()


KEY_BINDINGS: dict[str, Action] = {
    "SPACE": _toggle_paused,
    "UP": _step("depth", 1),
    "DOWN": _step("depth", -1),
    "PLUS": _step("zoom", ZOOM_STEP),
    "EQUAL": _step("zoom", ZOOM_STEP),
    "NUM_ADD": _step("zoom", ZOOM_STEP),
    "MINUS": _step("zoom", -ZOOM_STEP),
    "NUM_SUBTRACT": _step("zoom", -ZOOM_STEP),
    "BRACKETRIGHT": _step("length_factor", FACTOR_STEP),
    "BRACKETLEFT": _step("length_factor", -FACTOR_STEP),
    "PERIOD": _step("luminance_factor", FACTOR_STEP),
    "COMMA": _step("luminance_factor", -FACTOR_STEP),
    "APOSTROPHE": _step("width_factor", FACTOR_STEP),
    "SEMICOLON": _step("width_factor", -FACTOR_STEP),
    "R": _toggle("rainbow_mode"),
    "G": _cycle_rainbow_style,
    "F": _toggle("fullscreen"),
    "B": _toggle("transparent_background"),
    "BACKSPACE": _reset,
}


def apply_key(clock: FractalClock, key_name: str) -> bool:
    """キー名に対応するアクションを適用する。割り当てが無ければ False。"""
    action = KEY_BINDINGS.get(key_name.upper())
    if action is None:
        return False
    action(clock)
    logger.debug("key %s applied", key_name)
    return True


__all__ = ["KEY_BINDINGS", "ZOOM_STEP", "FACTOR_STEP", "apply_key"]
