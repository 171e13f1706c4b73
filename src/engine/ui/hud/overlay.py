"""
どこで: `engine.ui.hud` の HUD 表示モジュール。
何を: ClockSampler のキー/値ペアと一時メッセージを pyglet の Label で左上にオーバーレイ描画する。
なぜ: 時刻・描画線分数・描画時間を即座に可視化し、深さ/ズーム調整のフィードバックにするため。
"""

from __future__ import annotations

import time
from typing import Literal

import pyglet
from pyglet.window import Window

from ...core.tickable import Tickable
from .config import HUDConfig
from .sampler import ClockSampler

MessageLevel = Literal["info", "warn", "error"]

_MESSAGE_COLORS: dict[str, tuple[int, int, int, int]] = {
    "info": (220, 220, 220, 230),
    "warn": (230, 160, 40, 230),
    "error": (230, 60, 60, 230),
}


class OverlayHUD(Tickable):
    """ClockSampler が溜めた文字列を pyglet Label で描画する。"""

    def __init__(
        self,
        window: Window,
        sampler: ClockSampler,
        *,
        config: HUDConfig | None = None,
        font_name: str | None = None,
    ):
        self.window = window
        self.sampler = sampler
        self._config = config or HUDConfig()
        self._font = font_name
        self._color = tuple(self._config.text_color)
        self.font_size = int(self._config.font_size)
        self._labels: dict[str, pyglet.text.Label] = {}
        # (Label, 失効時刻)。Label は show_message で 1 度だけ作る
        self._messages: list[tuple[pyglet.text.Label, float]] = []

    @property
    def line_height(self) -> int:
        return int(self.font_size * 1.8)

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        desired = list(self._config.resolved_order())
        # sampler.data に存在するが order に無いキーは出さない（順序指定を尊重）
        new_labels: dict[str, pyglet.text.Label] = {}
        top = self.window.height - 10
        row = 0
        for key in desired:
            if key not in self.sampler.data:
                continue
            y = top - row * self.line_height
            lab = self._labels.get(key)
            if lab is None:
                lab = pyglet.text.Label(
                    text="",
                    x=10,
                    y=y,
                    anchor_x="left",
                    anchor_y="top",
                    font_name=self._font,
                    font_size=self.font_size,
                    color=self._color,
                )
            else:
                lab.y = y
            lab.text = self.sampler.data[key]
            new_labels[key] = lab
            row += 1
        self._labels = new_labels
        self._expire_messages(time.monotonic())
        self._layout_messages()

    def _expire_messages(self, now: float) -> None:
        alive: list[tuple[pyglet.text.Label, float]] = []
        for lab, expire in self._messages:
            if expire > now:
                alive.append((lab, expire))
            else:
                lab.delete()
        self._messages = alive

    def _layout_messages(self) -> None:
        # 古いものから下に積む
        for row, (lab, _expire) in enumerate(self._messages):
            lab.y = 10 + row * self.line_height

    # -------- draw --------
    def draw(self) -> None:
        for lab in self._labels.values():
            lab.draw()
        for lab, _expire in self._messages:
            lab.draw()

    # ---- public helpers ----
    def show_message(
        self, text: str, level: MessageLevel = "info", timeout_sec: float = 3
    ) -> None:
        expire = time.monotonic() + max(0.1, float(timeout_sec))
        lab = pyglet.text.Label(
            text=text,
            x=10,
            y=10,
            anchor_x="left",
            anchor_y="bottom",
            font_name=self._font,
            font_size=self.font_size,
            color=_MESSAGE_COLORS[level],
        )
        self._messages.append((lab, expire))
        self._layout_messages()


__all__ = ["OverlayHUD"]
