"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/背景クリア/透過背景/フルスクリーン切替）と描画コールバック登録を提供。
なぜ: 時計エンジンやレンダラから GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = ClockWindow(1920, 1080, transparent=True)

    def draw_scene():
        renderer.draw()

    win.add_draw_callback(draw_scene)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

from engine.clock.config import ClockConfig

from .geometry import Rect

logger = logging.getLogger(__name__)

# 不透明背景（暗いキャンバス）
CANVAS_RGBA = (10 / 255.0, 10 / 255.0, 10 / 255.0, 1.0)
TRANSPARENT_RGBA = (0.0, 0.0, 0.0, 0.0)


class ClockWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        transparent: bool = True,
        caption: str = "Fractal Clock",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            transparent: True で背景を透過させる（対応プラットフォームのみ）。
        """
        # 線描画を滑らかにするために MSAA を有効化、透過用にアルファを確保
        config = Config(
            double_buffer=True, sample_buffers=1, samples=4, alpha_size=8, vsync=True
        )
        style = getattr(pyglet.window.Window, "WINDOW_STYLE_TRANSPARENT", None)
        kwargs = {"style": style} if (transparent and style is not None) else {}
        super().__init__(
            width=width,
            height=height,
            caption=caption,
            config=config,
            resizable=True,
            **kwargs,
        )
        self._transparent = bool(transparent)
        self._draw_callbacks: list[Callable[[], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = TRANSPARENT_RGBA if self._transparent else CANVAS_RGBA
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    # ---- helpers ----
    def clip_rect(self) -> Rect:
        """描画領域（Y 下向きのピクセル座標）。"""
        return Rect.from_min_size((0.0, 0.0), (float(self.width), float(self.height)))

    def apply_config(self, config: ClockConfig) -> None:
        """フルスクリーン/背景の設定を反映する（変化がある場合のみ）。"""
        self._transparent = bool(config.transparent_background)
        if bool(self.fullscreen) != bool(config.fullscreen):
            try:
                self.set_fullscreen(bool(config.fullscreen))
            except Exception as e:
                logger.debug("fullscreen toggle failed: %s", e, exc_info=True)
