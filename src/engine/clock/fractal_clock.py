"""
どこで: `engine.clock.fractal_clock`。
何を: フラクタル時計のエンジン本体 `FractalClock`（設定・時刻状態・ノードバッファ・色キャッシュ・診断値）。
なぜ: ホスト（UI ループ）が所有する明示的なインスタンスにまとめ、UI 無しでも検証できるようにするため。

ホストへの公開操作:
- `advance(request_repaint=None, *, now=None)`:
  実行中なら時刻をサンプルし、`request_repaint` があれば呼ぶ。一時停止中は何もしない。
- `render(clip_rect, zoom=None) -> ShapeList`:
  先頭で色スケジュールの再計算要否を確認し（recompute-if-dirty）、針 → 枝の順に線分を返す。
  `line_count`（出力線分数）と `paint_time`（秒）を更新する。

状態遷移:
- Running ⇄ Paused は `config.paused` で表す。Paused 中は時刻を凍結する。
- Running へ戻ると、次の `advance` でライブ時刻から再開する（ストップウォッチではない）。
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from common.settings import get as get_settings
from common.types import RGBA8
from engine.core.geometry import Rect, logical_to_screen

from ..render.types import HANDS_LAYER, Layer, ShapeList
from .colors import compute_depth_colors
from .config import MIN_ZOOM, ClockConfig
from .fractal import NodeBuffers, expand_branches, make_root_nodes
from .hands import Hand, create_hands, hand_rotors
from .time_source import TimeLike, TimeSample, TimeSource, local_now

logger = logging.getLogger(__name__)


class FractalClock:
    """フラクタル時計エンジン。

    Parameters
    ----------
    config : ClockConfig | None
        初期設定。None で既定値。
    time_source : Callable[[], TimeLike] | None
        現在時刻の取得関数。None ならローカル時刻。
    node_capacity : int | None
        ノードバッファの初期容量。None で `common.settings` の `NODE_CAPACITY`。
    """

    def __init__(
        self,
        config: ClockConfig | None = None,
        *,
        time_source: TimeSource | None = None,
        node_capacity: int | None = None,
    ) -> None:
        settings = get_settings()
        self._config = config if config is not None else ClockConfig()
        self._time_source: TimeSource = time_source or local_now
        self._time = TimeSample.coerce(self._time_source())
        capacity = settings.NODE_CAPACITY if node_capacity is None else node_capacity
        self._buffers = NodeBuffers(capacity)
        self._debug_culling = bool(settings.DEBUG_CULLING)

        self._depth_colors: tuple[RGBA8, ...] = ()
        self._colors_key: tuple | None = None
        self._colors_dirty = True

        self.line_count = 0
        self.paint_time = 0.0
        self.level_node_counts: list[int] = []
        self._warned_invalid = False

    # ── 設定 ───────────────────
    @property
    def config(self) -> ClockConfig:
        return self._config

    @config.setter
    def config(self, value: ClockConfig) -> None:
        self._config = value
        self._colors_dirty = True

    def update_config(self, **changes) -> ClockConfig:
        """設定の一部を差し替える。範囲外の値は丸める。"""
        self.config = self._config.copy(**changes).normalized()
        return self._config

    def mark_dirty(self) -> None:
        """次の `render` で色スケジュールを作り直させる。"""
        self._colors_dirty = True

    def reset(self) -> None:
        """既定設定へ戻す。"""
        self.config = ClockConfig()

    # ── 時刻 / 状態遷移 ───────────────────
    @property
    def time(self) -> TimeSample:
        return self._time

    @property
    def time_label(self) -> str:
        return self._time.label()

    @property
    def paused(self) -> bool:
        return bool(self._config.paused)

    def set_paused(self, paused: bool) -> None:
        self._config.paused = bool(paused)

    def toggle_paused(self) -> bool:
        self.set_paused(not self.paused)
        return self.paused

    def advance(
        self,
        request_repaint: Callable[[], None] | None = None,
        *,
        now: TimeLike | None = None,
    ) -> None:
        """1 フレームぶん時刻を進める（一時停止中は何もしない）。"""
        if self._config.paused:
            return
        sample = TimeSample.coerce(now if now is not None else self._time_source())
        if not sample.valid:
            if not self._warned_invalid:
                logger.warning("time source returned an invalid value; rendering suspended")
                self._warned_invalid = True
        else:
            self._warned_invalid = False
        self._time = sample
        if request_repaint is not None:
            request_repaint()

    # ── 色スケジュール ───────────────────
    @property
    def depth_colors(self) -> tuple[RGBA8, ...]:
        """現在の設定に対応する色スケジュール（必要なら再計算）。"""
        self._ensure_colors()
        return self._depth_colors

    def _ensure_colors(self) -> None:
        key = self._config.color_key()
        if self._colors_dirty or key != self._colors_key:
            self._depth_colors = compute_depth_colors(self._config)
            self._colors_key = key
            self._colors_dirty = False
            logger.debug("depth colors recomputed: %d levels", len(self._depth_colors))

    # ── 描画 ───────────────────
    def render(self, clip_rect: Rect, zoom: float | None = None) -> ShapeList:
        """現在の時刻と設定から 1 フレームぶんの線分列を作る。"""
        started = time.perf_counter()
        self._ensure_colors()
        shapes = ShapeList()
        self._buffers.clear()
        self.level_node_counts = []

        if not self._time.valid:
            self.line_count = 0
            self.paint_time = time.perf_counter() - started
            return shapes

        cfg = self._config
        zoom_value = cfg.zoom if zoom is None else zoom
        to_screen = logical_to_screen(clip_rect, max(float(zoom_value), MIN_ZOOM))

        hands = create_hands(self._time, cfg.length_factor)
        shapes.append(self._hand_layer(hands, to_screen, clip_rect))

        self._buffers.reset(make_root_nodes([hands[0].vector, hands[1].vector]))
        for layer in expand_branches(
            self._buffers,
            hand_rotors(hands),
            self._depth_colors,
            start_width=cfg.start_line_width,
            width_factor=cfg.width_factor,
            to_screen=to_screen,
            clip_rect=clip_rect,
            level_counts=self.level_node_counts,
            debug_culling=self._debug_culling,
        ):
            shapes.append(layer)

        self.line_count = len(shapes)
        self.paint_time = time.perf_counter() - started
        return shapes

    def _hand_layer(self, hands: tuple[Hand, Hand, Hand], to_screen, clip_rect: Rect) -> Layer:
        center = to_screen.transform_pos((0.0, 0.0))
        segments = []
        for hand in hands:
            end = to_screen.transform_pos(hand.vector)
            if clip_rect.intersects(Rect.from_two_pos(center, end)):
                segments.append((center, end))
        return Layer(
            segments,
            self._config.hand_color,
            float(self._config.start_line_width),
            name=HANDS_LAYER,
        )


__all__ = ["FractalClock"]
