"""
どこで: `engine.ui.hud` の計測サブモジュール。
何を: FractalClock の診断値（時刻ラベル/線分数/描画時間/状態）と、実効 FPS・プロセスメモリを
      HUD 表示用の文字列辞書として保持する。
なぜ: エンジンに表示責務を持たせず、計測の頻度（毎フレーム/一定間隔）を HUD 側で制御するため。
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from engine.clock.fractal_clock import FractalClock

from ...core.tickable import Tickable
from .config import HUDConfig
from .fields import FPS, LINE, MEM, PAINT, STATE, TIME

logger = logging.getLogger(__name__)


def format_paint_time(seconds: float) -> str:
    """描画時間を `"1.23 ms / paint"` 形式にする。"""
    return f"{seconds * 1000.0:.2f} ms / paint"


def format_bytes(n: int) -> str:
    value = float(n)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024.0 or unit == "GB":
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024.0
    return f"{value:.1f} GB"  # pragma: no cover - 到達しない


class ClockSampler(Tickable):
    """時計の診断値と FPS/MEM を保持する。

    - `data`: HUD のテキスト表示用にフォーマット済みの文字列。
    - `values`: 生値（FPS[Hz], MEM[bytes], LINE[int], PAINT[s]）。
    """

    def __init__(self, clock: FractalClock, config: HUDConfig | None = None):
        self._clock = clock
        self._config = config or HUDConfig()
        self._interval = float(self._config.sample_interval)
        self._acc_time = 0.0
        self._acc_frames = 0
        self.data: dict[str, str] = {}
        self.values: dict[str, float] = {}
        # psutil は必要時のみ遅延 import
        self._proc: Optional[Any] = None
        if self._config.show_mem:
            try:
                import psutil  # type: ignore

                self._proc = psutil.Process(os.getpid())
            except Exception as e:
                logger.debug("psutil unavailable, MEM disabled: %s", e)
                self._proc = None

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        self.refresh_clock_fields()
        self._acc_time += float(dt)
        self._acc_frames += 1
        if self._acc_time < self._interval:
            return
        fps = self._acc_frames / self._acc_time if self._acc_time > 0 else 0.0
        self._acc_time = 0.0
        self._acc_frames = 0
        self.values[FPS] = fps
        self.data[FPS] = f"{fps:.1f}"
        if self._proc is not None:
            try:
                rss = int(self._proc.memory_info().rss)
            except Exception as e:
                logger.debug("memory sampling failed: %s", e)
            else:
                self.values[MEM] = float(rss)
                self.data[MEM] = format_bytes(rss)

    def refresh_clock_fields(self) -> None:
        """時計由来の項目を最新値に更新する（render の直後にも呼ばれる）。"""
        clock = self._clock
        self.data[TIME] = clock.time_label
        self.data[STATE] = "Paused" if clock.paused else "Running"
        self.values[LINE] = float(clock.line_count)
        self.data[LINE] = f"Painted line count: {clock.line_count}"
        self.values[PAINT] = float(clock.paint_time)
        self.data[PAINT] = format_paint_time(clock.paint_time)


__all__ = ["ClockSampler", "format_bytes", "format_paint_time"]
