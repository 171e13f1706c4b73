"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（dt 測定と実効 FPS の記録）。
なぜ: pyglet のスケジューラから呼ぶだけで「時刻更新 → 計測 → HUD」の順序を統一するため。
"""

from __future__ import annotations

import time
from typing import Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self.frame_count = 0
        self.last_dt = 0.0

    # pyglet.clock.schedule_interval から呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()
            dt = now - self._last_time
            self._last_time = now

        self.frame_count += 1
        self.last_dt = float(dt)
        for t in self._tickables:
            t.tick(dt)

    @property
    def fps(self) -> float:
        """直近フレーム間隔から求めた瞬間 FPS（未計測なら 0）。"""
        return 1.0 / self.last_dt if self.last_dt > 0.0 else 0.0
