"""
どこで: `engine.runtime` のフレーム駆動層。
何を: `FractalClock.advance` を毎フレーム呼び、再描画要求の有無をフラグで保持する `ClockDriver`。
なぜ: 「実行中は毎フレーム再描画、一時停止中は設定操作などの外部要因があるときだけ再描画」を
      ウィンドウ側の on_draw から参照できる形にするため。
"""

from __future__ import annotations

from engine.clock.fractal_clock import FractalClock

from ..core.tickable import Tickable


class ClockDriver(Tickable):
    """時計の時刻更新と再描画要求の仲介。"""

    def __init__(self, clock: FractalClock):
        self._clock = clock
        # 初回フレームは必ず描く
        self._repaint = True

    @property
    def clock(self) -> FractalClock:
        return self._clock

    # -------- Tickable interface --------
    def tick(self, dt: float) -> None:
        self._clock.advance(self.request_repaint)

    def request_repaint(self) -> None:
        self._repaint = True

    def consume_repaint(self) -> bool:
        """再描画要求を取り出してクリアする。"""
        pending = self._repaint
        self._repaint = False
        return pending

    @property
    def repaint_pending(self) -> bool:
        return self._repaint


__all__ = ["ClockDriver"]
