"""
どこで: `engine.core` の更新インターフェース。
何を: 1 フレーム更新 `tick(dt)` を持つ `Tickable` Protocol を定義。
なぜ: 時計ドライバ/HUD サンプラ/オーバーレイなどフレーム駆動のオブジェクトを
      `FrameClock` から一様に呼び出すため。
"""

from typing import Protocol


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """直前のフレームから `dt` 秒経過したものとして状態を更新する。"""
