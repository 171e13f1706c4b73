"""
どこで: `api` 入口（高レベル公開 API）。
何を: エンジン `FractalClock`・設定 `ClockConfig`・実行ランナー `run_clock` を再輸出。
なぜ: 利用者が単一名前空間から設定→実行（またはヘッドレス検証）まで完結できるようにするため。

Usage:
    from api import ClockConfig, run_clock

    run_clock(config=ClockConfig(depth=12, rainbow_mode=False), fps=60)

    # ヘッドレス
    from api import FractalClock
    from engine.core.geometry import Rect

    clock = FractalClock(ClockConfig(depth=8))
    shapes = clock.render(Rect.from_min_size((0, 0), (800, 600)))
"""

from engine.clock.config import ClockConfig
from engine.clock.fractal_clock import FractalClock

from .clock import run_clock
from .clock import run_clock as run

__all__ = [
    "run_clock",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    "FractalClock",
    "ClockConfig",
]

# バージョン情報
__version__ = "2026.10"
