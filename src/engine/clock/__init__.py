"""
どこで: `engine.clock` サブパッケージ。
何を: 時刻サンプル・針モデル・色スケジュール・フラクタル展開と、それらを束ねる `FractalClock`。
なぜ: UI に依存しない時計エンジンを 1 か所にまとめ、ホスト（pyglet ランナー/テスト）から再利用するため。
"""

from .config import ClockConfig
from .fractal_clock import FractalClock
from .time_source import TimeSample, fixed_time, local_now

__all__ = [
    "ClockConfig",
    "FractalClock",
    "TimeSample",
    "fixed_time",
    "local_now",
]
