"""
どこで: `engine.clock.time_source`。
何を: 「ローカル深夜 0 時からの経過秒」を表す `TimeSample` と、その取得/正規化/表示ヘルパ。
なぜ: 針の角度計算を壁時計 API から切り離し、固定時刻でのテストと一時停止を単純にするため。

不変条件:
- 有効なサンプルの `seconds` は常に `[0, 86400)`。
- 非有限値（NaN/inf）や数値化できない入力は例外にせず「無効サンプル」にする。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

SECONDS_PER_DAY = 86_400.0
INVALID_TIME_LABEL = "invalid time"

TimeLike = Union["TimeSample", datetime, float, int]


def normalize_seconds(value: float) -> float:
    """秒数を `[0, 86400)` に畳み込む。

    `86400.0` は 0 に、`-1e-13` のように剰余の丸めで 86400.0 になる値も 0 にする。
    """
    wrapped = math.fmod(value, SECONDS_PER_DAY)
    if wrapped < 0.0:
        wrapped += SECONDS_PER_DAY
    if wrapped >= SECONDS_PER_DAY:
        wrapped = 0.0
    return wrapped


@dataclass(frozen=True)
class TimeSample:
    """深夜 0 時からの経過秒（サブ秒精度）。

    直接生成した場合も `__post_init__` で `[0, 86400)` に畳み込み、非有限値は無効にする。
    """

    seconds: float = 0.0
    valid: bool = True

    def __post_init__(self) -> None:
        sec = 0.0
        valid = bool(self.valid)
        if valid:
            try:
                sec = float(self.seconds)
            except (TypeError, ValueError):
                valid = False
            else:
                if math.isfinite(sec):
                    sec = normalize_seconds(sec)
                else:
                    valid = False
        object.__setattr__(self, "seconds", sec if valid else 0.0)
        object.__setattr__(self, "valid", valid)

    @classmethod
    def invalid(cls) -> "TimeSample":
        return cls(0.0, valid=False)

    @classmethod
    def from_seconds(cls, value: object) -> "TimeSample":
        return cls(value)  # type: ignore[arg-type]

    @classmethod
    def from_datetime(cls, dt: datetime) -> "TimeSample":
        return cls(dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6)

    @classmethod
    def coerce(cls, value: TimeLike) -> "TimeSample":
        """`TimeSample`/`datetime`/秒数のいずれからでもサンプルを作る。"""
        if isinstance(value, TimeSample):
            return value
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        return cls.from_seconds(value)

    def label(self) -> str:
        """`HH:MM:SS.mmm` 形式の表示文字列。無効サンプルは `"invalid time"`。"""
        if not self.valid:
            return INVALID_TIME_LABEL
        total_ms = int(self.seconds * 1000.0)
        hours, rem = divmod(total_ms, 3_600_000)
        minutes, rem = divmod(rem, 60_000)
        secs, millis = divmod(rem, 1000)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def local_now() -> TimeSample:
    """システムのローカル時刻から現在のサンプルを得る。"""
    return TimeSample.from_datetime(datetime.now())


TimeSource = Callable[[], TimeLike]


def fixed_time(value: TimeLike) -> TimeSource:
    """常に同じ時刻を返すタイムソース（テスト/静止画用）。"""
    sample = TimeSample.coerce(value)
    return lambda: sample


__all__ = [
    "SECONDS_PER_DAY",
    "INVALID_TIME_LABEL",
    "TimeLike",
    "TimeSample",
    "TimeSource",
    "fixed_time",
    "local_now",
    "normalize_seconds",
]
