"""
どこで: `engine.clock.hands`。
何を: 時刻サンプルから秒針/分針/時針の 3 本を作り、フラクタル展開用のロータ 2 つを導く。
なぜ: 角度計算を純関数として独立させ、展開エンジンと切り離してテストできるようにするため。

角度の規約:
- 周期 `P` 秒の針は `angle = 2π·((t mod P)/P) − π/2`（Y 下向き画面で 12 時が `−π/2`）。
- 秒針 60s、分針 3600s、時針 43200s。
- 長さは秒針/分針が `length_factor`、時針は 0.5 固定。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from engine.core.geometry import TAU, Rot2, angled

from .time_source import TimeSample

SECOND_PERIOD = 60.0
MINUTE_PERIOD = 3_600.0
HOUR_PERIOD = 43_200.0
HOUR_HAND_LENGTH = 0.5


@dataclass(frozen=True)
class Hand:
    length: float
    angle: float
    vector: tuple[float, float]

    @classmethod
    def from_length_angle(cls, length: float, angle: float) -> "Hand":
        dx, dy = angled(angle)
        return cls(length, angle, (length * dx, length * dy))


def hand_angle(seconds: float, period: float) -> float:
    """経過秒 `seconds` に対する、周期 `period` の針の角度（ラジアン）。"""
    frac = math.fmod(seconds, period) / period
    if frac < 0.0:
        frac += 1.0
    return TAU * frac - TAU / 4.0


def create_hands(sample: TimeSample, length_factor: float) -> tuple[Hand, Hand, Hand]:
    """(秒針, 分針, 時針) を返す。"""
    t = sample.seconds
    return (
        Hand.from_length_angle(length_factor, hand_angle(t, SECOND_PERIOD)),
        Hand.from_length_angle(length_factor, hand_angle(t, MINUTE_PERIOD)),
        Hand.from_length_angle(HOUR_HAND_LENGTH, hand_angle(t, HOUR_PERIOD)),
    )


def hand_rotors(hands: tuple[Hand, Hand, Hand]) -> tuple[Rot2, Rot2]:
    """秒針/分針それぞれのロータ。時針を基準系にとり、半回転ずらして長さでスケールする。"""
    second, minute, hour = hands

    def _rotor(hand: Hand) -> Rot2:
        return Rot2.from_angle(hand.angle - hour.angle + TAU / 2.0).scaled(hand.length)

    return (_rotor(second), _rotor(minute))


__all__ = [
    "Hand",
    "HOUR_HAND_LENGTH",
    "HOUR_PERIOD",
    "MINUTE_PERIOD",
    "SECOND_PERIOD",
    "create_hands",
    "hand_angle",
    "hand_rotors",
]
