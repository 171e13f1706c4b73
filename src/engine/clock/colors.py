"""
どこで: `engine.clock.colors`。
何を: 深さごとの枝色（色スケジュール）を事前計算する。単色減衰 / 虹色（グラデーション・色相一周）。
なぜ: 毎フレームの色計算を避け、パラメータ変更時だけ作り直すため（キャッシュは FractalClock 側）。

共通の減衰ループ:
    luminance = 0.7
    for depth_index in range(depth):
        luminance *= luminance_factor
        if luminance < 0.5 / 255: break
        → 1 色追加

このためスケジュール長は常に `depth` 以下で、`luminance_factor == 0` なら長さ 0。
どのモードでも同じ打ち切り規則を使い、モード間で描画される深さを揃える。
"""

from __future__ import annotations

import colorsys

from common.types import RGBA8
from util.color import rgba8_from_linear, rgba8_to_linear

from .config import ClockConfig

START_LUMINANCE = 0.7
MIN_LUMINANCE = 0.5 / 255.0


def decayed_luminances(depth: int, luminance_factor: float) -> list[float]:
    """描画される各深さの輝度（打ち切り後）を返す。"""
    out: list[float] = []
    luminance = START_LUMINANCE
    for _ in range(max(0, int(depth))):
        luminance *= luminance_factor
        if luminance < MIN_LUMINANCE:
            break
        out.append(luminance)
    return out


def solid_color(base: RGBA8, luminance: float) -> RGBA8:
    """基本色の RGB を輝度倍して 8bit に丸める（アルファは維持）。"""
    r, g, b, a = base
    return (
        min(255, max(0, round(r * luminance))),
        min(255, max(0, round(g * luminance))),
        min(255, max(0, round(b * luminance))),
        a,
    )


def hue_cycle_color(depth_index: int, depth: int) -> RGBA8:
    """色相を `360° · depth_index / depth` で一周させる（彩度/明度は最大）。"""
    hue = depth_index / max(depth, 1)
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, 1.0, 1.0)
    return (round(r * 255), round(g * 255), round(b * 255), 255)


def _to_hsva(color: RGBA8) -> tuple[float, float, float, float]:
    # HSV は線形 RGB 上で扱う
    r, g, b, a = rgba8_to_linear(color)
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    return (h, s, v, a)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def gradient_color(start: RGBA8, end: RGBA8, t: float) -> RGBA8:
    """開始/終了色を HSV（+アルファ）で線形補間する。`t` は 0..1。"""
    h0, s0, v0, a0 = _to_hsva(start)
    h1, s1, v1, a1 = _to_hsva(end)
    h = _lerp(h0, h1, t)
    s = _lerp(s0, s1, t)
    v = _lerp(v0, v1, t)
    a = _lerp(a0, a1, t)
    r, g, b = colorsys.hsv_to_rgb(h % 1.0, s, v)
    return rgba8_from_linear(r, g, b, a)


def compute_depth_colors(config: ClockConfig) -> tuple[RGBA8, ...]:
    """`config` から色スケジュールを作る。"""
    depth = int(config.depth)
    colors: list[RGBA8] = []
    for depth_index, luminance in enumerate(decayed_luminances(depth, config.luminance_factor)):
        if not config.rainbow_mode:
            colors.append(solid_color(config.branch_color, luminance))
        elif config.rainbow_style == "hue_cycle":
            colors.append(hue_cycle_color(depth_index, depth))
        else:
            t = depth_index / max(depth, 1)
            colors.append(gradient_color(config.start_hsv_color, config.end_hsv_color, t))
    return tuple(colors)


__all__ = [
    "MIN_LUMINANCE",
    "START_LUMINANCE",
    "compute_depth_colors",
    "decayed_luminances",
    "gradient_color",
    "hue_cycle_color",
    "solid_color",
]
