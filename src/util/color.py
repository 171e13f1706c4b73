"""
どこで: `util.color`。
何を: 色指定の正規化（Hex / RGBA 0–1 / RGBA 0–255 → RGBA8）と sRGB↔線形 RGB の変換。
なぜ: ClockConfig の復元・YAML 設定・HUD が同一の受理規則で色を扱えるようにするため。
"""

from __future__ import annotations

from typing import Sequence

from common.types import RGBA8


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def _clamp_u8(x: float) -> int:
    return max(0, min(255, int(round(x))))


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) （0–1 の float、または 0–255）
    - 整数だけの列は常に 0–255 とみなす（`(1, 0, 0)` は赤ではなくほぼ黒）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(value) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    seq: Sequence[object] = value
    try:
        comps = [float(c) for c in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e

    all_int = all(isinstance(c, int) and not isinstance(c, bool) for c in seq)
    if not all_int and all(0.0 <= c <= 1.0 for c in comps):
        if len(comps) == 3:
            comps.append(1.0)
        r, g, b, a = comps
        return (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))

    if len(comps) == 3:
        comps.append(255.0)
    r8, g8, b8, a8 = (_clamp_u8(c) for c in comps)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object) -> RGBA8:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (_clamp_u8(r * 255), _clamp_u8(g * 255), _clamp_u8(b * 255), _clamp_u8(a * 255))


def to_hex_rgba(color: RGBA8) -> str:
    """RGBA8 を `#rrggbbaa` へ変換する（永続化用）。"""
    r, g, b, a = (_clamp_u8(c) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def srgb_to_linear(c: float) -> float:
    """sRGB 成分（0–1）をガンマ展開して線形値にする。"""
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    """線形値（0–1）を sRGB 成分へ圧縮する。範囲外は丸め込む。"""
    c = _clamp01(c)
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def rgba8_from_linear(r: float, g: float, b: float, a: float) -> RGBA8:
    """線形 RGB + 直線アルファ（0–1）を RGBA8 に変換する。"""
    return (
        _clamp_u8(linear_to_srgb(r) * 255),
        _clamp_u8(linear_to_srgb(g) * 255),
        _clamp_u8(linear_to_srgb(b) * 255),
        _clamp_u8(_clamp01(a) * 255),
    )


def rgba8_to_linear(color: RGBA8) -> tuple[float, float, float, float]:
    """RGBA8 を線形 RGB + 直線アルファ（0–1）へ展開する。"""
    r, g, b, a = color
    return (
        srgb_to_linear(r / 255.0),
        srgb_to_linear(g / 255.0),
        srgb_to_linear(b / 255.0),
        a / 255.0,
    )


__all__ = [
    "parse_hex_color_str",
    "normalize_color",
    "to_u8_rgba",
    "to_hex_rgba",
    "srgb_to_linear",
    "linear_to_srgb",
    "rgba8_from_linear",
    "rgba8_to_linear",
]
