"""
どこで: `engine.clock.config`。
何を: ユーザが調整する描画パラメータ `ClockConfig` と、その範囲/既定値/直列化。
なぜ: エンジン本体から設定を分離し、差し替え・永続化・単体テストを容易にするため。

直列化（不透明ブロブ）:
- `to_dict()` は JSON 化可能な dict を返す。色は `#rrggbbaa`。
- `from_dict()` は未知キーを無視し、欠損キーは既定値、範囲外は丸める。
  型が合わない値は既定では既定値に倒し（debug ログ）、`strict=True` なら `ValueError`。
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from common.types import RGBA8
from util.color import to_hex_rgba, to_u8_rgba

logger = logging.getLogger(__name__)

RAINBOW_STYLES = ("gradient", "hue_cycle")
MIN_ZOOM = 1e-3

# 入力範囲（キー操作や復元時はこの範囲に丸める）
RANGES: dict[str, tuple[float, float]] = {
    "zoom": (MIN_ZOOM, 1.0),
    "start_line_width": (0.0, 5.0),
    "depth": (0, 20),
    "length_factor": (0.0, 1.0),
    "luminance_factor": (0.0, 1.0),
    "width_factor": (0.0, 1.0),
}

# 変更されたら色スケジュールを作り直すフィールド
COLOR_FIELDS = (
    "depth",
    "length_factor",
    "luminance_factor",
    "branch_color",
    "rainbow_mode",
    "rainbow_style",
    "start_hsv_color",
    "end_hsv_color",
)

_COLOR_VALUE_FIELDS = ("branch_color", "hand_color", "start_hsv_color", "end_hsv_color")
_BOOL_FIELDS = ("paused", "rainbow_mode", "fullscreen", "transparent_background")


@dataclass
class ClockConfig:
    """フラクタル時計の調整可能パラメータ。

    Parameters
    ----------
    paused : bool
        True の間は時刻を凍結し、再描画を要求しない。
    zoom : float
        表示倍率。短辺方向に `1/zoom` の論理範囲を表示する。
    start_line_width : float
        針の線幅（px）。枝の幅は `start_line_width · width_factor^(d+1)`。
    depth : int
        最大展開深さ（0–20）。
    length_factor : float
        秒針/分針の長さ（= ロータのスケール）。
    luminance_factor : float
        深さごとの輝度減衰率。
    width_factor : float
        深さごとの線幅減衰率。
    branch_color, hand_color : RGBA8
        枝（単色モード）と針の色。
    rainbow_mode : bool
        True で虹色モード。
    rainbow_style : str
        `"gradient"`（開始/終了色の HSV 補間）または `"hue_cycle"`（色相一周）。
    start_hsv_color, end_hsv_color : RGBA8
        gradient スタイルの両端色。
    fullscreen, transparent_background : bool
        ホスト側ウィンドウのトグル（エンジンは参照しない）。
    """

    paused: bool = False
    zoom: float = 0.5
    start_line_width: float = 5.0
    depth: int = 15
    length_factor: float = 0.75
    luminance_factor: float = 1.0
    width_factor: float = 0.75
    branch_color: RGBA8 = (115, 186, 37, 255)
    hand_color: RGBA8 = (255, 255, 255, 255)
    rainbow_mode: bool = True
    rainbow_style: str = "gradient"
    start_hsv_color: RGBA8 = (255, 0, 0, 255)
    end_hsv_color: RGBA8 = (0, 0, 255, 255)
    fullscreen: bool = False
    transparent_background: bool = True

    # ── 派生 ───────────────────
    def color_key(self) -> tuple[Any, ...]:
        """色スケジュールに影響するフィールド値のタプル（キャッシュ鍵）。"""
        return tuple(getattr(self, name) for name in COLOR_FIELDS)

    def normalized(self) -> "ClockConfig":
        """範囲外の値を丸めた新しいインスタンスを返す。"""
        changes: dict[str, Any] = {}
        for name, (lo, hi) in RANGES.items():
            value = getattr(self, name)
            if name == "depth":
                if isinstance(value, float) and not math.isfinite(value):
                    value = _DEFAULTS.depth
                changes[name] = int(min(max(int(value), int(lo)), int(hi)))
                continue
            value = float(value)
            if not math.isfinite(value):
                value = float(getattr(_DEFAULTS, name))
            changes[name] = min(max(value, lo), hi)
        if self.rainbow_style not in RAINBOW_STYLES:
            changes["rainbow_style"] = RAINBOW_STYLES[0]
        for name in _COLOR_VALUE_FIELDS:
            changes[name] = to_u8_rgba(getattr(self, name))
        return replace(self, **changes)

    def copy(self, **changes: Any) -> "ClockConfig":
        return replace(self, **changes)

    # ── 直列化 ───────────────────
    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for name in _COLOR_VALUE_FIELDS:
            data[name] = to_hex_rgba(getattr(self, name))
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, strict: bool = False) -> "ClockConfig":
        if not isinstance(data, Mapping):
            raise ValueError(f"config blob must be a mapping, got {type(data)!r}")
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for name, raw in data.items():
            if name not in known:
                continue
            try:
                values[name] = _coerce_field(name, raw)
            except (TypeError, ValueError) as e:
                if strict:
                    raise ValueError(f"invalid value for {name!r}: {raw!r}") from e
                logger.debug("ignoring invalid config value %s=%r (%s)", name, raw, e)
        return cls(**values).normalized()


def _coerce_field(name: str, raw: Any) -> Any:
    if name in _COLOR_VALUE_FIELDS:
        return to_u8_rgba(raw)
    if name in _BOOL_FIELDS:
        if not isinstance(raw, (bool, int)):
            raise TypeError(f"expected bool, got {type(raw)!r}")
        return bool(raw)
    if name == "depth":
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeError(f"expected int, got {type(raw)!r}")
        if isinstance(raw, float) and not math.isfinite(raw):
            raise ValueError(f"depth must be finite, got {raw!r}")
        return int(raw)
    if name == "rainbow_style":
        if raw not in RAINBOW_STYLES:
            raise ValueError(f"unknown rainbow style {raw!r}")
        return raw
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TypeError(f"expected number, got {type(raw)!r}")
    return float(raw)


_DEFAULTS = ClockConfig()


__all__ = ["ClockConfig", "COLOR_FIELDS", "MIN_ZOOM", "RAINBOW_STYLES", "RANGES"]
