"""
2D 幾何プリミティブ（フラクタル時計の基盤モジュール）

本モジュールは、時計エンジン全体で使う最小限の 2D 数学を提供する。状態は持たない。

座標系:
- 論理空間は原点中心。時計の針はおおむね半径 1 の円内に収まる。
- 画面空間はピクセル単位で **Y 下向き**（左上原点）。角度 0 は +X 方向で、
  角度が増えると時計回りに回る。よって `-π/2` が「12 時」を指す。

提供する型:
- `Rot2`: 回転とスケールを合成した変換（複素数の乗算と同じ）。`(c, s) = length·(cos θ, sin θ)`。
  フラクタル展開では「ロータ」として枝の向きに繰り返し適用する。
- `Rect`: 軸平行矩形。クリップ矩形や線分のバウンディングボックス判定に使う。
- `RectTransform`: ある矩形を別の矩形へ写す線形写像（論理空間 → 画面ピクセル）。

配列 API:
- `Rot2.as_matrix` / `RectTransform.transform_points` / `Rect.intersects_boxes` で
  `(N, 2)` の float32 配列を一括で処理する。1 世代ぶんのノードをまとめて変換するための経路。

使用例:
    rot = Rot2.from_angle(math.pi / 2).scaled(0.5)
    rot.apply((1.0, 0.0))          # -> (0.0, 0.5)
    clip = Rect.from_min_size((0, 0), (800, 600))
    to_screen = RectTransform.from_to(
        Rect.from_center_size((0, 0), clip.square_proportions() / zoom), clip
    )
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from common.types import Vec2

TAU = 2.0 * math.pi


def angled(angle: float) -> Vec2:
    """長さ 1 で角度 `angle`（ラジアン）の方向ベクトルを返す。"""
    return (math.cos(angle), math.sin(angle))


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


@dataclass(frozen=True)
class Rot2:
    """回転 + 一様スケールの合成変換。

    - `c`, `s` はそれぞれ `length·cos θ`, `length·sin θ`。
    - `apply((x, y)) = (c·x − s·y, s·x + c·y)`。
    - 合成は `a * b`（先に `b`、次に `a`）。スカラー倍は `rot.scaled(k)`。
    """

    c: float = 1.0
    s: float = 0.0

    @classmethod
    def identity(cls) -> "Rot2":
        return cls(1.0, 0.0)

    @classmethod
    def from_angle(cls, angle: float) -> "Rot2":
        return cls(math.cos(angle), math.sin(angle))

    def scaled(self, factor: float) -> "Rot2":
        return Rot2(self.c * factor, self.s * factor)

    def __mul__(self, other: "Rot2") -> "Rot2":
        if not isinstance(other, Rot2):
            return NotImplemented
        return Rot2(
            self.c * other.c - self.s * other.s,
            self.s * other.c + self.c * other.s,
        )

    @property
    def angle(self) -> float:
        return math.atan2(self.s, self.c)

    @property
    def length(self) -> float:
        return math.hypot(self.c, self.s)

    def apply(self, vec: Vec2) -> Vec2:
        x, y = vec
        return (self.c * x - self.s * y, self.s * x + self.c * y)

    def as_matrix(self) -> np.ndarray:
        """列ベクトルに左から掛ける 2x2 行列（float32）。"""
        return np.array([[self.c, -self.s], [self.s, self.c]], dtype=np.float32)


@dataclass(frozen=True)
class Rect:
    """軸平行矩形（`min <= max` を前提とする閉区間）。"""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if not _finite(self.min_x, self.min_y, self.max_x, self.max_y):
            raise ValueError(f"Rect bounds must be finite: {self!r}")

    # ── ファクトリ ───────────────────
    @classmethod
    def from_min_size(cls, min_pos: Vec2, size: Vec2) -> "Rect":
        x, y = float(min_pos[0]), float(min_pos[1])
        return cls(x, y, x + float(size[0]), y + float(size[1]))

    @classmethod
    def from_center_size(cls, center: Vec2, size: Vec2) -> "Rect":
        cx, cy = float(center[0]), float(center[1])
        hw, hh = float(size[0]) * 0.5, float(size[1]) * 0.5
        return cls(cx - hw, cy - hh, cx + hw, cy + hh)

    @classmethod
    def from_two_pos(cls, a: Vec2, b: Vec2) -> "Rect":
        return cls(min(a[0], b[0]), min(a[1], b[1]), max(a[0], b[0]), max(a[1], b[1]))

    # ── 寸法 ───────────────────
    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def size(self) -> Vec2:
        return (self.width, self.height)

    @property
    def center(self) -> Vec2:
        return ((self.min_x + self.max_x) * 0.5, (self.min_y + self.max_y) * 0.5)

    @property
    def is_positive(self) -> bool:
        return self.width > 0.0 and self.height > 0.0

    def square_proportions(self) -> np.ndarray:
        """短辺を 1 とした縦横比 `(w/side, h/side)` を返す。

        ゼロ面積の矩形では `(1, 1)` を返す（呼び出し側で割り算に使うため）。
        """
        side = min(self.width, self.height)
        if side <= 0.0:
            return np.array([1.0, 1.0])
        return np.array([self.width / side, self.height / side])

    # ── 判定 ───────────────────
    def intersects(self, other: "Rect") -> bool:
        """辺の接触も交差とみなす。"""
        return (
            self.min_x <= other.max_x
            and other.min_x <= self.max_x
            and self.min_y <= other.max_y
            and other.min_y <= self.max_y
        )

    def intersects_boxes(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """線分 `a[i] → b[i]`（各 `(N, 2)`）のバウンディングボックスと交差するかを一括判定。

        Returns
        -------
        np.ndarray
            形状 `(N,)` の bool マスク。
        """
        lo = np.minimum(a, b)
        hi = np.maximum(a, b)
        return (
            (lo[:, 0] <= self.max_x)
            & (hi[:, 0] >= self.min_x)
            & (lo[:, 1] <= self.max_y)
            & (hi[:, 1] >= self.min_y)
        )


@dataclass(frozen=True)
class RectTransform:
    """`from_rect` を `to_rect` へ線形に写す変換。"""

    from_rect: Rect
    to_rect: Rect

    def __post_init__(self) -> None:
        if not self.from_rect.is_positive:
            raise ValueError(f"RectTransform source must have positive area: {self.from_rect!r}")

    @classmethod
    def from_to(cls, from_rect: Rect, to_rect: Rect) -> "RectTransform":
        return cls(from_rect, to_rect)

    @property
    def scale(self) -> Vec2:
        return (
            self.to_rect.width / self.from_rect.width,
            self.to_rect.height / self.from_rect.height,
        )

    def transform_pos(self, p: Vec2) -> Vec2:
        sx, sy = self.scale
        return (
            self.to_rect.min_x + (p[0] - self.from_rect.min_x) * sx,
            self.to_rect.min_y + (p[1] - self.from_rect.min_y) * sy,
        )

    def transform_points(self, pts: np.ndarray) -> np.ndarray:
        """`(N, 2)` の点列を一括変換する（新しい配列を返す）。"""
        sx, sy = self.scale
        scale = np.array([sx, sy], dtype=np.float32)
        src_min = np.array([self.from_rect.min_x, self.from_rect.min_y], dtype=np.float32)
        dst_min = np.array([self.to_rect.min_x, self.to_rect.min_y], dtype=np.float32)
        return (pts - src_min) * scale + dst_min


def logical_to_screen(clip_rect: Rect, zoom: float) -> RectTransform:
    """原点中心の論理空間を `clip_rect` に写す変換を作る。

    表示される論理範囲は短辺方向で `1/zoom`。`zoom` は正であること。
    """
    if not (math.isfinite(zoom) and zoom > 0.0):
        raise ValueError(f"zoom must be a positive finite number, got {zoom!r}")
    size = clip_rect.square_proportions() / zoom
    return RectTransform.from_to(
        Rect.from_center_size((0.0, 0.0), (float(size[0]), float(size[1]))),
        clip_rect,
    )


__all__ = ["TAU", "angled", "Rot2", "Rect", "RectTransform", "logical_to_screen"]
