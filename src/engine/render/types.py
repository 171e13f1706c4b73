"""
どこで: `engine.render` 型定義。
何を: 1 フレームぶんの描画出力（色/太さが共通な線分バッチ `Layer` と、その列 `ShapeList`）。
なぜ: 展開エンジンは深さ単位で同色・同幅の線分を大量に出すため、線分ごとのオブジェクト化を
      避けて配列で保持しつつ、ホストには「線分の順序付き列」として見せるため。

データモデル:
- `Layer.segments: float32 ndarray (K, 2, 2)` — `segments[i] = [[x0, y0], [x1, y1]]`（画面座標, px）。
- `ShapeList` は針レイヤー → 深さ 0 → 深さ 1 … の順に並ぶ。
- `iter(shape_list)` は `LineSegment` を 1 本ずつ返す（順序は上記レイヤー順 × レイヤー内順）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from common.types import RGBA8, Vec2

HANDS_LAYER = "hands"


class LineSegment(NamedTuple):
    start: Vec2
    end: Vec2
    color: RGBA8
    width: float


def _empty_segments() -> np.ndarray:
    return np.empty((0, 2, 2), dtype=np.float32)


@dataclass(frozen=True)
class Layer:
    """同じ色/太さで描く線分のまとまり。"""

    segments: np.ndarray
    color: RGBA8
    width: float
    name: str
    depth: int | None = None  # None なら針レイヤー

    def __post_init__(self) -> None:
        seg = np.asarray(self.segments, dtype=np.float32)
        if seg.size == 0:
            seg = _empty_segments()
        if seg.ndim != 3 or seg.shape[1:] != (2, 2):
            raise ValueError(f"segments は形状 (K, 2, 2) である必要があります: {seg.shape}")
        object.__setattr__(self, "segments", seg)

    def __len__(self) -> int:
        return int(self.segments.shape[0])

    def __iter__(self) -> Iterator[LineSegment]:
        for (x0, y0), (x1, y1) in self.segments.tolist():
            yield LineSegment((x0, y0), (x1, y1), self.color, self.width)


class ShapeList:
    """1 フレームの描画出力（レイヤーの順序付き列）。"""

    __slots__ = ("_layers",)

    def __init__(self, layers: Sequence[Layer] = ()) -> None:
        self._layers: list[Layer] = list(layers)

    def append(self, layer: Layer) -> None:
        self._layers.append(layer)

    def clear(self) -> None:
        self._layers.clear()

    @property
    def layers(self) -> tuple[Layer, ...]:
        return tuple(self._layers)

    def __len__(self) -> int:
        return sum(len(layer) for layer in self._layers)

    def __iter__(self) -> Iterator[LineSegment]:
        for layer in self._layers:
            yield from layer

    def layer(self, name: str) -> Layer | None:
        for layer in self._layers:
            if layer.name == name:
                return layer
        return None

    def depth_layers(self) -> list[Layer]:
        return [layer for layer in self._layers if layer.depth is not None]

    def segment_array(self) -> np.ndarray:
        """全線分を 1 本の `(N, 2, 2)` 配列に連結して返す。"""
        if not self._layers:
            return _empty_segments()
        return np.concatenate([layer.segments for layer in self._layers], axis=0)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"ShapeList(layers={len(self._layers)}, segments={len(self)})"


__all__ = ["HANDS_LAYER", "Layer", "LineSegment", "ShapeList"]
