"""
どこで: `engine.render` の高レベル描画。
何を: `ShapeList` の線分を pyglet の `shapes.Line` に割り当て、Batch でまとめて描画する。
なぜ: 毎フレームの Line 生成/破棄を避け（プール再利用）、エンジン座標（Y 下向き）から
      ウィンドウ座標（Y 上向き）への変換を一箇所に集約するため。
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .types import ShapeList

logger = logging.getLogger(__name__)

# 0 幅の線は pyglet 側で描けないため下限を設ける
MIN_THICKNESS = 0.1


def flip_y(segments: np.ndarray, height: float) -> np.ndarray:
    """`(K, 2, 2)` の線分の Y を `height - y` に反転した新しい配列を返す。"""
    out = np.array(segments, dtype=np.float32, copy=True)
    out[..., 1] = float(height) - out[..., 1]
    return out


class SegmentRenderer:
    """ShapeList をウィンドウへ描く。

    - `upload(shapes, height)`: 線分を Line プールへ書き込み、余りを非表示にする。
    - `draw()`: Batch を描画する。
    """

    def __init__(self, batch: Any | None = None):
        # 遅延 import（ヘッドレス環境でもモジュール import を可能にするため）
        import pyglet

        self._shapes_mod = pyglet.shapes
        self.batch = batch if batch is not None else pyglet.graphics.Batch()
        self._lines: list[Any] = []
        self._used = 0

    @property
    def last_count(self) -> int:
        return self._used

    def _line_at(self, index: int) -> Any:
        if index < len(self._lines):
            return self._lines[index]
        line = self._shapes_mod.Line(0, 0, 0, 0, thickness=1.0, batch=self.batch)
        self._lines.append(line)
        return line

    def upload(self, shapes: ShapeList, height: float) -> int:
        """線分をプールへ反映し、描画本数を返す。"""
        index = 0
        for layer in shapes.layers:
            if len(layer) == 0:
                continue
            color = tuple(int(c) for c in layer.color)
            thickness = max(float(layer.width), MIN_THICKNESS)
            for (x0, y0), (x1, y1) in flip_y(layer.segments, height).tolist():
                line = self._line_at(index)
                line.x, line.y = x0, y0
                line.x2, line.y2 = x1, y1
                line.thickness = thickness
                line.color = color
                line.visible = True
                index += 1
        for line in self._lines[index:self._used]:
            line.visible = False
        self._used = index
        return index

    def draw(self) -> None:
        self.batch.draw()

    def release(self) -> None:
        """Line プールを破棄する（終了時に使う）。"""
        for line in self._lines:
            line.delete()
        self._lines.clear()
        self._used = 0
        logger.debug("segment renderer released")


__all__ = ["MIN_THICKNESS", "SegmentRenderer", "flip_y"]
