"""
どこで: `engine.clock.fractal`。
何を: 秒針/分針のロータを各ノードへ繰り返し適用し、深さごとの枝（線分レイヤー）を生成する。
なぜ: フラクタル時計の中核。世代ごとにノード数が 2 倍になるため、ベクトル化と
      バッファ再利用で 1 フレームのコストを抑える。

アルゴリズム（深さ d ごと）:
1. 色 = schedule[d]、幅 = start_width · width_factor^(d+1)
2. ロータ r ごと（r 優先順）に、全ノードへ `new_dir = r·dir`, `new_pos = pos + new_dir`
3. 線分 pos → new_pos を画面へ写し、バウンディングボックスがクリップ矩形と交差するものだけ出力
4. 新ノードを次世代バッファへ書き、バッファを入れ替える

深さ d に入るノード数は `2 · 2^d`、生成される線分数（カリング前）は `2 · 2^(d+1)`。
展開回数は色スケジュール長で打ち切られる。

ノードの保持形式: float32 `(capacity, 4)` の行 `[px, py, dx, dy]`。
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from common.types import RGBA8
from engine.core.geometry import Rect, RectTransform, Rot2
from engine.render.types import Layer

logger = logging.getLogger(__name__)

NODE_FIELDS = 4


class NodeBuffers:
    """世代ノードの 2 面バッファ。

    - `front[:count]` が現在の世代、`back` は次世代の書き込み先。
    - `swap(n)` で表裏を入れ替える（コピー無し）。
    - 容量が足りないときだけ再確保する（フレームをまたいで容量を維持）。
    """

    __slots__ = ("_front", "_back", "_count")

    def __init__(self, capacity: int = 0) -> None:
        cap = max(0, int(capacity))
        self._front = np.empty((cap, NODE_FIELDS), dtype=np.float32)
        self._back = np.empty((cap, NODE_FIELDS), dtype=np.float32)
        self._count = 0

    @property
    def capacity(self) -> int:
        return int(self._front.shape[0])

    @property
    def count(self) -> int:
        return self._count

    def reserve(self, n: int) -> None:
        """両面を `n` 行以上にする。現在の世代の内容は保持する。"""
        if n <= self.capacity:
            return
        new_cap = max(int(n), self.capacity * 2)
        front = np.empty((new_cap, NODE_FIELDS), dtype=np.float32)
        front[: self._count] = self._front[: self._count]
        self._front = front
        self._back = np.empty((new_cap, NODE_FIELDS), dtype=np.float32)
        logger.debug("node buffers grown to %d rows", new_cap)

    def reset(self, nodes: np.ndarray) -> None:
        """現在の世代を `nodes`（`(n, 4)`）で置き換える。"""
        n = int(nodes.shape[0])
        self._count = 0
        self.reserve(n)
        self._front[:n] = nodes
        self._count = n

    def current(self) -> np.ndarray:
        return self._front[: self._count]

    def next_view(self, n: int) -> np.ndarray:
        """次世代の書き込み先 `(n, 4)` ビュー。必要なら先に容量を広げる。"""
        self.reserve(n)
        return self._back[:n]

    def swap(self, n: int) -> None:
        self._front, self._back = self._back, self._front
        self._count = int(n)

    def clear(self) -> None:
        self._count = 0


def make_root_nodes(vectors: Sequence[tuple[float, float]]) -> np.ndarray:
    """原点から伸びる針ベクトル列をルートノード（先端位置 = 方向）にする。"""
    nodes = np.zeros((len(vectors), NODE_FIELDS), dtype=np.float32)
    for i, (vx, vy) in enumerate(vectors):
        nodes[i] = (vx, vy, vx, vy)
    return nodes


def expand_branches(
    buffers: NodeBuffers,
    rotors: Sequence[Rot2],
    colors: Sequence[RGBA8],
    *,
    start_width: float,
    width_factor: float,
    to_screen: RectTransform,
    clip_rect: Rect,
    level_counts: list[int] | None = None,
    debug_culling: bool = False,
) -> list[Layer]:
    """`buffers` の現在世代から `len(colors)` 段の枝を展開し、深さ順のレイヤーを返す。

    Parameters
    ----------
    buffers : NodeBuffers
        ルートノードを `reset()` 済みのバッファ。展開後は最終世代が残る。
    rotors : Sequence[Rot2]
        各ノードに適用するロータ（通常は秒針/分針の 2 つ）。
    colors : Sequence[RGBA8]
        深さごとの色。長さが展開段数になる。
    level_counts : list[int] | None
        指定時、各深さに入るノード数を追記する（診断用）。

    Returns
    -------
    list[Layer]
        深さ 0 から順のレイヤー。カリングで空になったレイヤーも含む。
    """
    layers: list[Layer] = []
    matrices = [rotor.as_matrix().T for rotor in rotors]
    fan_out = len(matrices)
    width = float(start_width)

    for depth, color in enumerate(colors):
        width *= width_factor
        n = buffers.count
        if level_counts is not None:
            level_counts.append(n)

        nxt = buffers.next_view(n * fan_out)
        cur = buffers.current()
        for k, mat in enumerate(matrices):
            block = nxt[k * n : (k + 1) * n]
            block[:, 2:4] = cur[:, 2:4] @ mat
            np.add(cur[:, 0:2], block[:, 2:4], out=block[:, 0:2])

        starts = np.tile(cur[:, 0:2], (fan_out, 1))
        ends = nxt[:, 0:2]
        screen_a = to_screen.transform_points(starts)
        screen_b = to_screen.transform_points(ends)
        visible = clip_rect.intersects_boxes(screen_a, screen_b)
        segments = np.stack([screen_a[visible], screen_b[visible]], axis=1)
        layers.append(Layer(segments, color, width, name=f"depth-{depth}", depth=depth))

        if debug_culling:
            logger.debug(
                "depth %d: %d nodes, %d/%d segments visible",
                depth,
                n,
                int(visible.sum()),
                int(visible.size),
            )
        buffers.swap(n * fan_out)

    return layers


__all__ = ["NODE_FIELDS", "NodeBuffers", "expand_branches", "make_root_nodes"]
