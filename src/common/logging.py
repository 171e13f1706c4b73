"""
どこで: `common.logging`
何を: ランナー/CLI から 1 度だけ呼ぶ最小ロギング設定ヘルパ。
なぜ: エンジン側は `logging.getLogger(__name__)` だけを使い、ハンドラ構成はホストに委ねるため。
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """`"debug"` や `10` のような指定を logging のレベル値へ正規化する。

    None や未知の名前は INFO に倒す。
    """
    if level is None:
        return logging.INFO
    if isinstance(level, str):
        lvl = getattr(logging, level.strip().upper(), None)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - `level` が None なら `common.settings` の `LOG_LEVEL`（`FCK_LOG_LEVEL`）を使う
    """
    if level is None:
        from .settings import get as _get_settings

        level = _get_settings().LOG_LEVEL
    lvl = resolve_level(level)

    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(level=lvl, format=LOG_FORMAT)


__all__ = ["LOG_FORMAT", "resolve_level", "setup_default_logging"]
