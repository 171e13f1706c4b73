"""
どこで: `common` パッケージ。
何を: 環境変数設定・ロギング初期化・共通型など、engine/api の双方が使う軽量基盤。
なぜ: 上位層から再利用する共通部分を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging
from .types import RGBA8, Vec2

__all__ = [
    "RGBA8",
    "Vec2",
    "setup_default_logging",
]
