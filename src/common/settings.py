"""
どこで: `common.settings`
何を: 環境変数由来のプロセス設定（バッファ容量/ログレベル/目標 FPS 等）を型付きで一元管理。
なぜ: エンジンとランナーが同じ既定値を参照し、テストから `reload_from_env()` で差し替えられるようにするため。

ユーザが調整する描画パラメータ（`ClockConfig`）とは別物で、こちらは永続化しない。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # Fractal engine
    NODE_CAPACITY: int = 1 << 16
    DEBUG_CULLING: bool = False

    # Runner
    TARGET_FPS: float = 60.0
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `FCK_NODE_CAPACITY`: ノードバッファの初期容量（0 以上、0 なら毎フレーム必要分だけ確保）。
    - `FCK_DEBUG_CULLING`: カリング統計を debug ログに出す。
    - `FCK_TARGET_FPS`: ランナーの既定フレームレート（1 未満は 1 に丸め）。
    - `FCK_LOG_LEVEL`: `setup_default_logging` に渡す既定レベル。
    """
    _settings.NODE_CAPACITY = env_int("FCK_NODE_CAPACITY", 1 << 16, min_value=0) or 0
    _settings.DEBUG_CULLING = env_bool("FCK_DEBUG_CULLING", False)
    _settings.TARGET_FPS = env_float("FCK_TARGET_FPS", 60.0, min_value=1.0)
    _settings.LOG_LEVEL = env_str("FCK_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
