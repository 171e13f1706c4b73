"""
どこで: `engine.ui` の永続化ヘルパ。
何を: `ClockConfig` の直列化ブロブを JSON ファイルに保存/復元する。
なぜ: 次回起動時に前回の深さ・色・ズームなどを引き継ぐため（ホスト側の責務）。

要点:
- 保存先: 既定 `data/state/fractal_clock.json`。設定 `persistence.state_dir` で上書き可。
- 保存内容: `ClockConfig.to_dict()` に保存時刻とバージョンを添えたもの。
- 失敗時: 保存は None、復元も None を返す（フェイルソフト、ログのみ）。
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from engine.clock.config import ClockConfig
from util.utils import config_section

logger = logging.getLogger(__name__)

STATE_FILENAME = "fractal_clock.json"
STATE_VERSION = 1


def _resolve_state_dir() -> Path:
    section = config_section("persistence")
    state_dir = section.get("state_dir")
    if isinstance(state_dir, str) and state_dir.strip():
        return Path(state_dir)
    return Path.cwd() / "data" / "state"


def default_state_path() -> Path:
    return _resolve_state_dir() / STATE_FILENAME


def save_config(config: ClockConfig, path: str | Path | None = None) -> Path | None:
    """設定を JSON に保存する。失敗時は None を返す。"""
    target = Path(path) if path is not None else default_state_path()
    payload: dict[str, Any] = {
        "version": STATE_VERSION,
        "saved_at": datetime.now(timezone.utc).isoformat(),
        "config": config.to_dict(),
    }
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("failed to save clock config to %s: %s", target, e)
        return None
    logger.info("clock config saved: %s", target)
    return target


def load_config_state(path: str | Path | None = None) -> ClockConfig | None:
    """保存済みの設定を復元する。ファイルが無い/壊れている場合は None。"""
    source = Path(path) if path is not None else default_state_path()
    if not source.is_file():
        return None
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("failed to read clock config from %s: %s", source, e)
        return None
    blob = payload.get("config") if isinstance(payload, dict) else None
    if not isinstance(blob, dict):
        logger.warning("clock config file %s has no 'config' mapping", source)
        return None
    return ClockConfig.from_dict(blob)


__all__ = ["default_state_path", "load_config_state", "save_config"]
