"""
どこで: `util` の設定読み込みヘルパ。
何を: `configs/default.yaml` とルート `config.yaml` を重ねた辞書と、その節の取り出しを提供する。
なぜ: ランナー/永続化が YAML の有無や破損を気にせず既定値へフォールバックできるようにするため。
"""

import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

# ルート判定に使う目印（どれか一つあればよい）
_ROOT_MARKERS: Tuple[str, ...] = (".git", "pyproject.toml", "configs")

# 後に並ぶものほど優先（トップレベル節単位で上書き）
CONFIG_LAYERS: Tuple[Tuple[str, ...], ...] = (
    ("configs", "default.yaml"),
    ("config.yaml",),
)


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.debug("config load failed: %s (%s)", path, e)
        return {}
    if not isinstance(data, dict):
        if data is not None:
            logger.debug("config ignored (top level is not a mapping): %s", path)
        return {}
    return data


def _find_project_root(start: Path) -> Path:
    """`start` から親へ遡り、目印を持つ最初のディレクトリを返す。

    目印が見つからなければ `start` の 2 つ上（`<repo>/src/util` -> `<repo>` 相当）を返す。
    """
    here = start.resolve()
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return here.parent.parent


def load_config() -> Dict[str, Any]:
    """全レイヤを読み込み、トップレベル節ごとに上書きした辞書を返す。

    ネストした辞書はマージしない。どのファイルも無い/壊れている場合は空辞書。
    """
    root = _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for parts in CONFIG_LAYERS:
        layer = root.joinpath(*parts)
        if layer.is_file():
            merged.update(_safe_load_yaml(layer))
    return merged


def config_section(name: str) -> Dict[str, Any]:
    """`load_config()` のトップレベル節を辞書で返す（無い/不正なら空辞書）。"""
    section = load_config().get(name)
    return section if isinstance(section, dict) else {}
