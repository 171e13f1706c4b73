"""
どこで: `engine.ui.hud.config`。
何を: HUD 表示の設定（有効/無効や表示項目、順序、サンプリング周期、文字色）を定義する。
なぜ: HUD の表示を宣言的に制御し、psutil 呼び出しなどのオーバーヘッドを必要時だけに抑えるため。
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

from .fields import FPS, LINE, MEM, PAINT, STATE, TIME


@dataclass(frozen=True)
class HUDConfig:
    """HUD の表示設定。

    Parameters
    ----------
    enabled : bool
        HUD 全体の有効/無効。
    show_time : bool
        時刻ラベル（`HH:MM:SS.mmm` / `invalid time`）の表示有無。
    show_line_count : bool
        描画線分数の表示有無。
    show_paint_time : bool
        1 回の render に要した時間の表示有無。
    show_fps : bool
        実効 FPS 表示の有無。
    show_mem : bool
        プロセスメモリ表示の有無（未使用時は psutil を import しない）。
    show_state : bool
        Paused / Running の表示有無。
    order : list[str] | None
        表示順（None なら既定順）。
    sample_interval : float
        FPS/MEM のサンプリング周期（秒）。時刻と線分数は毎フレーム更新する。
    font_size : int
        ラベルのフォントサイズ（pt）。
    text_color : tuple[int, int, int, int]
        ラベル色 RGBA(0–255)。
    """

    enabled: bool = True
    show_time: bool = True
    show_line_count: bool = True
    show_paint_time: bool = True
    show_fps: bool = True
    show_mem: bool = False
    show_state: bool = True
    order: Sequence[str] | None = None
    sample_interval: float = 0.5
    font_size: int = 10
    text_color: tuple[int, int, int, int] = (220, 220, 220, 200)

    def resolved_order(self) -> list[str]:
        """有効フラグに基づく既定順を返す（`order` 指定時はそれを優先）。"""
        if self.order is not None:
            return list(self.order)
        keys: list[str] = []
        if self.show_time:
            keys.append(TIME)
        if self.show_state:
            keys.append(STATE)
        if self.show_line_count:
            keys.append(LINE)
        if self.show_paint_time:
            keys.append(PAINT)
        if self.show_fps:
            keys.append(FPS)
        if self.show_mem:
            keys.append(MEM)
        return keys

    def with_overrides(self, section: Mapping[str, Any]) -> "HUDConfig":
        """YAML の `hud:` 節で上書きした新しい設定を返す（未知キー/型違いは無視）。"""
        changes: dict[str, Any] = {}
        for name in (
            "enabled",
            "show_time",
            "show_line_count",
            "show_paint_time",
            "show_fps",
            "show_mem",
            "show_state",
        ):
            if isinstance(section.get(name), bool):
                changes[name] = section[name]
        interval = section.get("sample_interval")
        if isinstance(interval, (int, float)) and not isinstance(interval, bool) and interval > 0:
            changes["sample_interval"] = float(interval)
        size = section.get("font_size")
        if isinstance(size, int) and not isinstance(size, bool) and size > 0:
            changes["font_size"] = size
        order = section.get("order")
        if isinstance(order, list) and all(isinstance(k, str) for k in order):
            changes["order"] = tuple(order)
        if "text_color" in section:
            from util.color import to_u8_rgba

            try:
                changes["text_color"] = to_u8_rgba(section["text_color"])
            except ValueError:
                pass
        return replace(self, **changes)


__all__ = ["HUDConfig"]
