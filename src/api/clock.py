"""
どこで: `api.clock`（実行ランナー）。
何を: FractalClock を pyglet ウィンドウで駆動し、線分描画・HUD・キー操作・設定の永続化を統合する。
なぜ: 少ない記述で対話的に時計を表示し、エンジン本体は UI 無しで検証できる形に保つため。

主エントリポイント:
- `run_clock(*, width=None, height=None, fps=None, show_hud=None, state_path=None, ...)`

実行フロー（概要）:
1) 設定解決: 引数 > `util.utils.load_config()` の `window`/`hud`/`clock` 節 > 既定値。
2) エンジン生成: 保存済み設定（`engine.ui.persistence`）があれば優先し、`FractalClock` を作る。
   `init_only=True` ならここで早期 return（ウィンドウ・pyglet を生成しない）。
3) ウィンドウ: `ClockWindow` を生成し、`SegmentRenderer` と HUD を描画コールバックに登録。
4) フレーム駆動: `FrameClock([ClockDriver, ClockSampler, OverlayHUD])` を `pyglet.clock` で呼ぶ。
   再描画要求（実行中は毎フレーム、一時停止中は設定変更/リサイズ時のみ）があれば `render` する。
5) 終了: `ESC` またはウィンドウを閉じると設定を保存し、Line プールを解放する。

ロギング:
- 初期化のフォールバックや保存失敗は `logging` で通知する（フレームループへは送出しない）。
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Mapping

from common.settings import get as get_settings
from engine.clock.config import ClockConfig
from engine.clock.fractal_clock import FractalClock
from engine.clock.time_source import TimeSource
from engine.ui.controls import apply_key
from engine.ui.hud.config import HUDConfig
from engine.ui.persistence import load_config_state, save_config
from util.utils import load_config

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720


def _positive_int(value: Any, default: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return int(default)
    return v if v > 0 else int(default)


def resolve_fps(requested_fps: float | None, window_section: Mapping[str, Any]) -> float:
    """FPS を解決して 1 以上の値を返す（引数 > YAML `window.fps` > `FCK_TARGET_FPS`）。"""
    default = float(get_settings().TARGET_FPS)
    raw = requested_fps if requested_fps is not None else window_section.get("fps", default)
    try:
        return max(1.0, float(raw))
    except (TypeError, ValueError):
        return max(1.0, default)


def resolve_initial_config(
    cfg: Mapping[str, Any],
    *,
    state_path: str | Path | None = None,
    restore: bool = True,
) -> ClockConfig:
    """初期 `ClockConfig` を決める（保存済み > YAML `clock` 節 > 既定値）。"""
    if restore:
        saved = load_config_state(state_path)
        if saved is not None:
            logger.info("restored clock config from previous session")
            return saved
    section = cfg.get("clock") if isinstance(cfg, Mapping) else None
    if isinstance(section, Mapping):
        return ClockConfig.from_dict(section)
    return ClockConfig()


def resolve_hud_config(
    cfg: Mapping[str, Any], show_hud: bool | None, hud_config: HUDConfig | None
) -> HUDConfig:
    """HUD 設定を解決する（show_hud 明示 > hud_config > YAML `hud` 節 > 既定）。"""
    if hud_config is None:
        section = cfg.get("hud") if isinstance(cfg, Mapping) else None
        hud_config = HUDConfig().with_overrides(section if isinstance(section, Mapping) else {})
    if show_hud is not None:
        hud_config = replace(hud_config, enabled=bool(show_hud))
    return hud_config


# pyglet.event.EVENT_HANDLED と同値（pyglet を import せずに返すため）
EVENT_HANDLED = True


class ClockSession:
    """ウィンドウイベントを時計・再描画要求・永続化へ振り分けるハンドラ束。

    `window.push_handlers(session)` で登録する。pyglet には依存せず、キー名の解決
    （`symbol_string`）と終了処理（`stop`）は呼び出し側から受け取る。

    Parameters
    ----------
    window : Any
        `dispatch_event` と `apply_config` を持つウィンドウ。
    clock : FractalClock
        操作対象のエンジン。
    driver : ClockDriver
        再描画要求の受け口。
    renderer : Any
        `release()` を持つ描画器。
    symbol_string : Callable[[int], str]
        キーシンボルからキー名への変換（通常 `pyglet.window.key.symbol_string`）。
    stop : Callable[[], None] | None
        終了時に 1 度だけ呼ぶ処理（スケジュール解除とイベントループ停止）。
    overlay : OverlayHUD | None
        リセット通知の表示先。
    persist : bool, default True
        False で終了時に設定を保存しない。
    state_path : str | Path | None
        設定の保存先 JSON。
    """

    def __init__(
        self,
        window: Any,
        clock: FractalClock,
        driver: Any,
        renderer: Any,
        *,
        symbol_string: Callable[[int], str],
        stop: Callable[[], None] | None = None,
        overlay: Any | None = None,
        persist: bool = True,
        state_path: str | Path | None = None,
    ) -> None:
        self._window = window
        self._clock = clock
        self._driver = driver
        self._renderer = renderer
        self._symbol_string = symbol_string
        self._stop = stop
        self._overlay = overlay
        self._persist = bool(persist)
        self._state_path = state_path
        self.closed = False

    def on_key_press(self, sym, mods):  # noqa: ANN001
        name = self._symbol_string(sym)
        if name == "ESCAPE":
            # window.close() は on_close を送らないため、終了処理ごと明示的に発火する
            self._window.dispatch_event("on_close")
            return EVENT_HANDLED
        if apply_key(self._clock, name):
            self._window.apply_config(self._clock.config)
            self._driver.request_repaint()
            if self._overlay is not None and name == "BACKSPACE":
                self._overlay.show_message("Settings reset")
            return EVENT_HANDLED
        return None

    def on_resize(self, width, height):  # noqa: ANN001
        self._driver.request_repaint()

    def on_close(self):
        # 冪等なクリーンアップ。None を返してウィンドウ既定の on_close（close）へ流す
        if self.closed:
            return None
        self.closed = True
        if self._stop is not None:
            self._stop()
        if self._persist:
            save_config(self._clock.config, self._state_path)
        try:
            self._renderer.release()
        except Exception as e:
            logger.debug("renderer release failed: %s", e, exc_info=True)
        return None


def run_clock(
    *,
    width: int | None = None,
    height: int | None = None,
    fps: float | None = None,
    show_hud: bool | None = None,
    hud_config: HUDConfig | None = None,
    config: ClockConfig | None = None,
    state_path: str | Path | None = None,
    persist: bool = True,
    time_source: TimeSource | None = None,
    init_only: bool = False,
) -> FractalClock | None:
    """フラクタル時計をウィンドウで実行する。

    Parameters
    ----------
    width, height : int | None
        ウィンドウサイズ（px）。None で YAML `window` 節、無ければ 1280x720。
    fps : float | None
        フレームレート。None で YAML `window.fps`、無ければ `FCK_TARGET_FPS`。
    show_hud : bool | None
        HUD の有効/無効。None で上書きしない。
    hud_config : HUDConfig | None
        HUD 表示設定。None で YAML `hud` 節を既定値に重ねる。
    config : ClockConfig | None
        初期設定。None なら保存済み設定 > YAML `clock` 節 > 既定値。
    state_path : str | Path | None
        設定の保存先 JSON。None で `engine.ui.persistence` の既定パス。
    persist : bool, default True
        False で保存済み設定の復元と終了時の保存を行わない。
    time_source : Callable | None
        時刻の取得関数（デモ/テスト用）。None でローカル時刻。
    init_only : bool, default False
        True でウィンドウを作らず、構築した `FractalClock` を返す。

    Returns
    -------
    FractalClock | None
        `init_only=True` のときのみエンジンを返す。
    """
    cfg = load_config() or {}
    window_section = cfg.get("window") if isinstance(cfg.get("window"), Mapping) else {}

    fps_value = resolve_fps(fps, window_section)
    window_width = _positive_int(width if width is not None else window_section.get("width"), DEFAULT_WIDTH)
    window_height = _positive_int(
        height if height is not None else window_section.get("height"), DEFAULT_HEIGHT
    )
    initial = (
        config.normalized()
        if config is not None
        else resolve_initial_config(cfg, state_path=state_path, restore=persist)
    )
    clock = FractalClock(initial, time_source=time_source)
    hud_conf = resolve_hud_config(cfg, show_hud, hud_config)

    if init_only:
        return clock

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock
    from engine.core.render_window import ClockWindow
    from engine.core.tickable import Tickable
    from engine.render.renderer import SegmentRenderer
    from engine.runtime.driver import ClockDriver
    from engine.ui.hud.overlay import OverlayHUD
    from engine.ui.hud.sampler import ClockSampler

    window = ClockWindow(
        window_width,
        window_height,
        transparent=bool(initial.transparent_background),
    )
    window.apply_config(initial)
    renderer = SegmentRenderer()
    driver = ClockDriver(clock)

    sampler: ClockSampler | None = None
    overlay: OverlayHUD | None = None
    if hud_conf.enabled:
        sampler = ClockSampler(clock, hud_conf)
        font_name = window_section.get("font")
        overlay = OverlayHUD(
            window,
            sampler,
            config=hud_conf,
            font_name=font_name if isinstance(font_name, str) else None,
        )

    # ---- Draw callbacks ----------------------------------
    def _draw_main() -> None:
        if driver.consume_repaint():
            shapes = clock.render(window.clip_rect())
            renderer.upload(shapes, window.height)
            if sampler is not None:
                sampler.refresh_clock_fields()
        renderer.draw()
        if overlay is not None:
            overlay.draw()

    window.add_draw_callback(_draw_main)

    # ---- FrameClock ---------------------------------------
    tickables: list[Tickable] = [driver]
    if sampler is not None:
        tickables.append(sampler)
    if overlay is not None:
        tickables.append(overlay)
    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, 1.0 / fps_value)

    # ---- pyglet イベント -----------------------------------------
    def _stop() -> None:
        pyglet.clock.unschedule(frame_clock.tick)
        pyglet.app.exit()

    # push_handlers は弱参照で保持するため、run() の間はローカル変数で生かしておく
    session = ClockSession(
        window,
        clock,
        driver,
        renderer,
        symbol_string=key.symbol_string,
        stop=_stop,
        overlay=overlay,
        persist=persist,
        state_path=state_path,
    )
    window.push_handlers(session)

    pyglet.app.run()
    return None


__all__ = ["ClockSession", "run_clock", "resolve_fps", "resolve_hud_config", "resolve_initial_config"]
