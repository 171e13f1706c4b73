from __future__ import annotations

import logging
import math
from collections import Counter

import numpy as np
import pytest

from engine.clock.colors import START_LUMINANCE, solid_color
from engine.clock.config import ClockConfig
from engine.clock.fractal_clock import FractalClock
from engine.clock.time_source import INVALID_TIME_LABEL, TimeSample, fixed_time
from engine.render.types import HANDS_LAYER

# What this tests
# - 代表シナリオ（t=0, depth 3）の線分数・色・幅・順序
# - 輝度係数 0 / depth 0 の打ち切り
# - 同一入力での冪等性、設定ブロブ往復での一致
# - 無効時刻、一時停止/再開、色スケジュールの遅延再計算


def _segment_multiset(shapes) -> Counter:
    return Counter(
        (tuple(np.round(seg.start, 3)), tuple(np.round(seg.end, 3)), seg.color, seg.width)
        for seg in shapes
    )


def test_scenario_counts(scenario_clock: FractalClock, clip_rect) -> None:
    shapes = scenario_clock.render(clip_rect)
    hands = shapes.layer(HANDS_LAYER)
    assert hands is not None and len(hands) == 3
    depth_layers = shapes.depth_layers()
    assert [len(layer) for layer in depth_layers] == [4, 8, 16]
    assert len(shapes) == 3 + 28
    assert scenario_clock.line_count == 31
    assert scenario_clock.level_node_counts == [2, 4, 8]
    assert scenario_clock.paint_time >= 0.0


def test_scenario_colors_and_widths(scenario_clock: FractalClock, clip_rect) -> None:
    shapes = scenario_clock.render(clip_rect)
    assert shapes.layers[0].name == HANDS_LAYER
    assert shapes.layers[0].color == (255, 255, 255, 255)
    assert shapes.layers[0].width == pytest.approx(5.0)
    expected_color = solid_color((115, 186, 37, 255), START_LUMINANCE)
    for d, layer in enumerate(shapes.depth_layers()):
        assert layer.color == expected_color
        assert layer.width == pytest.approx(5.0 * 0.75 ** (d + 1))


def test_hands_point_up_from_screen_center(scenario_clock: FractalClock, clip_rect) -> None:
    hands = scenario_clock.render(clip_rect).layer(HANDS_LAYER)
    for seg in hands:
        assert seg.start == pytest.approx((400.0, 300.0))
        assert seg.end[0] == pytest.approx(400.0)
        assert seg.end[1] < 300.0  # Y 下向きなので上は小さい


def test_zero_luminance_factor_renders_only_hands(make_clock, clip_rect) -> None:
    clock = make_clock(0.0, depth=15, luminance_factor=0.0)
    shapes = clock.render(clip_rect)
    assert len(shapes) == 3
    assert shapes.depth_layers() == []


def test_depth_zero_renders_only_hands(make_clock, clip_rect) -> None:
    clock = make_clock(1234.5, depth=0)
    assert len(clock.render(clip_rect)) == 3
    assert clock.level_node_counts == []


def test_render_is_idempotent(make_clock, clip_rect) -> None:
    clock = make_clock(45_296.789, depth=8)
    a = clock.render(clip_rect)
    b = clock.render(clip_rect)
    np.testing.assert_array_equal(a.segment_array(), b.segment_array())
    assert [layer.color for layer in a.layers] == [layer.color for layer in b.layers]


def test_config_round_trip_gives_same_output(clip_rect) -> None:
    cfg = ClockConfig(depth=6, zoom=0.7, rainbow_style="hue_cycle", length_factor=0.6)
    restored = ClockConfig.from_dict(cfg.to_dict())
    a = FractalClock(cfg, time_source=fixed_time(3_600.25)).render(clip_rect)
    b = FractalClock(restored, time_source=fixed_time(3_600.25)).render(clip_rect)
    assert _segment_multiset(a) == _segment_multiset(b)


def test_node_capacity_zero_matches_default(make_clock, clip_rect) -> None:
    a = make_clock(777.0, depth=9).render(clip_rect)
    b = make_clock(777.0, depth=9, node_capacity=0).render(clip_rect)
    np.testing.assert_array_equal(a.segment_array(), b.segment_array())


def test_node_count_bound_at_max_depth(make_clock, clip_rect) -> None:
    clock = make_clock(100.0, depth=12)
    clock.render(clip_rect)
    assert clock.level_node_counts == [2 * 2**d for d in range(12)]


def test_zoom_argument_overrides_config(make_clock, clip_rect) -> None:
    clock = make_clock(0.0, depth=0, zoom=0.5)
    near = clock.render(clip_rect, zoom=1.0).layer(HANDS_LAYER)
    far = clock.render(clip_rect).layer(HANDS_LAYER)
    near_len = abs(near.segments[0, 1, 1] - near.segments[0, 0, 1])
    far_len = abs(far.segments[0, 1, 1] - far.segments[0, 0, 1])
    assert near_len == pytest.approx(2.0 * far_len)


def test_invalid_time_yields_empty_output(make_clock, clip_rect, caplog) -> None:
    clock = make_clock(0.0)
    with caplog.at_level(logging.WARNING, logger="engine.clock.fractal_clock"):
        clock.advance(now=math.nan)
        clock.advance(now=math.inf)
    assert clock.time_label == INVALID_TIME_LABEL
    shapes = clock.render(clip_rect)
    assert len(shapes) == 0
    assert clock.line_count == 0
    # 連続する無効時刻では 1 回だけ警告する
    assert sum("invalid" in r.getMessage() for r in caplog.records) == 1

    clock.advance(now=10.0)
    assert clock.time.valid
    assert len(clock.render(clip_rect)) > 0


def test_directly_built_nan_sample_renders_nothing(clip_rect) -> None:
    clock = FractalClock(ClockConfig(), time_source=lambda: TimeSample(math.nan))
    clock.advance()
    assert len(clock.render(clip_rect)) == 0
    assert clock.time_label == INVALID_TIME_LABEL


def test_advance_requests_repaint_while_running(make_clock) -> None:
    clock = make_clock(0.0)
    calls: list[int] = []
    clock.advance(lambda: calls.append(1), now=5.0)
    assert calls == [1]
    assert clock.time == TimeSample(5.0)


def test_paused_clock_freezes_time_and_skips_repaint(make_clock) -> None:
    clock = make_clock(0.0)
    clock.advance(now=5.0)
    clock.set_paused(True)
    calls: list[int] = []
    clock.advance(lambda: calls.append(1), now=99.0)
    assert calls == []
    assert clock.time.seconds == 5.0
    assert clock.paused

    # 再開すると次の advance でライブ時刻に追従する
    assert clock.toggle_paused() is False
    clock.advance(lambda: calls.append(1), now=99.0)
    assert calls == [1]
    assert clock.time.seconds == 99.0


def test_time_label_follows_sample(make_clock) -> None:
    clock = make_clock(3_661.5)
    assert clock.time_label == "01:01:01.500"


def test_colors_recomputed_only_when_color_fields_change(make_clock) -> None:
    clock = make_clock(0.0, depth=4)
    first = clock.depth_colors
    assert clock.depth_colors is first

    clock.update_config(zoom=0.9)  # 色に無関係でも setter 経由なので作り直す
    assert clock.depth_colors == first

    clock.config.depth = 6  # 直接書き換え → color_key の差分で検出
    assert len(clock.depth_colors) == 6

    before = clock.depth_colors
    clock.mark_dirty()
    after = clock.depth_colors
    assert after == before
    assert after is not before


def test_update_config_clamps_values(make_clock) -> None:
    clock = make_clock(0.0)
    cfg = clock.update_config(depth=50, zoom=-3.0)
    assert cfg.depth == 20
    assert cfg.zoom > 0.0
    assert clock.config is cfg


def test_reset_restores_defaults(make_clock) -> None:
    clock = make_clock(0.0, depth=2, rainbow_mode=False)
    clock.reset()
    assert clock.config == ClockConfig()
