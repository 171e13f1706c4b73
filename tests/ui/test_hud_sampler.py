from __future__ import annotations

import pytest

from engine.ui.hud import FPS, LINE, MEM, PAINT, STATE, TIME, HUDConfig
from engine.ui.hud.sampler import ClockSampler, format_bytes, format_paint_time


def test_format_helpers() -> None:
    assert format_paint_time(0.00123) == "1.23 ms / paint"
    assert format_bytes(512) == "512 B"
    assert format_bytes(2048) == "2.0 KB"
    assert format_bytes(3 * 1024**3) == "3.0 GB"


def test_clock_fields_refresh_after_render(scenario_clock, clip_rect) -> None:
    sampler = ClockSampler(scenario_clock, HUDConfig())
    scenario_clock.render(clip_rect)
    sampler.refresh_clock_fields()
    assert sampler.data[TIME] == "00:00:00.000"
    assert sampler.data[STATE] == "Paused"
    assert sampler.data[LINE] == "Painted line count: 31"
    assert sampler.values[LINE] == 31.0
    assert sampler.data[PAINT].endswith("ms / paint")


def test_fps_is_sampled_per_interval(make_clock) -> None:
    sampler = ClockSampler(make_clock(0.0), HUDConfig(sample_interval=0.5))
    sampler.tick(0.125)
    assert FPS not in sampler.data
    for _ in range(3):
        sampler.tick(0.125)
    assert sampler.values[FPS] == pytest.approx(8.0)
    assert sampler.data[FPS] == "8.0"
    assert sampler.data[STATE] == "Running"


def test_mem_sampling_with_psutil(make_clock) -> None:
    pytest.importorskip("psutil")
    sampler = ClockSampler(make_clock(0.0), HUDConfig(show_mem=True, sample_interval=0.01))
    sampler.tick(0.02)
    assert sampler.values[MEM] > 0
    assert sampler.data[MEM].split()[-1] in {"B", "KB", "MB", "GB"}


def test_hud_config_resolved_order() -> None:
    assert HUDConfig().resolved_order() == [TIME, STATE, LINE, PAINT, FPS]
    assert HUDConfig(show_mem=True, show_fps=False).resolved_order()[-1] == MEM
    assert HUDConfig(order=(FPS, TIME)).resolved_order() == [FPS, TIME]


def test_hud_config_with_overrides_ignores_bad_values() -> None:
    conf = HUDConfig().with_overrides(
        {
            "enabled": False,
            "show_fps": "yes",
            "sample_interval": -1,
            "font_size": 14,
            "order": ["TIME"],
            "text_color": "#FF000080",
        }
    )
    assert conf.enabled is False
    assert conf.show_fps is True
    assert conf.sample_interval == 0.5
    assert conf.font_size == 14
    assert conf.order == ("TIME",)
    assert conf.text_color == (255, 0, 0, 128)
