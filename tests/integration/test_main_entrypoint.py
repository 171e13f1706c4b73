from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest


def _load_main():
    path = Path(__file__).resolve().parents[2] / "main.py"
    spec = importlib.util.spec_from_file_location("fractal_clock_main", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.integration
# What this tests
# - main.py is importable without opening a window and maps CLI flags to run_clock kwargs.
def test_main_forwards_cli_flags(monkeypatch: pytest.MonkeyPatch):
    main = _load_main()
    captured: dict = {}
    monkeypatch.setattr(main, "run_clock", lambda **kw: captured.update(kw))
    monkeypatch.setattr(main, "setup_default_logging", lambda level=None: None)
    main.main(["--width", "640", "--height", "480", "--fps", "30", "--no-hud", "--state", "s.json"])
    assert captured == {
        "width": 640,
        "height": 480,
        "fps": 30.0,
        "show_hud": False,
        "state_path": "s.json",
    }


@pytest.mark.integration
def test_main_defaults_leave_config_resolution_to_runner():
    args = _load_main().parse_args([])
    assert args.width is None and args.fps is None and args.no_hud is False
