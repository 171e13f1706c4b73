from __future__ import annotations

import argparse

from api import run_clock
from common.logging import setup_default_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fractal clock viewer")
    parser.add_argument("--width", type=int, default=None, help="window width [px]")
    parser.add_argument("--height", type=int, default=None, help="window height [px]")
    parser.add_argument("--fps", type=float, default=None, help="frame rate")
    parser.add_argument("--no-hud", action="store_true", help="hide the overlay HUD")
    parser.add_argument("--state", default=None, help="JSON file for saved settings")
    parser.add_argument("--log-level", default=None, help="DEBUG / INFO / WARNING ...")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_default_logging(args.log_level)
    run_clock(
        width=args.width,
        height=args.height,
        fps=args.fps,
        show_hud=False if args.no_hud else None,
        state_path=args.state,
    )


if __name__ == "__main__":
    main()
