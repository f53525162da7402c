"""Command-line entry point that opens the window and runs the game."""

from __future__ import annotations

import argparse

from .config import GAME_HEIGHT, GAME_TITLE, GAME_WIDTH
from .engine import Engine, set_frame_stats_enabled, set_profiling_enabled
from .game import Game


def main(argv: list[str] | None = None) -> int:
    """Run the game until its window is closed."""
    parser = argparse.ArgumentParser(prog="planegame", description="A vertical plane shooter.")
    parser.parse_args(argv)

    game = Game()
    engine = Engine()
    set_profiling_enabled(False)
    set_frame_stats_enabled(False)
    engine.start(GAME_WIDTH, GAME_HEIGHT, GAME_TITLE, game)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())