"""Application settings and command-line parsing."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

from kingcapture.core.notation import STARTING_FEN

BOARD_THEMES = ("Classic", "Blue", "Green")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Game
    start_fen: str = STARTING_FEN

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    animate_moves: bool = True

    # Diagnostics
    log_level: str = "WARNING"

    @classmethod
    def from_argv(cls, argv: Sequence[str] | None = None) -> AppSettings:
        """Build settings from command-line arguments (program name excluded)."""
        args = _build_parser().parse_args(argv)
        return cls(
            start_fen=args.fen,
            board_theme=args.theme,
            show_coordinates=not args.no_coordinates,
            show_legal_moves=not args.no_hints,
            animate_moves=not args.no_animation,
            log_level=args.log_level,
        )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kingcapture",
        description="Two-player chess; the game ends when a king is captured.",
    )
    p.add_argument("--fen", default=STARTING_FEN, help="Start from this FEN placement")
    p.add_argument("--theme", choices=BOARD_THEMES, default="Classic")
    p.add_argument(
        "--no-coordinates", action="store_true", help="Hide rank/file labels"
    )
    p.add_argument(
        "--no-hints", action="store_true", help="Do not mark legal destinations"
    )
    p.add_argument(
        "--no-animation", action="store_true", help="Move pieces without sliding"
    )
    p.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
    )
    return p
