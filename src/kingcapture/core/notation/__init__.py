"""Notation package: FEN placement parsing and serialization."""

from kingcapture.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
