"""FEN piece-placement parsing and serialization.

Only the first FEN field is read; side to move, castling rights, en
passant target and clocks are ignored.
"""

from __future__ import annotations

import logging

from kingcapture.core.board import Board
from kingcapture.core.piece import parse_piece_char
from kingcapture.core.types import is_on_board

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_PIECE_LETTERS = frozenset("pnbrqkPNBRQK")


def board_from_fen(fen: str) -> Board:
    """Build a :class:`Board` from the placement field of *fen*.

    Parsing is lenient: unknown characters count as one empty file, and
    ranks with the wrong width are not rejected. Pieces that would land
    off the board are dropped.
    """
    fields = fen.split()
    placement = fields[0] if fields else ""

    board = Board()
    for rank_idx, rank_text in enumerate(placement.split("/")):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
                continue
            if ch not in _PIECE_LETTERS:
                _LOGGER.debug("Skipping unknown FEN character %r", ch)
                file += 1
                continue
            if not is_on_board((rank, file)):
                _LOGGER.debug("Dropping FEN piece %r off board", ch)
                file += 1
                continue
            color, kind = parse_piece_char(ch)
            board.place(color, kind, (rank, file))
            file += 1
    return board


def board_to_fen(board: Board) -> str:
    """Serialise the placement of *board* as a FEN placement field."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board.piece_at((rank, file))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
