"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from kingcapture.core import Board, is_legal, parse_cell

    board = Board.initial()
    pawn = board.piece_at(parse_cell("e2"))
    assert is_legal(pawn, parse_cell("e4"), board)
"""

from kingcapture.core.board import Board
from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from kingcapture.core.piece import Piece
from kingcapture.core.rules import (
    is_legal,
    legal_destinations,
    occupant_color,
    path_clear,
)
from kingcapture.core.types import Cell, cell_name, is_on_board, make_cell, parse_cell

__all__ = [
    # Enums
    "Color",
    "PieceKind",
    # Types / helpers
    "Cell",
    "cell_name",
    "is_on_board",
    "make_cell",
    "parse_cell",
    # Domain objects
    "Board",
    "Piece",
    # Rules
    "is_legal",
    "legal_destinations",
    "occupant_color",
    "path_clear",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
