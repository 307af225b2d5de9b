"""Tests for FEN placement parsing and serialization."""

from collections import Counter

import pytest

from kingcapture.core.board import Board
from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from kingcapture.core.types import Cell, parse_cell

START_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class TestFenParsing:
    def test_starting_counts(self) -> None:
        board = board_from_fen(START_PLACEMENT)
        counts = Counter(p.kind for p in board.all_pieces())
        assert counts == {
            PieceKind.PAWN: 16,
            PieceKind.ROOK: 4,
            PieceKind.KNIGHT: 4,
            PieceKind.BISHOP: 4,
            PieceKind.QUEEN: 2,
            PieceKind.KING: 2,
        }

    def test_starting_ranks_by_color(self) -> None:
        board = board_from_fen(START_PLACEMENT)
        assert all(p.position.rank in (0, 1) for p in board.pieces(Color.WHITE))
        assert all(p.position.rank in (6, 7) for p in board.pieces(Color.BLACK))

    def test_matches_hard_coded_layout(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_only_placement_field_is_read(self) -> None:
        with_fields = board_from_fen(START_PLACEMENT + " b - e3 12 40")
        assert with_fields == board_from_fen(START_PLACEMENT)

    def test_case_selects_color(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3")
        white = board.piece_at(parse_cell("e1"))
        black = board.piece_at(parse_cell("e8"))
        assert white is not None and white.color == Color.WHITE
        assert black is not None and black.color == Color.BLACK
        assert white.kind == black.kind == PieceKind.KING

    def test_digits_skip_files(self) -> None:
        board = board_from_fen("8/8/8/8/3Q4/8/8/8")
        queen = board.piece_at(parse_cell("d4"))
        assert queen is not None
        assert queen.position == Cell(3, 3)
        assert len(board) == 1

    def test_unknown_character_skips_one_file(self) -> None:
        board = board_from_fen("8/8/8/8/x2N4/8/8/8")
        knight = board.piece_at(parse_cell("d4"))
        assert knight is not None
        assert knight.kind == PieceKind.KNIGHT
        assert len(board) == 1

    def test_short_rank_is_not_rejected(self) -> None:
        board = board_from_fen("k/8/8/8/8/8/8/K")
        assert len(board) == 2
        assert board.piece_at(parse_cell("a8")) is not None
        assert board.piece_at(parse_cell("a1")) is not None

    def test_overlong_rank_drops_extra_pieces(self) -> None:
        board = board_from_fen("8/8/8/8/8/8/8/7RR")
        assert len(board) == 1
        assert board.piece_at(parse_cell("h1")) is not None

    def test_extra_ranks_dropped(self) -> None:
        board = board_from_fen("8/8/8/8/8/8/8/8/K")
        assert len(board) == 0

    @pytest.mark.parametrize("fen", ["", "   "])
    def test_empty_input_gives_empty_board(self, fen: str) -> None:
        assert len(board_from_fen(fen)) == 0


class TestFenSerialization:
    def test_starting_board(self) -> None:
        assert board_to_fen(Board.initial()) == START_PLACEMENT

    def test_empty_board(self) -> None:
        assert board_to_fen(Board()) == "8/8/8/8/8/8/8/8"

    def test_after_moves(self) -> None:
        board = Board.initial()
        pawn = board.piece_at(parse_cell("e2"))
        assert pawn is not None
        board.relocate(pawn.id, parse_cell("e4"))
        assert board_to_fen(board) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
