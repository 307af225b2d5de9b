"""Tests for GameController — the click-driven state machine."""

import threading

import pytest

from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.notation import board_to_fen
from kingcapture.core.types import Cell, parse_cell
from kingcapture.game.controller import GameController
from kingcapture.game.events import (
    CellClicked,
    GameOver,
    NoCellClicked,
    PieceCaptured,
    PieceMoved,
    SelectionChanged,
    TurnChanged,
)
from kingcapture.game.state import IDLE, ClickOutcome, GamePhase, Idle, PieceChosen


def _click(ctrl: GameController, *names: str) -> list[ClickOutcome]:
    return [ctrl.handle_click(parse_cell(n)) for n in names]


def _record(ctrl: GameController) -> list[object]:
    seen: list[object] = []
    ctrl.events.on_piece_moved.append(seen.append)
    ctrl.events.on_piece_captured.append(seen.append)
    ctrl.events.on_turn_changed.append(seen.append)
    ctrl.events.on_game_over.append(seen.append)
    return seen


class TestNewGame:
    def test_white_moves_first(self) -> None:
        ctrl = GameController()
        assert ctrl.turn == Color.WHITE
        assert ctrl.selection == IDLE
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert not ctrl.is_game_over
        assert ctrl.winner is None

    def test_from_fen(self) -> None:
        ctrl = GameController.from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1", Color.BLACK)
        assert len(ctrl.board) == 2
        assert ctrl.turn == Color.BLACK


class TestSelection:
    def test_own_piece_is_armed(self) -> None:
        ctrl = GameController()
        assert ctrl.handle_click(parse_cell("e2")) == ClickOutcome.SELECTED
        selection = ctrl.selection
        assert isinstance(selection, PieceChosen)
        assert selection.cell == parse_cell("e2")
        assert selection.piece is ctrl.board.piece_at(parse_cell("e2"))

    @pytest.mark.parametrize("cell", ["e4", "e7"])
    def test_empty_or_opponent_cell_stays_idle(self, cell: str) -> None:
        ctrl = GameController()
        assert ctrl.handle_click(parse_cell(cell)) == ClickOutcome.IGNORED
        assert ctrl.selection == IDLE

    def test_clicking_source_again_deselects(self) -> None:
        ctrl = GameController()
        assert _click(ctrl, "g1", "g1") == [
            ClickOutcome.SELECTED,
            ClickOutcome.DESELECTED,
        ]
        assert ctrl.selection == IDLE
        assert ctrl.turn == Color.WHITE

    def test_click_outside_board_resets(self) -> None:
        ctrl = GameController()
        ctrl.handle_click(parse_cell("e2"))
        assert ctrl.handle_click(None) == ClickOutcome.DESELECTED
        assert ctrl.selection == IDLE
        assert ctrl.handle_click(None) == ClickOutcome.IGNORED

    def test_off_board_coordinates_treated_as_outside(self) -> None:
        ctrl = GameController()
        ctrl.handle_click(parse_cell("e2"))
        assert ctrl.handle_click((9, 9)) == ClickOutcome.DESELECTED
        assert ctrl.selection == IDLE

    def test_dispatch_accepts_event_objects(self) -> None:
        ctrl = GameController()
        assert ctrl.dispatch(CellClicked(parse_cell("b1"))) == ClickOutcome.SELECTED
        assert ctrl.dispatch(NoCellClicked()) == ClickOutcome.DESELECTED

    def test_selection_rests_idle_or_armed(self) -> None:
        ctrl = GameController()
        for name in ["e4", "e7", "e2", "e3", "a8", "b1", "b1", "h8"]:
            ctrl.handle_click(parse_cell(name))
            assert isinstance(ctrl.selection, (Idle, PieceChosen))

    def test_selection_events(self) -> None:
        ctrl = GameController()
        seen: list[SelectionChanged] = []
        ctrl.events.on_selection_changed.append(seen.append)
        _click(ctrl, "e4", "e2", "e2")
        assert len(seen) == 2
        assert isinstance(seen[0].selection, PieceChosen)
        assert seen[1].selection == IDLE


class TestMoves:
    def test_scripted_opening(self) -> None:
        ctrl = GameController()

        assert _click(ctrl, "e2", "e4") == [ClickOutcome.SELECTED, ClickOutcome.MOVED]
        assert ctrl.turn == Color.BLACK

        assert _click(ctrl, "d7", "d5") == [ClickOutcome.SELECTED, ClickOutcome.MOVED]
        assert ctrl.turn == Color.WHITE

        # White rook onto the white knight
        assert _click(ctrl, "a1", "b1") == [
            ClickOutcome.SELECTED,
            ClickOutcome.REJECTED,
        ]
        assert ctrl.turn == Color.WHITE
        assert ctrl.selection == IDLE
        assert (
            board_to_fen(ctrl.board)
            == "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR"
        )

    def test_illegal_destination_keeps_turn(self) -> None:
        ctrl = GameController()
        assert _click(ctrl, "e2", "e5") == [
            ClickOutcome.SELECTED,
            ClickOutcome.REJECTED,
        ]
        assert ctrl.turn == Color.WHITE
        assert ctrl.board.piece_at(parse_cell("e2")) is not None

    def test_cannot_move_opponent_piece(self) -> None:
        ctrl = GameController()
        assert _click(ctrl, "e7", "e5") == [ClickOutcome.IGNORED, ClickOutcome.IGNORED]
        assert ctrl.board.piece_at(parse_cell("e7")) is not None
        assert ctrl.turn == Color.WHITE

    def test_turn_alternates_only_on_accepted_moves(self) -> None:
        ctrl = GameController()
        turns = [ctrl.turn]
        script = [
            ("e2", "e4"),
            ("b8", "b6"),  # illegal knight move
            ("b8", "c6"),
            ("d1", "d4"),  # blocked by own pawn
            ("g1", "f3"),
            ("c6", "d4"),
        ]
        for src, dst in script:
            _click(ctrl, src, dst)
            turns.append(ctrl.turn)
        assert turns == [
            Color.WHITE,
            Color.BLACK,
            Color.BLACK,
            Color.WHITE,
            Color.WHITE,
            Color.BLACK,
            Color.WHITE,
        ]

    def test_move_events(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        pawn = ctrl.board.piece_at(parse_cell("e2"))
        assert pawn is not None
        _click(ctrl, "e2", "e4")
        assert seen == [
            PieceMoved(pawn.id, parse_cell("e2"), parse_cell("e4")),
            TurnChanged(Color.BLACK),
        ]

    def test_rejected_move_emits_nothing(self) -> None:
        ctrl = GameController()
        seen = _record(ctrl)
        _click(ctrl, "e2", "e5")
        assert seen == []

    def test_piece_identity_survives_move(self) -> None:
        ctrl = GameController()
        knight = ctrl.board.piece_at(parse_cell("g1"))
        _click(ctrl, "g1", "f3")
        assert ctrl.board.piece_at(parse_cell("f3")) is knight
        assert knight is not None and knight.position == Cell(2, 5)


class TestCapture:
    def test_capture_removes_piece(self) -> None:
        ctrl = GameController.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
        seen = _record(ctrl)
        victim = ctrl.board.piece_at(parse_cell("d5"))
        pawn = ctrl.board.piece_at(parse_cell("e4"))
        assert victim is not None and pawn is not None

        assert _click(ctrl, "e4", "d5")[-1] == ClickOutcome.CAPTURED
        assert ctrl.board.piece_at(parse_cell("d5")) is pawn
        assert len(ctrl.board) == 3
        assert seen == [
            PieceCaptured(victim.id),
            PieceMoved(pawn.id, parse_cell("e4"), parse_cell("d5")),
            TurnChanged(Color.BLACK),
        ]


class TestGameOver:
    _FEN = "4k3/8/8/8/8/8/8/4R1K1"

    def test_king_capture_ends_game(self) -> None:
        ctrl = GameController.from_fen(self._FEN)
        seen = _record(ctrl)
        king = ctrl.board.piece_at(parse_cell("e8"))
        rook = ctrl.board.piece_at(parse_cell("e1"))
        assert king is not None and rook is not None

        assert _click(ctrl, "e1", "e8")[-1] == ClickOutcome.GAME_OVER
        assert ctrl.is_game_over
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.winner == Color.WHITE
        assert ctrl.turn == Color.WHITE
        assert ctrl.selection == IDLE
        assert ctrl.board.pieces(Color.BLACK, PieceKind.KING) == []
        assert seen == [
            PieceCaptured(king.id),
            PieceMoved(rook.id, parse_cell("e1"), parse_cell("e8")),
            GameOver(Color.WHITE),
        ]

    def test_clicks_after_game_over_are_absorbed(self) -> None:
        ctrl = GameController.from_fen(self._FEN)
        _click(ctrl, "e1", "e8")
        before = board_to_fen(ctrl.board)
        seen = _record(ctrl)

        assert _click(ctrl, "g1", "g2", "e8") == [ClickOutcome.IGNORED] * 3
        assert ctrl.handle_click(None) == ClickOutcome.IGNORED
        assert ctrl.dispatch(CellClicked(parse_cell("g1"))) == ClickOutcome.IGNORED

        assert board_to_fen(ctrl.board) == before
        assert ctrl.selection == IDLE
        assert ctrl.winner == Color.WHITE
        assert seen == []

    def test_black_can_win(self) -> None:
        ctrl = GameController.from_fen("4k3/8/8/8/8/8/4q3/4K3", Color.BLACK)
        assert _click(ctrl, "e2", "e1")[-1] == ClickOutcome.GAME_OVER
        assert ctrl.winner == Color.BLACK


class TestEventDelivery:
    def test_move_listener_sees_settled_state(self) -> None:
        ctrl = GameController()
        seen: list[tuple[Color, bool, bool]] = []

        def on_moved(event: PieceMoved) -> None:
            seen.append(
                (
                    ctrl.turn,
                    ctrl.selection == IDLE,
                    ctrl.board.piece_at(event.destination) is not None,
                )
            )

        ctrl.events.on_piece_moved.append(on_moved)
        _click(ctrl, "e2", "e4")
        assert seen == [(Color.BLACK, True, True)]

    def test_capture_listener_sees_finished_game(self) -> None:
        ctrl = GameController.from_fen("4k3/8/8/8/8/8/8/4R1K1")
        seen: list[tuple[bool, Color | None, bool]] = []

        def on_captured(_event: PieceCaptured) -> None:
            rook = ctrl.board.piece_at(parse_cell("e8"))
            seen.append(
                (
                    ctrl.is_game_over,
                    ctrl.winner,
                    rook is not None and rook.kind == PieceKind.ROOK,
                )
            )

        ctrl.events.on_piece_captured.append(on_captured)
        _click(ctrl, "e1", "e8")
        assert seen == [(True, Color.WHITE, True)]

    def test_click_from_listener_runs_after_current_batch(self) -> None:
        ctrl = GameController()
        ctrl.handle_click(parse_cell("e2"))
        seen: list[object] = []
        ctrl.events.on_piece_moved.append(seen.append)
        ctrl.events.on_selection_changed.append(seen.append)
        ctrl.events.on_turn_changed.append(seen.append)

        def reply(event: TurnChanged) -> None:
            if event.color == Color.BLACK:
                ctrl.handle_click(parse_cell("e7"))

        ctrl.events.on_turn_changed.append(reply)
        ctrl.handle_click(parse_cell("e4"))

        pawn = ctrl.board.piece_at(parse_cell("e4"))
        black_pawn = ctrl.board.piece_at(parse_cell("e7"))
        assert pawn is not None and black_pawn is not None
        assert seen == [
            PieceMoved(pawn.id, parse_cell("e2"), parse_cell("e4")),
            SelectionChanged(IDLE),
            TurnChanged(Color.BLACK),
            SelectionChanged(PieceChosen(black_pawn, parse_cell("e7"))),
        ]

    def test_failing_listener_does_not_leak_events(self) -> None:
        ctrl = GameController()

        def boom(_event: PieceMoved) -> None:
            raise RuntimeError("listener failed")

        ctrl.events.on_piece_moved.append(boom)
        ctrl.handle_click(parse_cell("e2"))
        with pytest.raises(RuntimeError):
            ctrl.handle_click(parse_cell("e4"))
        assert ctrl.turn == Color.BLACK

        ctrl.events.on_piece_moved.remove(boom)
        seen = _record(ctrl)
        _click(ctrl, "e7", "e5")
        black_pawn = ctrl.board.piece_at(parse_cell("e5"))
        assert black_pawn is not None
        assert seen == [
            PieceMoved(black_pawn.id, parse_cell("e7"), parse_cell("e5")),
            TurnChanged(Color.WHITE),
        ]


class TestThreadSafety:
    def test_two_players_alternate_under_contention(self) -> None:
        ctrl = GameController()
        barrier = threading.Barrier(2)
        applied: list[ClickOutcome] = []
        turns: list[TurnChanged] = []
        ctrl.events.on_turn_changed.append(turns.append)

        def player(routes: list[tuple[str, str]]) -> None:
            barrier.wait()
            made = 0
            for _ in range(2000):
                if made == 20:
                    break
                for src, dst in routes:
                    if ctrl.handle_click(parse_cell(src)) != ClickOutcome.SELECTED:
                        continue
                    outcome = ctrl.handle_click(parse_cell(dst))
                    if outcome == ClickOutcome.MOVED:
                        applied.append(outcome)
                        made += 1

        white = threading.Thread(target=player, args=([("g1", "f3"), ("f3", "g1")],))
        black = threading.Thread(target=player, args=([("b8", "c6"), ("c6", "b8")],))
        for t in (white, black):
            t.start()
        for t in (white, black):
            t.join()

        assert applied
        assert len(turns) == len(applied)
        expected = Color.WHITE if len(applied) % 2 == 0 else Color.BLACK
        assert ctrl.turn == expected
        assert [e.color for e in turns] == [
            Color.BLACK if i % 2 == 0 else Color.WHITE for i in range(len(turns))
        ]

        pieces = ctrl.board.all_pieces()
        assert len(pieces) == 32
        assert len({p.position for p in pieces}) == 32
        for piece in pieces:
            assert ctrl.board.piece_at(piece.position) is piece
