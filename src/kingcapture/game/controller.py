"""GameController — the click-driven turn and selection state machine.

Coordinates: Board, move legality, turn order, end of game.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable

from kingcapture.core.board import Board
from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.notation import board_from_fen, board_to_fen
from kingcapture.core.piece import Piece
from kingcapture.core.rules import is_legal
from kingcapture.core.types import Cell, cell_name, is_on_board
from kingcapture.game.events import (
    CellClicked,
    ClickEvent,
    GameEvents,
    GameOver,
    PieceCaptured,
    PieceMoved,
    SelectionChanged,
    TurnChanged,
)
from kingcapture.game.state import (
    IDLE,
    ClickOutcome,
    GamePhase,
    GameState,
    PieceChosen,
    Selection,
)

_LOGGER = logging.getLogger(__name__)


class GameController:
    """Resolves board clicks into selections and moves.

    Every click is handled under a re-entrant lock, so the board, turn and
    selection are never observed half-updated. Events raised by a click are
    queued and delivered only once that click has been fully resolved; a
    listener that clicks again has its events delivered after the current
    batch. Once a king is captured the controller is terminal and ignores
    all further input.
    """

    __slots__ = ("_state", "_lock", "_pending", "_delivering", "events")

    def __init__(self, board: Board | None = None, turn: Color = Color.WHITE) -> None:
        self._state = GameState(
            board=board if board is not None else Board.initial(),
            turn=turn,
        )
        self._lock = threading.RLock()
        self._pending: deque[tuple[list[Callable], object]] = deque()
        self._delivering = False
        self.events = GameEvents()

    @classmethod
    def from_fen(cls, fen: str, turn: Color = Color.WHITE) -> GameController:
        """Start a game from the placement field of *fen*."""
        return cls(board_from_fen(fen), turn)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def turn(self) -> Color:
        return self._state.turn

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def winner(self) -> Color | None:
        return self._state.winner

    # ── Input ────────────────────────────────────────────────────────────

    def dispatch(self, event: ClickEvent) -> ClickOutcome:
        """Feed a :class:`CellClicked` / :class:`NoCellClicked` event."""
        if isinstance(event, CellClicked):
            return self.handle_click(event.cell)
        return self.handle_click(None)

    def handle_click(self, cell: tuple[int, int] | None) -> ClickOutcome:
        """Process one click; ``None`` means the click missed the board."""
        with self._lock:
            outcome = self._resolve(cell)
            self._deliver()
            return outcome

    # ── Internal helpers ─────────────────────────────────────────────────

    def _resolve(self, cell: tuple[int, int] | None) -> ClickOutcome:
        if self._state.is_game_over:
            return ClickOutcome.IGNORED

        if cell is None or not is_on_board(cell):
            had_selection = self._state.selection != IDLE
            self._set_selection(IDLE)
            if had_selection:
                return ClickOutcome.DESELECTED
            return ClickOutcome.IGNORED

        cell = Cell(*cell)
        selection = self._state.selection
        if isinstance(selection, PieceChosen):
            return self._choose_destination(selection, cell)
        return self._choose_source(cell)

    def _choose_source(self, cell: Cell) -> ClickOutcome:
        piece = self._state.board.piece_at(cell)
        if piece is not None and piece.color == self._state.turn:
            self._set_selection(PieceChosen(piece, cell))
            return ClickOutcome.SELECTED
        return ClickOutcome.IGNORED

    def _choose_destination(self, selection: PieceChosen, dest: Cell) -> ClickOutcome:
        if dest == selection.cell:
            self._set_selection(IDLE)
            return ClickOutcome.DESELECTED

        mover = selection.piece
        if not is_legal(mover, dest, self._state.board):
            _LOGGER.debug(
                "Rejected %s %s -> %s",
                mover.kind.name.lower(),
                cell_name(selection.cell),
                cell_name(dest),
            )
            self._set_selection(IDLE)
            return ClickOutcome.REJECTED

        return self._apply_move(mover, dest)

    def _apply_move(self, mover: Piece, dest: Cell) -> ClickOutcome:
        board = self._state.board
        source = mover.position
        outcome = ClickOutcome.MOVED

        captured = board.piece_at(dest)
        if captured is not None:
            board.remove(captured.id)
            outcome = ClickOutcome.CAPTURED
            _LOGGER.info(
                "%s %s captured on %s",
                captured.color.label,
                captured.kind.name.lower(),
                cell_name(dest),
            )
            self._queue(self.events.on_piece_captured, PieceCaptured(captured.id))
            if captured.kind == PieceKind.KING:
                self._state.finish(mover.color)

        board.relocate(mover.id, dest)
        _LOGGER.info(
            "%s %s %s -> %s",
            mover.color.label,
            mover.kind.name.lower(),
            cell_name(source),
            cell_name(dest),
        )
        self._queue(self.events.on_piece_moved, PieceMoved(mover.id, source, dest))
        self._set_selection(IDLE)

        if self._state.is_game_over:
            winner = mover.color
            _LOGGER.info("Game over, %s wins (%s)", winner.label, board_to_fen(board))
            self._queue(self.events.on_game_over, GameOver(winner))
            return ClickOutcome.GAME_OVER

        self._state.turn = self._state.turn.opposite
        self._queue(self.events.on_turn_changed, TurnChanged(self._state.turn))
        return outcome

    def _set_selection(self, selection: Selection) -> None:
        previous = self._state.selection
        self._state.selection = selection
        if previous != selection:
            self._queue(self.events.on_selection_changed, SelectionChanged(selection))

    def _queue(self, callbacks: list, event: object) -> None:
        self._pending.append((callbacks, event))

    def _deliver(self) -> None:
        # Re-entrant clicks only queue; the outermost call drains in order.
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._pending:
                callbacks, event = self._pending.popleft()
                for cb in list(callbacks):
                    cb(event)
        except BaseException:
            self._pending.clear()
            raise
        finally:
            self._delivering = False
