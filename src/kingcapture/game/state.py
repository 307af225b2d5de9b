"""Game state — board, turn, click selection and terminal status."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TypeAlias

from kingcapture.core.board import Board
from kingcapture.core.enums import Color
from kingcapture.core.piece import Piece
from kingcapture.core.types import Cell

# ── Phase / outcome enums ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class ClickOutcome(IntEnum):
    """What a single click did to the game."""

    IGNORED = auto()  # nothing changed
    SELECTED = auto()  # own piece armed
    DESELECTED = auto()  # armed piece released
    REJECTED = auto()  # illegal destination, selection dropped
    MOVED = auto()  # quiet move applied
    CAPTURED = auto()  # move applied, opposing piece removed
    GAME_OVER = auto()  # move applied, a king was taken


# ── Selection states ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Idle:
    """No cell chosen."""


@dataclass(frozen=True, slots=True)
class SquareChosen:
    """A cell was clicked but holds nothing the side to move can arm.

    Part of the selection vocabulary only: the controller resolves such a
    click straight back to :data:`IDLE`, so it is never a resting state.
    """

    cell: Cell


@dataclass(frozen=True, slots=True)
class PieceChosen:
    """The side to move has armed *piece* on *cell* and must pick a target."""

    piece: Piece
    cell: Cell


Selection: TypeAlias = Idle | SquareChosen | PieceChosen

IDLE = Idle()


@dataclass
class GameState:
    """Everything that changes while a game is played.

    This is a pure data class — no threading, no UI. Only
    :class:`~kingcapture.game.controller.GameController` mutates it.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    selection: Selection = IDLE
    phase: GamePhase = GamePhase.AWAITING_MOVE
    winner: Color | None = None

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def finish(self, winner: Color) -> None:
        self.winner = winner
        self.phase = GamePhase.GAME_OVER
