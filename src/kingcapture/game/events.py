"""Input and output events exchanged with the presentation layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from kingcapture.core.enums import Color
from kingcapture.core.types import Cell

if TYPE_CHECKING:
    from kingcapture.game.state import Selection

# ── Inputs ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CellClicked:
    """The picking layer resolved a click to *cell*."""

    cell: Cell


@dataclass(frozen=True, slots=True)
class NoCellClicked:
    """A click landed outside the board."""


ClickEvent: TypeAlias = CellClicked | NoCellClicked

# ── Outputs ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PieceMoved:
    piece_id: int
    source: Cell
    destination: Cell


@dataclass(frozen=True, slots=True)
class PieceCaptured:
    piece_id: int


@dataclass(frozen=True, slots=True)
class TurnChanged:
    color: Color


@dataclass(frozen=True, slots=True)
class GameOver:
    winner: Color


@dataclass(frozen=True, slots=True)
class SelectionChanged:
    selection: Selection


PieceMovedCallback = Callable[[PieceMoved], None]
PieceCapturedCallback = Callable[[PieceCaptured], None]
TurnChangedCallback = Callable[[TurnChanged], None]
GameOverCallback = Callable[[GameOver], None]
SelectionCallback = Callable[[SelectionChanged], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_piece_moved: list[PieceMovedCallback] = field(default_factory=list)
    on_piece_captured: list[PieceCapturedCallback] = field(default_factory=list)
    on_turn_changed: list[TurnChangedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
