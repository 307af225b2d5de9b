"""Game management layer — turn order, click selection, end of game.

Quick start::

    from kingcapture.game import GameController
    from kingcapture.core import Color, parse_cell

    ctrl = GameController()
    ctrl.handle_click(parse_cell("e2"))
    ctrl.handle_click(parse_cell("e4"))
    assert ctrl.turn == Color.BLACK
"""

from kingcapture.game.controller import GameController
from kingcapture.game.events import (
    CellClicked,
    ClickEvent,
    GameEvents,
    GameOver,
    NoCellClicked,
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
    Idle,
    PieceChosen,
    Selection,
    SquareChosen,
)

__all__ = [
    # Events
    "CellClicked",
    "ClickEvent",
    "GameEvents",
    "GameOver",
    "NoCellClicked",
    "PieceCaptured",
    "PieceMoved",
    "SelectionChanged",
    "TurnChanged",
    # State
    "IDLE",
    "ClickOutcome",
    "GamePhase",
    "GameState",
    "Idle",
    "PieceChosen",
    "Selection",
    "SquareChosen",
    # Concrete
    "GameController",
]
