"""Qt bridge that re-emits controller callbacks as signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from kingcapture.game.controller import GameController
from kingcapture.game.events import (
    GameOver,
    PieceCaptured,
    PieceMoved,
    SelectionChanged,
    TurnChanged,
)


class GameSignals(QObject):
    """Signal front for one :class:`GameController`.

    Signals:
        piece_moved(int, object, object): piece id, source cell, destination cell.
        piece_captured(int): id of the removed piece.
        turn_changed(object): the color now to move.
        game_over(object): the winning color.
        selection_changed(object): the new selection state.
    """

    piece_moved = pyqtSignal(int, object, object)
    piece_captured = pyqtSignal(int)
    turn_changed = pyqtSignal(object)
    game_over = pyqtSignal(object)
    selection_changed = pyqtSignal(object)

    def __init__(
        self, controller: GameController, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        events = controller.events
        events.on_piece_moved.append(self._on_piece_moved)
        events.on_piece_captured.append(self._on_piece_captured)
        events.on_turn_changed.append(self._on_turn_changed)
        events.on_game_over.append(self._on_game_over)
        events.on_selection_changed.append(self._on_selection_changed)

    @property
    def controller(self) -> GameController:
        return self._controller

    def _on_piece_moved(self, event: PieceMoved) -> None:
        self.piece_moved.emit(event.piece_id, event.source, event.destination)

    def _on_piece_captured(self, event: PieceCaptured) -> None:
        self.piece_captured.emit(event.piece_id)

    def _on_turn_changed(self, event: TurnChanged) -> None:
        self.turn_changed.emit(event.color)

    def _on_game_over(self, event: GameOver) -> None:
        self.game_over.emit(event.winner)

    def _on_selection_changed(self, event: SelectionChanged) -> None:
        self.selection_changed.emit(event.selection)
