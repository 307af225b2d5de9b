"""MainWindow — board view plus the turn indicator."""

from __future__ import annotations

from PyQt6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from kingcapture.core.enums import Color
from kingcapture.game.controller import GameController
from kingcapture.settings import AppSettings
from kingcapture.ui.board.board_view import BoardView
from kingcapture.ui.game_signals import GameSignals
from kingcapture.ui.styles.theme import BoardTheme


def turn_text(color: Color) -> str:
    return f"Next move: {color.label}"


def game_over_text(winner: Color) -> str:
    return f"Game over: {winner.label} wins"


class MainWindow(QMainWindow):
    """Top-level window hosting one game."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or AppSettings()
        self._controller = GameController.from_fen(self._settings.start_fen)
        self._signals = GameSignals(self._controller, self)

        self.setWindowTitle("kingcapture")
        self.resize(900, 960)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        self._turn_label = QLabel(turn_text(self._controller.turn))
        self._turn_label.setObjectName("turnLabel")
        layout.addWidget(self._turn_label)

        self._board_view = BoardView(self._signals, central)
        layout.addWidget(self._board_view, 1)
        self.setCentralWidget(central)

        self._signals.turn_changed.connect(self._on_turn_changed)
        self._signals.game_over.connect(self._on_game_over)

        self._apply_settings()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def turn_label(self) -> QLabel:
        return self._turn_label

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply_settings(self) -> None:
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.named(s.board_theme))
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        scene.set_animate_moves(s.animate_moves)

    def _on_turn_changed(self, color: Color) -> None:
        self._turn_label.setText(turn_text(color))

    def _on_game_over(self, winner: Color) -> None:
        self._turn_label.setText(game_over_text(winner))
