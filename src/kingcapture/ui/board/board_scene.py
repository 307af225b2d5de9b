"""BoardScene — QGraphicsScene that draws the board and forwards clicks."""

from __future__ import annotations

from PyQt6.QtCore import (
    QAbstractAnimation,
    QEasingCurve,
    QObject,
    QPointF,
    Qt,
    QVariantAnimation,
)
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from kingcapture.core.enums import Color
from kingcapture.core.piece import Piece
from kingcapture.core.rules import legal_destinations
from kingcapture.core.types import ALL_CELLS, Cell
from kingcapture.game.state import PieceChosen, Selection
from kingcapture.ui.game_signals import GameSignals
from kingcapture.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders tiles, coordinates, highlights and piece glyphs.

    Acts as the picking layer: each mouse press is resolved to a cell (or
    to ``None`` outside the board) and handed to the controller. Piece items
    follow the controller's ``piece_moved`` / ``piece_captured`` signals.
    """

    TILE = 80  # px per square

    _ANIM_DURATION_MS = 150

    def __init__(self, signals: GameSignals, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._signals = signals
        self._controller = signals.controller
        self._theme = BoardTheme.default()
        self._interactive = not self._controller.is_game_over
        self._show_coordinates = True
        self._show_legal_moves = True
        self._animate_moves = True
        self._active_anim: QVariantAnimation | None = None
        self._hover_cell: Cell | None = None

        # Visual layers
        self._square_items: dict[Cell, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._highlight_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[int, QGraphicsSimpleTextItem] = {}
        self._hover_item: QGraphicsRectItem | None = None

        signals.piece_moved.connect(self._on_piece_moved)
        signals.piece_captured.connect(self._on_piece_captured)
        signals.selection_changed.connect(self._on_selection_changed)
        signals.game_over.connect(self._on_game_over)

        self._draw_board()
        self._sync_pieces()

    # ── Public API ───────────────────────────────────────────────────────

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable click forwarding."""
        self._interactive = interactive
        if not interactive:
            self.clear_hover()

    def is_interactive(self) -> bool:
        return self._interactive

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self._sync_pieces()
        self._on_selection_changed(self._controller.selection)
        self._set_hover(self._hover_cell)

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-destination highlights."""
        self._show_legal_moves = visible
        self._on_selection_changed(self._controller.selection)

    def set_animate_moves(self, enabled: bool) -> None:
        """Slide pieces to their new cell instead of jumping."""
        self._animate_moves = enabled
        if not enabled:
            self._finish_animation()

    def piece_item(self, piece_id: int) -> QGraphicsSimpleTextItem | None:
        return self._piece_items.get(piece_id)

    def hovered_cell(self) -> Cell | None:
        return self._hover_cell

    def clear_hover(self) -> None:
        self._set_hover(None)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont("Sans Serif", max(9, t // 8))

        for cell in ALL_CELLS:
            col, row = self._visual_coords(cell)
            is_light = (cell.rank + cell.file + 1) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = QGraphicsRectItem(col * t, row * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[cell] = rect

            text = self._theme.coord_dark if is_light else self._theme.coord_light
            x, y = col * t, row * t
            # Rank numbers (left edge)
            if cell.file == 0:
                self._add_coord(str(cell.rank + 1), font, text, x + 2, y + 1)
            # File letters (bottom edge)
            if cell.rank == 0:
                letter = chr(ord("a") + cell.file)
                self._add_coord(letter, font, text, x + t - 12, y + t - 16)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(
        self, label: str, font: QFont, color: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the controller's board."""
        self._finish_animation()
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        for piece in self._controller.board.all_pieces():
            item = self._make_piece_item(piece)
            self.addItem(item)
            self._piece_items[piece.id] = item
            self._place_item(item, piece.position)

    def _make_piece_item(self, piece: Piece) -> QGraphicsSimpleTextItem:
        item = QGraphicsSimpleTextItem(piece.symbol)
        item.setFont(QFont("Sans Serif", int(self.TILE * 0.6)))
        fill = (
            self._theme.white_piece
            if piece.color == Color.WHITE
            else self._theme.black_piece
        )
        item.setBrush(QBrush(fill))
        item.setPen(QPen(QColor(128, 128, 128)))
        item.setZValue(1)
        return item

    def _item_origin(self, item: QGraphicsSimpleTextItem, cell: Cell) -> QPointF:
        """Top-left position that centres *item* on *cell*."""
        t = self.TILE
        col, row = self._visual_coords(cell)
        bounds = item.boundingRect()
        return QPointF(
            col * t + (t - bounds.width()) / 2,
            row * t + (t - bounds.height()) / 2,
        )

    def _place_item(self, item: QGraphicsSimpleTextItem, cell: Cell) -> None:
        item.setPos(self._item_origin(item, cell))

    def _on_piece_moved(
        self, piece_id: int, _source: object, destination: object
    ) -> None:
        item = self._piece_items.get(piece_id)
        if item is None or not isinstance(destination, Cell):
            return
        self._finish_animation()
        if not self._animate_moves:
            self._place_item(item, destination)
            return

        target = self._item_origin(item, destination)
        item.setZValue(2)

        anim = QVariantAnimation(self)
        anim.setDuration(self._ANIM_DURATION_MS)
        anim.setStartValue(item.pos())
        anim.setEndValue(target)
        anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        anim.valueChanged.connect(lambda value: item.setPos(value))

        def _on_finished() -> None:
            self._active_anim = None
            item.setPos(target)
            item.setZValue(1)

        anim.finished.connect(_on_finished)
        self._active_anim = anim
        anim.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    def _finish_animation(self) -> None:
        """Jump a running slide to its end."""
        anim = self._active_anim
        if anim is None:
            return
        anim.setCurrentTime(anim.duration())
        if self._active_anim is anim:
            anim.stop()

    def _on_piece_captured(self, piece_id: int) -> None:
        self._finish_animation()
        item = self._piece_items.pop(piece_id, None)
        if item is not None:
            self.removeItem(item)

    def _on_game_over(self, _winner: object) -> None:
        self.set_interactive(False)

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or event is None:
            return super().mousePressEvent(event)
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)

        self._controller.handle_click(self._pos_to_cell(event.scenePos()))
        event.accept()

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or event is None:
            return super().mouseMoveEvent(event)

        cell = self._pos_to_cell(event.scenePos())
        if cell != self._hover_cell:
            self._set_hover(cell)
        event.accept()

    # ── Selection / highlights ───────────────────────────────────────────

    def _set_hover(self, cell: Cell | None) -> None:
        if self._hover_item is not None:
            self.removeItem(self._hover_item)
            self._hover_item = None
        self._hover_cell = cell
        if cell is not None:
            self._hover_item = self._make_highlight(cell, self._theme.hover)
            self._hover_item.setZValue(0.9)

    def _on_selection_changed(self, selection: Selection) -> None:
        self._clear_items(self._highlight_items)
        if not isinstance(selection, PieceChosen):
            return

        origin = self._make_highlight(selection.cell, self._theme.highlight_from)
        self._highlight_items.append(origin)
        if self._show_legal_moves:
            board = self._controller.board
            for cell in legal_destinations(selection.piece, board):
                dot = self._make_highlight(cell, self._theme.highlight_to)
                self._highlight_items.append(dot)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    @staticmethod
    def _visual_coords(cell: Cell) -> tuple[int, int]:
        """Convert a board cell to visual column/row (rank 8 on top)."""
        return cell.file, 7 - cell.rank

    def _pos_to_cell(self, pos: QPointF) -> Cell | None:
        """Scene position → board cell, ``None`` outside the board."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        return Cell(7 - row, col)

    def _make_highlight(self, cell: Cell, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a cell."""
        t = self.TILE
        col, row = self._visual_coords(cell)
        rect = QGraphicsRectItem(col * t, row * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
