"""Visual theme constants and QSS styles for kingcapture."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # armed piece origin
    highlight_to: QColor  # legal destinations
    hover: QColor  # cell under the cursor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor
    black_piece: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(255, 230, 230),
            dark_square=QColor(0, 26, 26),
            highlight_from=QColor(230, 26, 26, 140),
            highlight_to=QColor(204, 77, 77, 90),
            hover=QColor(204, 77, 77, 160),
            coord_light=QColor(255, 230, 230),
            coord_dark=QColor(0, 26, 26),
            white_piece=QColor(255, 204, 204),
            black_piece=QColor(0, 51, 51),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            hover=QColor(255, 255, 255, 70),
            coord_light=QColor(222, 227, 230),
            coord_dark=QColor(140, 162, 173),
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(20, 20, 20),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            hover=QColor(255, 255, 255, 70),
            coord_light=QColor(236, 238, 220),
            coord_dark=QColor(112, 149, 120),
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(20, 20, 20),
        )

    @classmethod
    def named(cls, name: str) -> BoardTheme:
        """Theme for a settings name, falling back to the classic one."""
        presets = {
            "Classic": cls.default,
            "Blue": cls.blue,
            "Green": cls.green,
        }
        return presets.get(name, cls.default)()


APP_STYLE = """
QMainWindow {
    background-color: #1e1e1e;
}
QLabel#turnLabel {
    color: #cccccc;
    font-size: 28px;
    font-weight: bold;
    padding: 8px 12px;
}
"""
