"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from kingcapture.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send log records to stderr at *level*."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from kingcapture.ui.styles.theme import APP_STYLE

    app.setApplicationName("kingcapture")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from kingcapture.ui.main_window import MainWindow

    argv = sys.argv if argv is None else argv
    settings = AppSettings.from_argv(argv[1:])
    configure_logging(settings.log_level)
    _LOGGER.info("Starting from %s", settings.start_fen)

    app = QApplication(argv[:1])
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    return app.exec()
