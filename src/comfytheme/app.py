# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""QApplication setup and configuration."""

from __future__ import annotations

import sys

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from comfytheme.core.constants import APP_NAME, APP_VERSION
from comfytheme.ui.main_window import MainWindow
from comfytheme.ui.styles import get_stylesheet
from comfytheme.utils.error_handler import install_global_exception_handler, setup_logging


def create_app(debug: bool = False) -> tuple[QApplication, MainWindow]:
    """Create and configure the application."""
    setup_logging(debug=debug)
    install_global_exception_handler()

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setStyle("Fusion")
    app.setStyleSheet(get_stylesheet())

    # Default font
    font = QFont("Segoe UI", 10)
    app.setFont(font)

    window = MainWindow()
    return app, window


def run_app(debug: bool = False) -> int:
    """Create and run the application."""
    app, window = create_app(debug=debug)
    window.show()
    return app.exec()
