# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Custom exceptions, logging setup, and crash-safe UI helpers."""

from __future__ import annotations

import functools
import logging
import sys
import traceback
from types import TracebackType
from typing import Any, Callable, TypeVar

from comfytheme.core.constants import DATA_DIR

F = TypeVar("F", bound=Callable[..., Any])

LOG_FILENAME = "comfytheme.log"

# HTTP chatter from the AI backend; one INFO line per request otherwise
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai")


class ComfyThemeError(Exception):
    """Base exception for ComfyTheme."""


class ThemeFormatError(ComfyThemeError):
    """Theme JSON is unreadable or does not have the document shape."""


class PresetNotFoundError(ComfyThemeError):
    """No preset with the requested id."""


class ConfigurationError(ComfyThemeError):
    """The environment is missing something a feature needs."""


class MissingCredentialError(ConfigurationError):
    """No API key is configured for the AI backend."""


class TransformError(ComfyThemeError):
    """AI transform failed: network, empty response, bad JSON, or wrong shape."""


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the ``comfytheme`` logger tree.

    Module loggers are named after their package area (``comfytheme.core.*``,
    ``comfytheme.ai.*``, ``comfytheme.ui.*``, ``comfytheme.preview.*``) and
    propagate here. Log files go to ``DATA_DIR/logs``.
    """
    logger = logging.getLogger("comfytheme")
    # Guard against duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if debug else logging.INFO)
    console.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(console)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    # File handler with rotation (5 MB max, 3 backups)
    from logging.handlers import RotatingFileHandler
    log_dir = DATA_DIR / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME, maxBytes=5 * 1024 * 1024,
        backupCount=3, encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    ))
    logger.addHandler(file_handler)

    return logger


def install_global_exception_handler() -> None:
    """Install sys.excepthook so unhandled exceptions show a dialog instead of silently crashing.

    PyQt6 calls qFatal() on unhandled exceptions in slots, which terminates the
    process with no user feedback. This hook logs the exception and shows a
    critical dialog.
    """
    logger = logging.getLogger("comfytheme")

    def _handle_exception(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        logger.critical(
            "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb),
        )

        try:
            from PyQt6.QtWidgets import QMessageBox
            tb_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
            dialog = QMessageBox()
            dialog.setIcon(QMessageBox.Icon.Critical)
            dialog.setWindowTitle("ComfyTheme: Unexpected Error")
            dialog.setText(f"{exc_type.__name__}: {exc_value}")
            dialog.setDetailedText(tb_text)
            dialog.exec()
        except Exception:
            traceback.print_exception(exc_type, exc_value, exc_tb)

    sys.excepthook = _handle_exception


def safe_slot(func: F) -> F:
    """Decorator for Qt slot methods: catches exceptions and shows an error dialog.

    Use on any method connected to a Qt signal (menu actions, button clicks, etc.)
    so that a bug in one handler doesn't silently kill the app.
    """
    @functools.wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except Exception as exc:
            # log under the module that owns the slot, e.g. comfytheme.ui.main_window
            _logger = logging.getLogger(type(self).__module__)
            _logger.exception("Error in %s", func.__name__)
            try:
                from PyQt6.QtWidgets import QMessageBox
                QMessageBox.warning(
                    self, "Error",
                    f"An error occurred in {func.__name__}:\n\n"
                    f"{type(exc).__name__}: {exc}",
                )
            except Exception:
                pass  # Already logged above
    return wrapper  # type: ignore[return-value]
