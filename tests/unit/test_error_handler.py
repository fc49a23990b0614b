# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for error_handler.py: exception hierarchy, logging setup, global hook, safe_slot."""

from __future__ import annotations

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from comfytheme.utils.error_handler import (
    ComfyThemeError,
    ConfigurationError,
    MissingCredentialError,
    PresetNotFoundError,
    ThemeFormatError,
    LOG_FILENAME,
    NOISY_LOGGERS,
    TransformError,
    install_global_exception_handler,
    safe_slot,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Custom exception hierarchy
# ---------------------------------------------------------------------------


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc", [ThemeFormatError, PresetNotFoundError, ConfigurationError, TransformError],
    )
    def test_is_comfytheme_error(self, exc):
        assert issubclass(exc, ComfyThemeError)

    def test_missing_credential_is_configuration_error(self):
        assert issubclass(MissingCredentialError, ConfigurationError)

    def test_can_catch_via_base(self):
        with pytest.raises(ComfyThemeError):
            raise TransformError("no response")


# ---------------------------------------------------------------------------
# setup_logging()
# ---------------------------------------------------------------------------


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _clean_logger(self):
        logger = logging.getLogger("comfytheme")
        logger.handlers.clear()
        yield
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_logger_name(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            logger = setup_logging()
        assert logger.name == "comfytheme"

    def test_debug_level(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            assert setup_logging(debug=True).level == logging.DEBUG

    def test_info_level(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            assert setup_logging().level == logging.INFO

    def test_console_and_file_handlers(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            logger = setup_logging()
        handler_types = {type(h).__name__ for h in logger.handlers}
        assert handler_types == {"StreamHandler", "RotatingFileHandler"}
        assert (tmp_path / "logs" / LOG_FILENAME).exists()

    def test_backend_http_logs_quieted(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            setup_logging()
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_backend_http_logs_in_debug(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            setup_logging(debug=True)
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG

    def test_duplicate_handler_guard(self, tmp_path):
        with patch("comfytheme.utils.error_handler.DATA_DIR", tmp_path):
            count = len(setup_logging().handlers)
            assert len(setup_logging().handlers) == count


# ---------------------------------------------------------------------------
# install_global_exception_handler()
# ---------------------------------------------------------------------------


class TestInstallGlobalExceptionHandler:
    @pytest.fixture(autouse=True)
    def _restore_excepthook(self):
        original = sys.excepthook
        yield
        sys.excepthook = original

    def test_replaces_sys_excepthook(self):
        original = sys.excepthook
        install_global_exception_handler()
        assert sys.excepthook is not original

    def test_keyboard_interrupt_passed_through(self):
        install_global_exception_handler()
        with patch.object(sys, "__excepthook__") as mock_default:
            try:
                raise KeyboardInterrupt()
            except KeyboardInterrupt:
                sys.excepthook(*sys.exc_info())
        mock_default.assert_called_once()
        assert mock_default.call_args[0][0] is KeyboardInterrupt

    def test_dialog_shown(self):
        install_global_exception_handler()
        mock_widgets = MagicMock()
        dialog = mock_widgets.QMessageBox.return_value
        with patch.dict("sys.modules", {"PyQt6": MagicMock(), "PyQt6.QtWidgets": mock_widgets}):
            try:
                raise RuntimeError("crash")
            except RuntimeError:
                sys.excepthook(*sys.exc_info())
        dialog.exec.assert_called_once()
        dialog.setWindowTitle.assert_called_once_with("ComfyTheme: Unexpected Error")


# ---------------------------------------------------------------------------
# safe_slot()
# ---------------------------------------------------------------------------


class FakeWidget:
    """Minimal stand-in for a QWidget."""

    @safe_slot
    def working(self, x: int, y: int) -> int:
        return x + y

    @safe_slot
    def failing(self) -> None:
        raise ValueError("broken slot")


class TestSafeSlot:
    def test_passes_return_value(self):
        assert FakeWidget().working(2, 3) == 5

    def test_exception_is_logged_and_swallowed(self, caplog):
        with patch("PyQt6.QtWidgets.QMessageBox.warning") as mock_warning:
            with caplog.at_level(logging.ERROR):
                assert FakeWidget().failing() is None
        assert "Error in failing" in caplog.text
        assert caplog.records[-1].name == FakeWidget.__module__
        mock_warning.assert_called_once()
        assert "broken slot" in mock_warning.call_args[0][2]

    def test_preserves_name(self):
        assert FakeWidget.failing.__name__ == "failing"
