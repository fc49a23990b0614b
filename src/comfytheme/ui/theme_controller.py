# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Editor state extracted from MainWindow.

Owns the current document, its provenance, and the AI remix lifecycle.
Emits signals so MainWindow can update widgets without holding any state
of its own.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from comfytheme.ai.gemini import GeminiGenerator, require_api_key
from comfytheme.ai.transform import Generator, StyleDirective, get_style, transform_theme
from comfytheme.core.config import AppConfig
from comfytheme.core.constants import CUSTOM, DEFAULT_AI_MODEL, DEFAULT_AI_STYLE, DEFAULT_PRESET
from comfytheme.core.models import Category, ThemeDocument
from comfytheme.core.mutation import apply_edit, next_provenance
from comfytheme.core.presets import load_preset
from comfytheme.core.theme_io import export_theme, import_theme, serialize_theme
from comfytheme.utils.error_handler import (
    MissingCredentialError,
    PresetNotFoundError,
    ThemeFormatError,
    TransformError,
)

logger = logging.getLogger("comfytheme.ui.theme_controller")

MISSING_KEY_MESSAGE = "Missing API Key. AI features are disabled, but the editor still works."
TRANSFORM_FAILED_MESSAGE = "Failed to generate theme."

# (api_key, model) -> generate callable
GeneratorFactory = Callable[[str, str], Generator]


def _gemini_factory(api_key: str, model: str) -> Generator:
    return GeminiGenerator(api_key, model)


class TransformWorker(QThread):
    """Background thread for one AI remix request."""
    result_ready = pyqtSignal(int, object, object)  # request_id, ThemeDocument | None, TransformError | None

    def __init__(self, request_id: int, document: ThemeDocument,
                 generate: Generator, style: StyleDirective) -> None:
        super().__init__()
        self.request_id = request_id
        self.document = document
        self.generate = generate
        self.style = style

    def run(self) -> None:
        try:
            result = transform_theme(self.document, self.generate, self.style)
        except TransformError as e:
            self.result_ready.emit(self.request_id, None, e)
            return
        except Exception as e:
            logger.exception("TransformWorker encountered an error")
            error = TransformError(f"Unexpected remix failure: {e}")
            error.__cause__ = e
            self.result_ready.emit(self.request_id, None, error)
            return
        self.result_ready.emit(self.request_id, result, None)


class ThemeController(QObject):
    """Manages the edited document and the remix request, no widget references."""

    # Signals
    document_changed = pyqtSignal(object)       # ThemeDocument
    provenance_changed = pyqtSignal(str)        # preset id or "custom"
    transform_state_changed = pyqtSignal(bool)  # True while a remix is in flight
    status_message = pyqtSignal(str)            # status bar text
    info_message = pyqtSignal(str)              # non-fatal notice (missing key)
    error_message = pyqtSignal(str)             # failure notice

    def __init__(
        self,
        config: AppConfig | None = None,
        generator_factory: GeneratorFactory | None = None,
        environ: Mapping[str, str] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._generator_factory = generator_factory or _gemini_factory
        self._environ = environ

        self._document: ThemeDocument = load_preset(DEFAULT_PRESET)
        self._provenance: str = DEFAULT_PRESET
        self._busy = False
        self._request_id = 0
        self._workers: set[TransformWorker] = set()

    # --- Properties ---

    @property
    def document(self) -> ThemeDocument:
        return self._document

    @property
    def provenance(self) -> str:
        return self._provenance

    @property
    def is_transforming(self) -> bool:
        return self._busy

    @property
    def request_id(self) -> int:
        return self._request_id

    def serialized(self) -> str:
        """Canonical JSON of the current document."""
        return serialize_theme(self._document)

    # --- Document changes ---

    def _set_document(self, document: ThemeDocument, provenance: str) -> None:
        self._document = document
        self.document_changed.emit(document)
        if provenance != self._provenance:
            self._provenance = provenance
            self.provenance_changed.emit(provenance)

    def load_preset(self, preset_id: str) -> bool:
        """Replace the document with a fresh copy of a preset."""
        try:
            document = load_preset(preset_id)
        except PresetNotFoundError as e:
            logger.warning(f"{e}")
            self.error_message.emit(f"Unknown preset: {preset_id}")
            return False

        self._supersede_transform()
        self._set_document(document, preset_id)
        self.status_message.emit(f"Loaded preset: {document.name}")
        return True

    def on_field_edit(self, category: Category | str, key: str, value: Any) -> None:
        """Apply one field edit; provenance becomes custom."""
        document = apply_edit(self._document, category, key, value)
        self._set_document(document, next_provenance(self._provenance))

    def load_document(self, document: ThemeDocument) -> None:
        """Adopt an externally produced document as a custom theme."""
        self._supersede_transform()
        self._set_document(document, CUSTOM)

    # --- Files ---

    def import_file(self, path: Path) -> bool:
        try:
            document = import_theme(path)
        except ThemeFormatError as e:
            logger.error(f"Import failed for {path}: {e}")
            self.error_message.emit(f"Could not import theme:\n{e}")
            return False
        self.load_document(document)
        self.status_message.emit(f"Imported {Path(path).name}")
        return True

    def export_file(self, path: Path) -> Path | None:
        try:
            written = export_theme(self._document, path)
        except OSError as e:
            logger.error(f"Export failed for {path}: {e}")
            self.error_message.emit(f"Could not export theme:\n{e}")
            return None
        self.status_message.emit(f"Exported {written.name}")
        return written

    # --- AI remix ---

    def request_transform(self, style_id: str | None = None) -> bool:
        """Start a remix of the current document; False if refused."""
        if self._busy:
            logger.info("Remix already in flight; request refused")
            return False

        try:
            api_key = require_api_key(self._environ)
        except MissingCredentialError as e:
            logger.warning(f"{e}")
            self.info_message.emit(MISSING_KEY_MESSAGE)
            return False

        model = self._config.ai_model if self._config else DEFAULT_AI_MODEL
        style = get_style(style_id or (self._config.ai_style if self._config else DEFAULT_AI_STYLE))
        generate = self._generator_factory(api_key, model)

        self._request_id += 1
        worker = TransformWorker(self._request_id, self._document, generate, style)
        worker.result_ready.connect(self._on_transform_result)
        worker.finished.connect(lambda w=worker: self._release_worker(w))
        self._workers.add(worker)

        self._set_busy(True)
        self.status_message.emit(f"Generating {style.theme_name} theme...")
        worker.start()
        return True

    def _on_transform_result(self, request_id: int, result: ThemeDocument | None,
                             error: TransformError | None) -> None:
        if request_id != self._request_id:
            logger.info(f"Ignoring stale remix result #{request_id} (latest #{self._request_id})")
            return
        self._set_busy(False)

        if error is not None or result is None:
            logger.error(f"Remix #{request_id} failed: {error}")
            self.error_message.emit(TRANSFORM_FAILED_MESSAGE)
            self.status_message.emit(TRANSFORM_FAILED_MESSAGE)
            return

        self._set_document(result, CUSTOM)
        self.status_message.emit(f"Generated theme: {result.name}")

    def _supersede_transform(self) -> None:
        """A whole-document replacement makes any in-flight result stale."""
        if self._busy:
            self._request_id += 1
            logger.info("In-flight remix superseded by a document load")
            self._set_busy(False)

    def _set_busy(self, busy: bool) -> None:
        if busy != self._busy:
            self._busy = busy
            self.transform_state_changed.emit(busy)

    def _release_worker(self, worker: TransformWorker) -> None:
        self._workers.discard(worker)
        worker.deleteLater()

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """Wait for running workers so no QThread outlives the app."""
        for worker in list(self._workers):
            if not worker.wait(timeout_ms):
                logger.warning("Remix worker still running at shutdown")
