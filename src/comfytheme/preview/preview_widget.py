# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Live mock of a ComfyUI workspace, painted from a theme document.

Every element that stands for a theme field is a RegionFrame or
RegionLabel carrying a region id. A left click is consumed by the
innermost region under the cursor, so one click selects exactly one
field. Plain QLabels ignore the press and let it reach their region
parent. A click that lands on no region at all selects the canvas.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from comfytheme.core.models import ThemeDocument
from comfytheme.preview.regions import (
    CANVAS_REGION,
    bus_dot_region,
    bus_label_region,
    bus_slot_keys,
    region_object_name,
    region_stylesheet,
    resolve_region,
)

logger = logging.getLogger("comfytheme.preview.preview_widget")

NODE_WIDTH = 220
SLOT_DOT_SIZE = 10
SIDEBAR_WIDTH = 240
CANVAS_MIN_WIDTH = 860
CANVAS_MIN_HEIGHT = 560

_SLOT_DOT_QSS = f"border-radius: {SLOT_DOT_SIZE // 2}px;"
_PILL_QSS = "padding: 1px 8px; border-radius: 8px;"
_BUTTON_QSS = "padding: 4px 10px; border-radius: 4px;"


class RegionFrame(QFrame):
    """Container region. Clicks not taken by a child region land here."""

    clicked = pyqtSignal(str)

    def __init__(self, region_id: str, base_qss: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.region_id = region_id
        self.base_qss = base_qss
        self.setObjectName(region_object_name(region_id))
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def apply_document(self, document: ThemeDocument) -> None:
        self.setStyleSheet(region_stylesheet(self.region_id, document, self.base_qss))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            self.clicked.emit(self.region_id)
            return
        super().mousePressEvent(event)


class RegionLabel(QLabel):
    """Text region, such as a title, a slot label or a widget value."""

    clicked = pyqtSignal(str)

    def __init__(self, region_id: str, text: str, base_qss: str = "",
                 parent: QWidget | None = None) -> None:
        super().__init__(text, parent)
        self.region_id = region_id
        self.base_qss = base_qss
        self.setObjectName(region_object_name(region_id))
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def apply_document(self, document: ThemeDocument) -> None:
        self.setStyleSheet(region_stylesheet(self.region_id, document, self.base_qss))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            self.clicked.emit(self.region_id)
            return
        super().mousePressEvent(event)


class ThemePreview(QWidget):
    """Workspace mock: menu bar, graph canvas with five nodes, queue sidebar."""

    region_clicked = pyqtSignal(str)        # region id
    region_selected = pyqtSignal(str, str)  # category, key

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._document: ThemeDocument | None = None
        self._regions: dict[str, RegionFrame | RegionLabel] = {}
        self._bus_keys: list[str] = []
        self._bus_rows: list[QWidget] = []

        self._setup_ui()

    # --- Public API ---

    @property
    def document(self) -> ThemeDocument | None:
        return self._document

    def set_document(self, document: ThemeDocument) -> None:
        """Repaint from ``document``. Passing the current document is a no-op."""
        if document is self._document:
            return
        self._document = document

        keys = bus_slot_keys(document)
        if keys != self._bus_keys:
            self._rebuild_bus(keys)

        for region in self._regions.values():
            region.apply_document(document)
        self._relayout()

    def region_ids(self) -> list[str]:
        return list(self._regions)

    def region_widget(self, region_id: str) -> RegionFrame | RegionLabel | None:
        return self._regions.get(region_id)

    # --- Events ---

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            self._on_region_clicked(CANVAS_REGION)
            return
        super().mousePressEvent(event)

    def _on_region_clicked(self, region_id: str) -> None:
        try:
            ref = resolve_region(region_id)
        except KeyError:
            logger.warning("Click on unmapped preview region %r", region_id)
            return
        logger.debug("Preview click %s -> %s", region_id, ref)
        self.region_clicked.emit(region_id)
        self.region_selected.emit(ref.category.value, ref.key)

    # --- Construction ---

    def _register(self, region: RegionFrame | RegionLabel) -> RegionFrame | RegionLabel:
        self._regions[region.region_id] = region
        region.clicked.connect(self._on_region_clicked)
        if self._document is not None:
            region.apply_document(self._document)
        return region

    def _frame(self, region_id: str, parent: QWidget | None = None, base_qss: str = "") -> RegionFrame:
        return self._register(RegionFrame(region_id, base_qss, parent))

    def _label(self, region_id: str, text: str, parent: QWidget | None = None,
               base_qss: str = "") -> RegionLabel:
        return self._register(RegionLabel(region_id, text, base_qss, parent))

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._build_menu_bar())

        shadow = self._frame("menu.shadow")
        shadow.setFixedHeight(4)
        layout.addWidget(shadow)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)
        body.addWidget(self._build_canvas(), 1)
        body.addWidget(self._build_sidebar())
        layout.addLayout(body, 1)

        footer = self._label("app.footer", "Queue size: 0  |  Ready", base_qss="padding: 3px 10px;")
        layout.addWidget(footer)

    def _build_menu_bar(self) -> QWidget:
        bar = self._frame("menu.bar")
        row = QHBoxLayout(bar)
        row.setContentsMargins(10, 6, 10, 6)
        row.setSpacing(6)

        row.addWidget(self._label("menu.title", "ComfyUI", base_qss="font-weight: bold; font-size: 15px;"))
        row.addStretch(1)
        row.addWidget(self._label("menu.button.queue", "Queue Prompt", base_qss=_BUTTON_QSS))
        row.addWidget(self._label("menu.button.options", "Extra Options", base_qss=_BUTTON_QSS))
        row.addWidget(self._label("menu.button.history", "View History", base_qss=_BUTTON_QSS))
        row.addWidget(self._label("menu.button.hover", "Load", base_qss=_BUTTON_QSS))
        row.addWidget(self._label("menu.settings", "⚙ Settings", base_qss="padding: 4px;"))
        return bar

    def _build_sidebar(self) -> QWidget:
        panel = self._frame("sidebar.panel")
        panel.setFixedWidth(SIDEBAR_WIDTH)
        col = QVBoxLayout(panel)
        col.setContentsMargins(0, 8, 0, 0)
        col.setSpacing(0)

        title = self._label("sidebar.title", "Queue", base_qss="font-weight: bold; padding: 2px 10px 6px 10px;")
        col.addWidget(title)
        divider = self._frame("sidebar.divider")
        divider.setFixedHeight(3)
        col.addWidget(divider)

        statuses = {0: ("sidebar.row.0.status", "Running"), 1: ("sidebar.row.1.status", "Pending")}
        for i in range(4):
            row = self._frame(f"sidebar.row.{i}")
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(10, 6, 10, 6)
            row_layout.addWidget(QLabel(f"#{2400 + i}  txt2img"))
            row_layout.addStretch(1)
            if i in statuses:
                rid, text = statuses[i]
                row_layout.addWidget(self._label(rid, text, base_qss=_PILL_QSS))
            else:
                row_layout.addWidget(QLabel("Done"))
            col.addWidget(row)

        col.addSpacing(8)
        col.addWidget(self._label("sidebar.error", "Prompt outputs failed validation",
                                  base_qss="padding: 2px 10px;"))
        col.addSpacing(6)
        hint = self._label("sidebar.drop_hint", "Drop a workflow here", base_qss="padding: 10px; margin: 0 10px;")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        col.addWidget(hint)
        col.addStretch(1)

        options = self._frame("sidebar.options")
        opt_layout = QVBoxLayout(options)
        opt_layout.setContentsMargins(10, 8, 10, 8)
        opt_layout.setSpacing(4)
        opt_layout.addWidget(self._label("sidebar.options.caption", "BATCH OPTIONS",
                                         base_qss="font-size: 10px; font-weight: bold;"))
        opt_layout.addWidget(self._label("sidebar.options.extra", "☐ Extra options"))
        opt_layout.addWidget(self._label("sidebar.options.auto", "☐ Auto Queue"))
        col.addWidget(options)
        return panel

    # --- Graph canvas ---

    def _build_canvas(self) -> QWidget:
        canvas = self._frame(CANVAS_REGION)
        canvas.setMinimumSize(CANVAS_MIN_WIDTH, CANVAS_MIN_HEIGHT)
        self._canvas = canvas

        # Stacking follows creation order: group first, then shadows, links, nodes
        group = self._frame("group.frame", canvas, base_qss="background: transparent; border-radius: 4px;")
        group.setGeometry(20, 20, 560, 310)
        title = self._label("group.title", "Sampling", group, base_qss="background: transparent;")
        title.move(10, 4)

        self._loader_shadow = self._frame("loader.shadow", canvas)
        self._links = {
            "link.model": self._frame("link.model", canvas),
            "link.clip": self._frame("link.clip", canvas),
            "link.event": self._frame("link.event", canvas),
            "link.connecting": self._frame("link.connecting", canvas, base_qss="background: transparent;"),
        }

        self._loader = self._build_loader(canvas)
        self._loader.move(40, 70)
        self._sampler = self._build_sampler(canvas)
        self._sampler.move(340, 60)
        self._bus = self._build_bus(canvas)
        self._bus.move(620, 40)
        self._bypass = self._build_bypass(canvas)
        self._bypass.move(40, 370)
        self._error = self._build_error(canvas)
        self._error.move(340, 380)

        self._relayout()
        return canvas

    def _node_frame(self, region_id: str, parent: QWidget) -> tuple[RegionFrame, QVBoxLayout]:
        node = self._frame(region_id, parent)
        node.setFixedWidth(NODE_WIDTH)
        col = QVBoxLayout(node)
        col.setContentsMargins(0, 0, 0, 8)
        col.setSpacing(4)
        return node, col

    def _header(self, region_id: str, parent: QWidget) -> tuple[RegionFrame, QHBoxLayout]:
        header = self._frame(region_id, parent, base_qss="border-top-left-radius: 6px; border-top-right-radius: 6px;")
        row = QHBoxLayout(header)
        row.setContentsMargins(8, 4, 8, 4)
        row.setSpacing(6)
        return header, row

    def _slot_row(self, layout: QVBoxLayout, dot_id: str, label_id: str, text: str,
                  output: bool = False) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setContentsMargins(8, 0, 8, 0)
        row.setSpacing(6)
        dot = self._frame(dot_id, base_qss=_SLOT_DOT_QSS)
        dot.setFixedSize(SLOT_DOT_SIZE, SLOT_DOT_SIZE)
        label = self._label(label_id, text, base_qss="background: transparent;")
        if output:
            row.addStretch(1)
            row.addWidget(label)
            row.addWidget(dot)
        else:
            row.addWidget(dot)
            row.addWidget(label)
            row.addStretch(1)
        layout.addLayout(row)
        return row

    def _build_loader(self, canvas: QWidget) -> RegionFrame:
        node, col = self._node_frame("loader.body", canvas)
        header, row = self._header("loader.header", node)
        box = self._frame("loader.header.box")
        box.setFixedSize(8, 8)
        row.addWidget(box)
        row.addWidget(self._label("loader.title", "Load Checkpoint", base_qss="background: transparent;"))
        row.addStretch(1)
        col.addWidget(header)

        for slot in ("MODEL", "CLIP", "VAE"):
            self._slot_row(col, f"loader.slot.{slot}.dot", f"loader.slot.{slot}.label", slot, output=True)

        widget = self._label("loader.widget.ckpt", "ckpt_name   sd_xl_base_1.0.safetensors",
                             base_qss="padding: 2px 8px; margin: 0 8px; border-radius: 8px;")
        col.addWidget(widget)
        return node

    def _build_sampler(self, canvas: QWidget) -> RegionFrame:
        node, col = self._node_frame("sampler.body", canvas)
        header, row = self._header("sampler.header", node)
        row.addWidget(self._label("sampler.title", "KSampler", base_qss="background: transparent;"))
        row.addStretch(1)
        row.addWidget(self._label("sampler.badge", "#3", base_qss=_PILL_QSS))
        col.addWidget(header)

        inputs = (("model", "model"), ("positive", "positive"), ("negative", "negative"), ("latent", "latent_image"))
        for name, text in inputs:
            self._slot_row(col, f"sampler.in.{name}.dot", f"sampler.in.{name}.label", text)
        self._slot_row(col, "sampler.out.latent.dot", "sampler.out.latent.label", "LATENT", output=True)

        values = (("seed", "156680208700286"), ("steps", "20"), ("cfg", "8.0"), ("sampler", "euler"))
        for name, value in values:
            wrow = QHBoxLayout()
            wrow.setContentsMargins(8, 0, 8, 0)
            wrow.addWidget(self._label(f"sampler.widget.{name}.label", name, base_qss="background: transparent;"))
            wrow.addStretch(1)
            wrow.addWidget(self._label(f"sampler.widget.{name}.value", value,
                                       base_qss="padding: 1px 8px; border-radius: 8px;"))
            col.addLayout(wrow)

        disabled = self._label("sampler.widget.disabled", "denoise   1.00 (linked)",
                               base_qss="background: transparent; padding: 0 8px;")
        col.addWidget(disabled)
        return node

    def _build_bus(self, canvas: QWidget) -> RegionFrame:
        node, col = self._node_frame("bus.body", canvas)
        node.setFixedWidth(200)
        header, row = self._header("bus.header", node)
        row.addWidget(self._label("bus.title", "Universal Input Bus", base_qss="background: transparent;"))
        row.addStretch(1)
        col.addWidget(header)

        rows = QWidget(node)
        rows.setStyleSheet("background: transparent;")
        self._bus_layout = QVBoxLayout(rows)
        self._bus_layout.setContentsMargins(0, 0, 0, 0)
        self._bus_layout.setSpacing(4)
        col.addWidget(rows)
        return node

    def _rebuild_bus(self, keys: list[str]) -> None:
        """Replace the bus rows with one dot and label per slot key."""
        for old in self._bus_rows:
            for region in old.findChildren((RegionFrame, RegionLabel)):
                self._regions.pop(region.region_id, None)
            self._bus_layout.removeWidget(old)
            old.hide()
            old.deleteLater()
        self._bus_rows = []

        for key in keys:
            holder = QWidget()
            row_layout = QVBoxLayout(holder)
            row_layout.setContentsMargins(0, 0, 0, 0)
            self._slot_row(row_layout, bus_dot_region(key), bus_label_region(key), key)
            self._bus_layout.addWidget(holder)
            self._bus_rows.append(holder)

        self._bus_keys = list(keys)
        logger.debug("Bus rebuilt with %d slots", len(keys))

    def _build_bypass(self, canvas: QWidget) -> RegionFrame:
        node, col = self._node_frame("bypass.body", canvas)
        title = QLabel("Apply ControlNet (Bypassed)")
        title.setStyleSheet("color: #ffffff; background: transparent; font-weight: bold; padding: 4px 8px;")
        col.addWidget(title)

        for slot in ("CONTROL_NET", "IMAGE"):
            row = QHBoxLayout()
            row.setContentsMargins(8, 0, 8, 0)
            row.setSpacing(6)
            dot = self._frame(f"bypass.slot.{slot}.dot", base_qss=_SLOT_DOT_QSS)
            dot.setFixedSize(SLOT_DOT_SIZE, SLOT_DOT_SIZE)
            label = QLabel(slot.lower())
            label.setStyleSheet("color: #ffffff; background: transparent;")
            row.addWidget(dot)
            row.addWidget(label)
            row.addStretch(1)
            col.addLayout(row)
        return node

    def _build_error(self, canvas: QWidget) -> RegionFrame:
        node, col = self._node_frame("error.body", canvas)
        header, row = self._header("error.header", node)
        title = QLabel("VAE Decode")
        title.setStyleSheet("color: #ffffff; background: transparent; font-weight: bold;")
        row.addWidget(title)
        row.addStretch(1)
        col.addWidget(header)

        message = self._label("error.message", "Required input is missing: samples",
                              base_qss="background: transparent; padding: 0 8px;")
        message.setWordWrap(True)
        col.addWidget(message)
        return node

    def _relayout(self) -> None:
        """Resize nodes to their content and re-anchor the shadow and links."""
        for node in (self._loader, self._sampler, self._bus, self._bypass, self._error):
            node.adjustSize()

        loader = self._loader.geometry()
        sampler = self._sampler.geometry()
        bus = self._bus.geometry()
        self._loader_shadow.setGeometry(loader.translated(6, 6))

        self._links["link.model"].setGeometry(loader.right() + 1, loader.top() + 40,
                                              sampler.left() - loader.right() - 1, 4)
        self._links["link.clip"].setGeometry(loader.right() + 1, loader.top() + 60,
                                             sampler.left() - loader.right() - 1, 4)
        self._links["link.connecting"].setGeometry(sampler.right() + 1, sampler.top() + 90,
                                                   bus.left() - sampler.right() - 1, 6)
        self._links["link.event"].setGeometry(loader.left() + 20, loader.bottom() + 12, 4,
                                              max(self._bypass.y() - loader.bottom() - 12, 8))
