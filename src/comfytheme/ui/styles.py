"""QSS for the editor chrome, generated from a palette.

The editor's own look is fixed; only the preview follows the edited theme.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChromePalette:
    """Base colors the editor stylesheet derives from."""
    bg: str
    bg_alt: str       # panels, inputs
    text: str
    text_muted: str
    border: str
    accent: str
    accent_hover: str
    accent_text: str  # text on accent background
    highlight_bg: str  # flashed editor row
    code_bg: str
    notice_bg: str
    notice_text: str
    error_bg: str
    error_text: str


CHROME = ChromePalette(
    bg="#1e1e2e", bg_alt="#181825", text="#cdd6f4", text_muted="#6c7086",
    border="#45475a",
    accent="#b4befe", accent_hover="#94e2d5", accent_text="#1e1e2e",
    highlight_bg="#3a3f5c",
    code_bg="#272822",
    notice_bg="#2b2a1e", notice_text="#f9e2af",
    error_bg="#2e1e24", error_text="#f38ba8",
)


def _generate_qss(p: ChromePalette) -> str:
    """Generate the full application stylesheet from a palette."""
    return f"""
QMainWindow {{
    background-color: {p.bg_alt};
    color: {p.text};
}}
QWidget {{
    color: {p.text};
}}
QSplitter::handle {{
    background-color: {p.border};
    width: 3px;
}}
QSplitter::handle:hover {{
    background-color: {p.accent};
}}
QMenuBar {{
    background-color: {p.bg_alt};
    color: {p.text};
    border-bottom: 1px solid {p.border};
    padding: 2px;
}}
QMenuBar::item:selected, QMenu::item:selected {{
    background-color: {p.accent};
    color: {p.accent_text};
    border-radius: 3px;
}}
QMenu {{
    background-color: {p.bg};
    border: 1px solid {p.border};
    padding: 4px;
}}
QToolBar {{
    background-color: {p.bg_alt};
    border-bottom: 1px solid {p.border};
    spacing: 6px;
    padding: 3px;
}}
QStatusBar {{
    background-color: {p.bg_alt};
    color: {p.text_muted};
    border-top: 1px solid {p.border};
    font-size: 12px;
}}
QTabWidget::pane {{
    border: 1px solid {p.border};
    background-color: {p.bg};
}}
QTabBar::tab {{
    background-color: {p.bg_alt};
    color: {p.text_muted};
    padding: 6px 14px;
    border: 1px solid {p.border};
    border-bottom: none;
}}
QTabBar::tab:selected {{
    background-color: {p.bg};
    color: {p.text};
    border-top: 2px solid {p.accent};
}}
QScrollArea, QScrollArea > QWidget > QWidget {{
    background-color: {p.bg};
    border: none;
}}
ColorRow {{
    background-color: transparent;
    border-radius: 4px;
}}
ColorRow:hover {{
    background-color: {p.bg_alt};
}}
ColorRow[highlighted="true"] {{
    background-color: {p.highlight_bg};
    border: 1px solid {p.accent};
}}
QLabel#categoryTitle {{
    font-weight: bold;
    padding: 4px 8px 0 8px;
}}
QLabel#categoryDescription {{
    color: {p.text_muted};
    padding: 4px 8px 8px 8px;
}}
QLabel#noticeBanner {{
    background-color: {p.notice_bg};
    color: {p.notice_text};
    padding: 6px 10px;
}}
QLabel#noticeBanner[severity="error"] {{
    background-color: {p.error_bg};
    color: {p.error_text};
}}
QComboBox {{
    border: 1px solid {p.border};
    border-radius: 4px;
    padding: 4px 8px;
    background-color: {p.bg};
    color: {p.text};
    min-width: 140px;
}}
QComboBox:hover {{
    border-color: {p.accent};
}}
QComboBox QAbstractItemView {{
    background-color: {p.bg};
    color: {p.text};
    border: 1px solid {p.border};
    selection-background-color: {p.accent};
    selection-color: {p.accent_text};
}}
QPushButton {{
    border: 1px solid {p.border};
    border-radius: 4px;
    padding: 5px 14px;
    background-color: {p.bg};
    color: {p.text};
}}
QPushButton:hover {{
    background-color: {p.bg_alt};
    border-color: {p.accent};
}}
QPushButton:pressed {{
    background-color: {p.accent};
    color: {p.accent_text};
}}
QPushButton:disabled {{
    color: {p.text_muted};
    border-color: {p.bg_alt};
}}
QPushButton#remixButton {{
    background-color: {p.accent};
    color: {p.accent_text};
    font-weight: bold;
}}
QPushButton#remixButton:disabled {{
    background-color: {p.border};
    color: {p.text_muted};
}}
QLineEdit {{
    border: 1px solid {p.border};
    border-radius: 4px;
    padding: 3px 6px;
    background-color: {p.bg_alt};
    color: {p.text};
    font-family: Consolas, monospace;
}}
QLineEdit:focus {{
    border-color: {p.accent};
}}
"""


def get_stylesheet(palette: ChromePalette = CHROME) -> str:
    """Get the application stylesheet."""
    return _generate_qss(palette)
