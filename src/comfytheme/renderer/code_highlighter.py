"""Syntax highlighting for the theme JSON view using Pygments."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import JsonLexer
from pygments.util import ClassNotFound

_json_lexer = JsonLexer()


def highlight_json(text: str, style: str = "monokai") -> str:
    """Highlight JSON text and return inline-styled HTML (no <pre> wrapper)."""
    try:
        formatter = HtmlFormatter(nowrap=True, noclasses=True, style=style)
    except ClassNotFound:
        formatter = HtmlFormatter(nowrap=True, noclasses=True, style="monokai")
    return str(highlight(text, _json_lexer, formatter))


def highlight_json_document(text: str, style: str = "monokai",
                            background: str = "#272822", font_size: int = 12) -> str:
    """Full HTML page body for a read-only code view."""
    body = highlight_json(text, style)
    return (
        f'<pre style="background:{background}; margin:0; padding:10px; '
        f'font-family:Consolas, monospace; font-size:{font_size}px;">{body}</pre>'
    )
