"""JSON result rendering with optional Pygments highlighting."""

from __future__ import annotations

import json

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .values import ScriptValue

DEFAULT_STYLE = "monokai"


def _normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def render_json(value: ScriptValue, color: bool = False, style: str = DEFAULT_STYLE) -> str:
    """Render ``value`` as indented JSON, ANSI-colored when ``color`` is set."""
    text = json.dumps(value, indent=2, ensure_ascii=False) + "\n"
    if not color:
        return text
    return highlight(text, JsonLexer(), TerminalFormatter(style=_normalize_style(style)))
