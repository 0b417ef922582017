"""POSIX shell quoting."""

from __future__ import annotations

_QUOTE_ESCAPE = "'\"'\"'"


def shell_quote(text: str) -> str:
    """Wrap ``text`` in single quotes so a POSIX shell reads it back verbatim.

    Embedded single quotes close the quoted run, emit a double-quoted ``'``,
    then reopen it. Quoting already-quoted output quotes it again.
    """
    return "'" + text.replace("'", _QUOTE_ESCAPE) + "'"


__all__ = ["shell_quote"]
