"""Public package surface for scriptbridge.

Exports ``create_table`` (the util namespace handed to scripts) and ``main``
for programmatic CLI invocation.
"""

from __future__ import annotations

from .bridge import create_table
from .values import ScriptError


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["ScriptError", "create_table", "main"]
