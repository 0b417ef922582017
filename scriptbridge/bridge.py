"""Script-facing util table.

Each entry takes and returns only ``ScriptValue``s: arguments are decoded
into native types, the native operation runs, and its result is serialized
back. Native failures surface as ``ScriptError`` subclasses chained to their
cause.

Every function is synchronous. ``explore`` and ``shell_execute`` block the
calling script until the directory listing or child process completes; they
are not suspension points and cannot be cancelled from the script.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from pydantic import ValidationError

from . import explorer, paths, process, quoting
from .explorer import ExplorerConfig
from .values import (
    ConfigConversionError,
    ScriptError,
    ScriptValue,
    SpawnError,
    TraversalError,
    expect_optional_table,
    expect_optional_text_list,
    expect_text,
    to_script_value,
)

LOGGER = logging.getLogger(__name__)

UtilFunction = Callable[..., ScriptValue]


def _script_function(func: UtilFunction) -> UtilFunction:
    """Log script-visible failures before they propagate to the caller."""

    @functools.wraps(func)
    def call(*args: ScriptValue) -> ScriptValue:
        try:
            return func(*args)
        except ScriptError as exc:
            LOGGER.warning("%s failed: %s", func.__name__, exc)
            raise

    return call


def _describe_validation_error(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "config"
        details.append(f"{location}: {error.get('msg')} (got {error.get('input')!r})")
    return "invalid explorer config: " + "; ".join(details)


def decode_explorer_config(table: dict[str, ScriptValue] | None) -> ExplorerConfig:
    """Convert a script table into ``ExplorerConfig``, or the default for ``None``."""
    if table is None:
        return ExplorerConfig()
    try:
        config = ExplorerConfig.model_validate(table)
    except ValidationError as exc:
        raise ConfigConversionError(_describe_validation_error(exc)) from exc
    LOGGER.debug("decoded explorer config %r", config)
    return config


@_script_function
def dirname(path: ScriptValue) -> ScriptValue:
    return paths.dirname(expect_text(path, "path"))


@_script_function
def basename(path: ScriptValue) -> ScriptValue:
    return paths.basename(expect_text(path, "path"))


@_script_function
def absolute(path: ScriptValue) -> ScriptValue:
    return paths.absolute(expect_text(path, "path"))


@_script_function
def explore(path: ScriptValue, config: ScriptValue = None) -> ScriptValue:
    """List the children of ``path`` as node tables."""
    root = expect_text(path, "path")
    explorer_config = decode_explorer_config(expect_optional_table(config, "config"))
    try:
        nodes = explorer.explore(root, explorer_config)
    except (OSError, ValueError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise TraversalError(f"failed to explore {root!r}: {reason}") from exc
    return to_script_value(nodes)


@_script_function
def shell_execute(program: ScriptValue, args: ScriptValue = None) -> ScriptValue:
    """Run ``program`` with literal ``args`` and return its captured output."""
    program_text = expect_text(program, "program")
    argv = expect_optional_text_list(args, "args")
    try:
        result = process.shell_execute(program_text, argv)
    except (OSError, ValueError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise SpawnError(f"failed to spawn {program_text!r}: {reason}") from exc
    return to_script_value(result)


@_script_function
def shell_quote(text: ScriptValue) -> ScriptValue:
    return quoting.shell_quote(expect_text(text, "string"))


def create_table() -> dict[str, UtilFunction]:
    """Build the util namespace handed to scripts."""
    return {
        "dirname": dirname,
        "basename": basename,
        "absolute": absolute,
        "explore": explore,
        "shell_execute": shell_execute,
        "shell_quote": shell_quote,
    }


__all__ = [
    "UtilFunction",
    "create_table",
    "decode_explorer_config",
    "dirname",
    "basename",
    "absolute",
    "explore",
    "shell_execute",
    "shell_quote",
]
