"""Script value vocabulary and marshalling between native and script values.

Every util function exchanges only ``ScriptValue`` instances with its caller.
Native results go through ``to_script_value``; arguments arrive through the
``expect_*`` decoders. All failures a script can observe are ``ScriptError``
subclasses.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from pathlib import PurePath
from typing import Union

from pydantic import BaseModel

ScriptValue = Union[None, bool, int, float, str, list["ScriptValue"], dict[str, "ScriptValue"]]


class ScriptError(RuntimeError):
    """Error signalled to the calling script."""


class ArgumentError(ScriptError):
    """A util function received an argument of the wrong type."""


class ConfigConversionError(ScriptError):
    """A script table does not match the explorer config schema."""


class TraversalError(ScriptError):
    """The traversal collaborator failed to list a directory."""


class SpawnError(ScriptError):
    """A process could not be started."""


class SerializationError(ScriptError):
    """A native value has no script representation."""


def _type_name(value: object) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, dict)):
        return "table"
    return type(value).__name__


def expect_text(value: object, name: str) -> str:
    """Decode a text argument, coercing numbers the way script runtimes do."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ArgumentError(f"bad argument '{name}': expected string, got {_type_name(value)}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format(value, ".14g")
    raise ArgumentError(f"bad argument '{name}': expected string, got {_type_name(value)}")


def expect_optional_text_list(value: object, name: str) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ArgumentError(f"bad argument '{name}': expected table of strings, got {_type_name(value)}")
    return [expect_text(item, f"{name}[{idx + 1}]") for idx, item in enumerate(value)]


def expect_optional_table(value: object, name: str) -> dict[str, ScriptValue] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ArgumentError(f"bad argument '{name}': expected table, got {_type_name(value)}")
    return value


def to_script_value(value: object) -> ScriptValue:
    """Serialize a native value into the script value space.

    Dataclasses and pydantic models become dicts keyed by field name in
    declaration order, enums become their value, paths become strings, and
    mappings/sequences are converted recursively. Field names and nesting are
    never rewritten, so records keep their shape as they evolve.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, enum.Enum):
        return to_script_value(value.value)
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_script_value(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, BaseModel):
        return {
            name: to_script_value(getattr(value, name))
            for name in type(value).model_fields
        }
    if isinstance(value, Mapping):
        out: dict[str, ScriptValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(f"cannot serialize mapping key {key!r}: keys must be strings")
            out[key] = to_script_value(item)
        return out
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_script_value(item) for item in value]
    raise SerializationError(f"cannot serialize value of type {type(value).__name__}")


__all__ = [
    "ScriptValue",
    "ScriptError",
    "ArgumentError",
    "ConfigConversionError",
    "TraversalError",
    "SpawnError",
    "SerializationError",
    "expect_text",
    "expect_optional_text_list",
    "expect_optional_table",
    "to_script_value",
]
