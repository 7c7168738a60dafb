"""JSON parsing, serialization and value classification."""

import json
from enum import Enum
from typing import TYPE_CHECKING, Protocol, TypeAlias

from ._constants import PRETTY_INDENT
from ._exceptions import JsonParseError

if TYPE_CHECKING:
    from ._types import JSONValue

__all__ = [
    "DataType",
    "JSONSource",
    "parse_json",
    "serialize_json",
    "serialize_pretty",
    "stringify",
]


class _Readable(Protocol):
    def read(self) -> "str | bytes": ...


JSONSource: TypeAlias = "str | bytes | bytearray | _Readable"
"""Anything parse_json accepts: JSON text, UTF-8 bytes, or a readable stream."""


class DataType(Enum):
    """Classification of a JSON value as stored in a container."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NULL = "null"
    UNKNOWN = "unknown"

    @classmethod
    def get_type(cls, value: object) -> "DataType":
        """Return the first type matching value, or UNKNOWN."""
        for data_type in cls:
            if data_type.is_type(value):
                return data_type
        return cls.UNKNOWN

    def is_type(self, value: object) -> bool:
        """Check whether value belongs to this type.

        Booleans are never INT, even though bool subclasses int.
        """
        if self is DataType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is DataType.FLOAT:
            return isinstance(value, float)
        if self is DataType.STRING:
            return isinstance(value, str)
        if self is DataType.BOOLEAN:
            return isinstance(value, bool)
        if self is DataType.ARRAY:
            return isinstance(value, list)
        if self is DataType.OBJECT:
            return isinstance(value, dict)
        if self is DataType.NULL:
            return value is None
        return False


def parse_json(source: JSONSource) -> "JSONValue":
    """Parse JSON text from a string, bytes, or a readable stream.

    Args:
        source: JSON text, UTF-8 encoded bytes, or an object with read().

    Returns:
        The parsed JSON value.

    Raises:
        JsonParseError: If the text is not valid JSON or nests too deeply
            for the parser.
    """
    if hasattr(source, "read"):
        source = source.read()  # pyright: ignore[reportAttributeAccessIssue]
    try:
        return json.loads(source)  # pyright: ignore[reportArgumentType]
    except RecursionError:
        msg = "invalid JSON: nesting depth exceeds parser limit"
        raise JsonParseError(msg) from None
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"invalid JSON: {exc}"
        raise JsonParseError(msg) from exc
    except TypeError as exc:
        msg = f"cannot parse JSON from {type(source).__name__}"
        raise JsonParseError(msg) from exc


def serialize_json(value: "JSONValue") -> str:
    """Serialize a JSON value to compact JSON text.

    Unicode is preserved rather than escaped and no whitespace is emitted.
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def serialize_pretty(value: "JSONValue") -> str:
    """Serialize a JSON value to indented JSON text for diagnostics."""
    return json.dumps(value, ensure_ascii=False, indent=PRETTY_INDENT)


def stringify(value: object) -> str:
    """Convert a non-null JSON value to its string form.

    Strings are returned unchanged, booleans become ``true``/``false``,
    containers become compact JSON and numbers use their repr.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return serialize_json(value)  # pyright: ignore[reportUnknownArgumentType]
    return str(value)
