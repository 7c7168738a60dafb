"""Type aliases for tixte.

This module contains ONLY TypeAlias definitions for JSON values, accessor
locations and resolver callables. It exists to break circular imports between
the value tree modules and the path resolver:
- _object.py needs DataArray from _array.py and vice versa for nested access
- _path.py needs both containers for its resolver signatures

By placing the type aliases here with no dependencies on other tixte modules,
all modules can safely import from _types.py.
"""

from typing import TypeAlias

# JSON type definitions per RFC 8259
# Using string annotations for forward references to avoid runtime | issues
JSONPrimitive: TypeAlias = "str | int | float | bool | None"
"""A JSON primitive value: string, number, boolean, or null."""

JSONArray: TypeAlias = "list[JSONValue]"
"""A JSON array containing any JSON values."""

JSONObject: TypeAlias = "dict[str, JSONValue]"
"""A JSON object mapping string keys to JSON values."""

JSONValue: TypeAlias = "JSONPrimitive | JSONArray | JSONObject"
"""Any JSON value: primitive, array, or object."""

Location: TypeAlias = "str | int"
"""Where a value lives inside a container.

A location is one of:
- A string key, for values inside a DataObject
- An integer index, for values inside a DataArray
"""

QueryParam: TypeAlias = "tuple[str, str]"
"""A query parameter as a (key, percent-encoded value) pair."""
