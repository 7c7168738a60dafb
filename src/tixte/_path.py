"""Path expressions for navigating DataObject and DataArray trees.

A path names a value inside nested JSON without a chain of
``get_data_object(...).get_data_array(...)`` calls::

    name           := [^.\\[\\]]+          (but not "?" alone)
    index          := "[" digits "]"
    element        := name "?"? (index "?"?)*
    object path    := element ("." element)*
    array path     := (index "?"?)+ ("." element)*

A ``?`` after a name or an index makes that step optional: if the value there
is null or absent, resolution stops and yields None instead of failing. Each
bracket group is optional on its own, so ``a[0]?[1]`` tolerates a missing
``a[0]`` but not a missing ``a[0][1]``.

The whole expression is checked against this grammar before any value is
read, so a malformed path fails even when an optional step would stop early.
"""

import re
from typing import TYPE_CHECKING, Any, ClassVar, Final, TypeVar, cast, overload

from ._array import DataArray
from ._exceptions import MissingOrWrongTypeError, PathResolutionError
from ._mixin import MISSING, DataMixin, _Missing  # pyright: ignore[reportPrivateUsage]
from ._object import DataObject

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

__all__ = ["DataPath"]

T = TypeVar("T")

_INDEX: Final = r"\[\d+]\??"
_ELEMENT: Final = rf"(?:[^.\[\]]{{2,}}|[^.\[\]?])(?:{_INDEX})*"
_OBJECT_PATH: Final = re.compile(rf"{_ELEMENT}(?:\.{_ELEMENT})*", re.ASCII)
_ARRAY_PATH: Final = re.compile(rf"(?:{_INDEX})+(?:\.{_ELEMENT})*", re.ASCII)


def _invalid(path: str, reason: str) -> PathResolutionError:
    msg = f"invalid path {path!r}: {reason}"
    return PathResolutionError(msg, path=path, kind="invalid_path")


def _check_syntax(root: DataObject | DataArray, path: str) -> None:
    if not path:
        raise _invalid(path, "path is empty")
    if isinstance(root, DataObject):
        if _OBJECT_PATH.fullmatch(path) is None:
            raise _invalid(path, "expected name ('.' name)* with optional indices")
    elif _ARRAY_PATH.fullmatch(path) is None:
        raise _invalid(path, "expected '[index]' followed by indices or names")


def _resolve_object(
    root: DataObject,
    path: str,
    from_object: "Callable[[DataObject, str], T | None]",
    from_array: "Callable[[DataArray, int], T | None]",
) -> "T | None":
    current, dot, rest = path.partition(".")
    bracket = current.find("[")
    if bracket > -1:
        key = current[:bracket]
        if key.endswith("?"):
            key = key[:-1]
            if root.is_null(key):
                return None
        return _resolve_array(
            root.get_data_array(key), path[bracket:], from_object, from_array
        )

    if current.endswith("?"):
        current = current[:-1]
        if root.is_null(current):
            return None
    if not dot:
        return from_object(root, current)
    return _resolve_object(root.get_data_object(current), rest, from_object, from_array)


def _resolve_array(
    root: DataArray,
    path: str,
    from_object: "Callable[[DataObject, str], T | None]",
    from_array: "Callable[[DataArray, int], T | None]",
) -> "T | None":
    offset = 0
    while True:
        end = path.index("]", offset)
        index = int(path[offset + 1 : end])
        offset = end + 1

        if offset < len(path) and path[offset] == "?":
            offset += 1
            if root.is_null(index):
                return None

        if offset == len(path):
            return from_array(root, index)
        if path[offset] == ".":
            return _resolve_object(
                root.get_data_object(index), path[offset + 1 :], from_object, from_array
            )
        root = root.get_data_array(index)


def _path_error(path: str, expected: str) -> PathResolutionError:
    msg = f'could not resolve value of type {expected} at path "{path}"'
    return PathResolutionError(msg, path=path, kind="missing", expected=expected)


class DataPath:
    """Resolve path expressions against DataObject and DataArray roots.

    All methods are static. A DataObject root takes a path starting with a
    name (``"data.domains[0].name"``); a DataArray root takes a path starting
    with an index (``"[0].name"``).

    Every typed getter has two forms. Without a fallback, a path that yields
    no value raises PathResolutionError. With a fallback, the fallback is
    returned instead. Malformed paths and values of the wrong type raise
    PathResolutionError in both forms.
    """

    __slots__: ClassVar[tuple[str, ...]] = ()

    @staticmethod
    def get(
        root: DataObject | DataArray,
        path: str,
        from_object: "Callable[[DataObject, str], T | None]",
        from_array: "Callable[[DataArray, int], T | None]",
    ) -> "T | None":
        """Resolve path against root with the given terminal resolvers.

        Args:
            root: The object or array to start from.
            path: The path expression.
            from_object: Reads the final value when the path ends in a name.
            from_array: Reads the final value when the path ends in an index.

        Returns:
            The resolver's result, or None if an optional step was missing.

        Raises:
            PathResolutionError: If the path is malformed, a required step is
                missing, or a value has the wrong type.
        """
        _check_syntax(root, path)
        try:
            if isinstance(root, DataObject):
                return _resolve_object(root, path, from_object, from_array)
            return _resolve_array(root, path, from_object, from_array)
        except MissingOrWrongTypeError as exc:
            kind = "missing" if exc.is_missing else "wrong_type"
            msg = f'could not resolve path "{path}": {exc}'
            raise PathResolutionError(
                msg, path=path, kind=kind, expected=exc.expected
            ) from exc

    @staticmethod
    def _typed(
        root: DataObject | DataArray,
        path: str,
        expected: str,
        getter: "Callable[[DataMixin, Any, Any], object]",
        fallback: object,
    ) -> object:
        default = None if fallback is MISSING else fallback
        value = DataPath.get(
            root,
            path,
            lambda obj, key: getter(obj, key, default),
            lambda arr, index: getter(arr, index, default),
        )
        if value is None:
            if fallback is MISSING:
                raise _path_error(path, expected)
            return fallback
        return value

    @staticmethod
    def get_boolean(
        root: DataObject | DataArray, path: str, fallback: "bool | _Missing" = MISSING
    ) -> bool:
        """Resolve path to a bool."""
        value = DataPath._typed(root, path, "bool", DataMixin.get_boolean, fallback)
        return cast("bool", value)

    @staticmethod
    def get_int(
        root: DataObject | DataArray, path: str, fallback: "int | _Missing" = MISSING
    ) -> int:
        """Resolve path to a signed 32-bit integer."""
        value = DataPath._typed(root, path, "int", DataMixin.get_int, fallback)
        return cast("int", value)

    @staticmethod
    def get_unsigned_int(
        root: DataObject | DataArray, path: str, fallback: "int | _Missing" = MISSING
    ) -> int:
        """Resolve path to an unsigned 32-bit integer."""
        value = DataPath._typed(
            root, path, "unsigned int", DataMixin.get_unsigned_int, fallback
        )
        return cast("int", value)

    @staticmethod
    def get_long(
        root: DataObject | DataArray, path: str, fallback: "int | _Missing" = MISSING
    ) -> int:
        """Resolve path to a signed 64-bit integer."""
        value = DataPath._typed(root, path, "long", DataMixin.get_long, fallback)
        return cast("int", value)

    @staticmethod
    def get_unsigned_long(
        root: DataObject | DataArray, path: str, fallback: "int | _Missing" = MISSING
    ) -> int:
        """Resolve path to an unsigned 64-bit integer."""
        value = DataPath._typed(
            root, path, "unsigned long", DataMixin.get_unsigned_long, fallback
        )
        return cast("int", value)

    @staticmethod
    def get_double(
        root: DataObject | DataArray,
        path: str,
        fallback: "float | _Missing" = MISSING,
    ) -> float:
        """Resolve path to a float."""
        value = DataPath._typed(root, path, "double", DataMixin.get_double, fallback)
        return cast("float", value)

    @overload
    @staticmethod
    def get_string(
        root: DataObject | DataArray, path: str
    ) -> str: ...  # pragma: no cover

    @overload
    @staticmethod
    def get_string(
        root: DataObject | DataArray, path: str, fallback: str
    ) -> str: ...  # pragma: no cover

    @overload
    @staticmethod
    def get_string(
        root: DataObject | DataArray, path: str, fallback: None
    ) -> str | None: ...  # pragma: no cover

    @staticmethod
    def get_string(
        root: DataObject | DataArray,
        path: str,
        fallback: "str | None | _Missing" = MISSING,
    ) -> str | None:
        """Resolve path to a string. Any non-null value is stringified."""
        value = DataPath._typed(root, path, "str", DataMixin.get_string, fallback)
        return cast("str | None", value)

    @overload
    @staticmethod
    def get_datetime(
        root: DataObject | DataArray, path: str
    ) -> "datetime": ...  # pragma: no cover

    @overload
    @staticmethod
    def get_datetime(
        root: DataObject | DataArray, path: str, fallback: "datetime"
    ) -> "datetime": ...  # pragma: no cover

    @overload
    @staticmethod
    def get_datetime(
        root: DataObject | DataArray, path: str, fallback: None
    ) -> "datetime | None": ...  # pragma: no cover

    @staticmethod
    def get_datetime(
        root: DataObject | DataArray,
        path: str,
        fallback: "datetime | None | _Missing" = MISSING,
    ) -> "datetime | None":
        """Resolve path to a datetime parsed from an ISO 8601 string."""
        value = DataPath._typed(
            root, path, "datetime", DataMixin.get_datetime, fallback
        )
        return cast("datetime | None", value)

    @staticmethod
    def opt_object(root: DataObject | DataArray, path: str) -> DataObject | None:
        """Resolve path to a DataObject, or None if it is missing.

        The last step of the path is always treated as optional.
        """
        if not path.endswith("?"):
            path += "?"
        return DataPath.get(
            root, path, DataObject.get_data_object, DataArray.get_data_object
        )

    @staticmethod
    def get_data_object(root: DataObject | DataArray, path: str) -> DataObject:
        """Resolve path to a DataObject.

        Raises:
            PathResolutionError: If the path yields no object.
        """
        child = DataPath.opt_object(root, path)
        if child is None:
            raise _path_error(path, "DataObject")
        return child

    @staticmethod
    def opt_array(root: DataObject | DataArray, path: str) -> DataArray | None:
        """Resolve path to a DataArray, or None if it is missing.

        The last step of the path is always treated as optional.
        """
        if not path.endswith("?"):
            path += "?"
        return DataPath.get(
            root, path, DataObject.get_data_array, DataArray.get_data_array
        )

    @staticmethod
    def get_data_array(root: DataObject | DataArray, path: str) -> DataArray:
        """Resolve path to a DataArray.

        Raises:
            PathResolutionError: If the path yields no array.
        """
        child = DataPath.opt_array(root, path)
        if child is None:
            raise _path_error(path, "DataArray")
        return child
