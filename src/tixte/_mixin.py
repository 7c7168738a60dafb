"""Mixin class providing the typed accessor interface.

This module provides DataMixin, an abstract base class that implements all
typed read operations, coercion rules and serialization for both DataObject
(values addressed by key) and DataArray (values addressed by index).
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import (
    TYPE_CHECKING,
    ClassVar,
    Final,
    Protocol,
    TypeVar,
    cast,
    overload,
    runtime_checkable,
)

from ._constants import (
    MAX_INT,
    MAX_LONG,
    MAX_UNSIGNED_INT,
    MAX_UNSIGNED_LONG,
    MIN_INT,
    MIN_LONG,
)
from ._exceptions import MissingOrWrongTypeError
from ._json import serialize_json, serialize_pretty, stringify

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._array import DataArray
    from ._json import DataType
    from ._object import DataObject
    from ._types import JSONArray, JSONObject, JSONValue, Location

__all__ = ["MISSING", "DataMixin", "SerializableArray", "SerializableData"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Missing(Enum):
    MISSING = "MISSING"


MISSING: Final = _Missing.MISSING
"""Sentinel marking a required accessor call (no default supplied)."""


@runtime_checkable
class SerializableData(Protocol):
    """An object that can be stored inside a DataObject or DataArray as an object."""

    def to_data(self) -> "DataObject": ...


@runtime_checkable
class SerializableArray(Protocol):
    """An object that can be stored inside a DataObject or DataArray as an array."""

    def to_data_array(self) -> "DataArray": ...


def unwrap(value: object) -> "JSONValue":
    """Return the raw JSON value behind a container or serializable object."""
    if isinstance(value, SerializableData):
        return value.to_data().to_dict()
    if isinstance(value, SerializableArray):
        return value.to_data_array().to_list()
    return cast("JSONValue", value)


_INTEGER_PATTERN: Final = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PATTERN: Final = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)


class _CoercionError(ValueError):
    pass


def _to_string(value: object) -> str:
    return stringify(value)


def _to_boolean(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise _CoercionError


def _integer(minimum: int, maximum: int) -> "Callable[[object], int]":
    def coerce(value: object) -> int:
        if isinstance(value, bool):
            raise _CoercionError
        if isinstance(value, int):
            result = value
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise _CoercionError
            result = int(value)
        elif isinstance(value, str):
            text = value.strip()
            if _INTEGER_PATTERN.fullmatch(text) is None:
                raise _CoercionError
            try:
                result = int(text)
            except ValueError:
                raise _CoercionError from None
        else:
            raise _CoercionError
        if not minimum <= result <= maximum:
            raise _CoercionError
        return result

    return coerce


def _to_double(value: object) -> float:
    if isinstance(value, bool):
        raise _CoercionError
    number: str | float
    if isinstance(value, str):
        number = value.strip()
        if _DECIMAL_PATTERN.fullmatch(number) is None:
            raise _CoercionError
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise _CoercionError
    try:
        result = float(number)
    except OverflowError:
        raise _CoercionError from None
    if not math.isfinite(result):
        raise _CoercionError
    return result


def _to_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value)
        except ValueError:
            raise _CoercionError from None
    else:
        raise _CoercionError
    if result.tzinfo is None:
        raise _CoercionError
    return result


_to_int = _integer(MIN_INT, MAX_INT)
_to_unsigned_int = _integer(0, MAX_UNSIGNED_INT)
_to_long = _integer(MIN_LONG, MAX_LONG)
_to_unsigned_long = _integer(0, MAX_UNSIGNED_LONG)


class DataMixin(ABC):
    """Mixin providing typed, fail-fast access to JSON container values.

    Subclasses must implement:
    - _get_data(): Return the wrapped dict or list
    - _raw(location): Return the value at location, or None if absent

    Every ``get_*`` accessor has two forms. Without a default it is required
    and raises MissingOrWrongTypeError when the value is null, absent, or
    cannot be coerced. With a default it returns the default for null or
    absent values and still raises for values that cannot be coerced.
    """

    __slots__: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def _get_data(self) -> "JSONObject | JSONArray":
        """Return the wrapped container."""
        ...

    @abstractmethod
    def _raw(self, location: "Location") -> "JSONValue":
        """Return the value stored at location, or None if it is absent."""
        ...

    def _value_error(
        self, location: "Location", expected: str
    ) -> MissingOrWrongTypeError:
        value = self._raw(location)
        msg = f"unable to resolve value at {location!r} to type {expected}: {value!r}"
        return MissingOrWrongTypeError(
            msg, key=location, expected=expected, value=value
        )

    def _resolve(
        self,
        location: "Location",
        expected: str,
        coerce: "Callable[[object], T]",
        default: "T | None | _Missing",
    ) -> "T | None":
        value = self._raw(location)
        if value is None:
            if default is MISSING:
                raise self._value_error(location, expected)
            return default
        try:
            return coerce(value)
        except _CoercionError:
            msg = (
                f"cannot parse value for {location!r} into type {expected}: "
                f"{value!r} instance of {type(value).__name__}"
            )
            raise MissingOrWrongTypeError(
                msg, key=location, expected=expected, value=value
            ) from None

    def is_null(self, location: "Location") -> bool:
        """Check whether the value at location is null or absent."""
        return self._raw(location) is None

    def is_type(self, location: "Location", data_type: "DataType") -> bool:
        """Check whether the value at location is of the given DataType."""
        return data_type.is_type(self._raw(location))

    def get(self, location: "Location") -> "JSONValue":
        """Get the raw value at location.

        Raises:
            MissingOrWrongTypeError: If the value is null or absent.
        """
        value = self._raw(location)
        if value is None:
            raise self._value_error(location, "any")
        return value

    def opt(self, location: "Location") -> "JSONValue":
        """Get the raw value at location, or None if it is null or absent."""
        return self._raw(location)

    @overload
    def get_string(self, location: "Location") -> str: ...  # pragma: no cover

    @overload
    def get_string(
        self, location: "Location", default: str
    ) -> str: ...  # pragma: no cover

    @overload
    def get_string(
        self, location: "Location", default: None
    ) -> str | None: ...  # pragma: no cover

    def get_string(
        self, location: "Location", default: "str | None | _Missing" = MISSING
    ) -> str | None:
        """Get the value at location as a string.

        Any non-null value is stringified.
        """
        return self._resolve(location, "str", _to_string, default)

    def get_boolean(
        self, location: "Location", default: "bool | _Missing" = MISSING
    ) -> bool:
        """Get the value at location as a bool.

        Accepts booleans and the strings "true"/"false" in any case.
        """
        return cast("bool", self._resolve(location, "bool", _to_boolean, default))

    def get_int(self, location: "Location", default: "int | _Missing" = MISSING) -> int:
        """Get the value at location as a signed 32-bit integer.

        Floats are truncated and ASCII decimal strings parsed; values outside
        the 32-bit range are rejected.
        """
        return cast("int", self._resolve(location, "int", _to_int, default))

    def get_unsigned_int(
        self, location: "Location", default: "int | _Missing" = MISSING
    ) -> int:
        """Get the value at location as an unsigned 32-bit integer."""
        return cast(
            "int", self._resolve(location, "unsigned int", _to_unsigned_int, default)
        )

    def get_long(
        self, location: "Location", default: "int | _Missing" = MISSING
    ) -> int:
        """Get the value at location as a signed 64-bit integer."""
        return cast("int", self._resolve(location, "long", _to_long, default))

    def get_unsigned_long(
        self, location: "Location", default: "int | _Missing" = MISSING
    ) -> int:
        """Get the value at location as an unsigned 64-bit integer."""
        return cast(
            "int",
            self._resolve(location, "unsigned long", _to_unsigned_long, default),
        )

    def get_double(
        self, location: "Location", default: "float | _Missing" = MISSING
    ) -> float:
        """Get the value at location as a finite float.

        Numeric strings must be plain ASCII decimals, optionally with an exponent.
        """
        return cast("float", self._resolve(location, "double", _to_double, default))

    @overload
    def get_datetime(self, location: "Location") -> datetime: ...  # pragma: no cover

    @overload
    def get_datetime(
        self, location: "Location", default: datetime
    ) -> datetime: ...  # pragma: no cover

    @overload
    def get_datetime(
        self, location: "Location", default: None
    ) -> datetime | None: ...  # pragma: no cover

    def get_datetime(
        self, location: "Location", default: "datetime | None | _Missing" = MISSING
    ) -> datetime | None:
        """Get the value at location as an aware datetime parsed from ISO 8601.

        Timestamps without a UTC offset are rejected.
        """
        return self._resolve(location, "datetime", _to_datetime, default)

    def get_data_object(self, location: "Location") -> "DataObject":
        """Get the value at location as a DataObject.

        Raises:
            MissingOrWrongTypeError: If the value is absent or not an object.
        """
        child = self.opt_object(location)
        if child is None:
            raise self._value_error(location, "DataObject")
        return child

    def opt_object(self, location: "Location") -> "DataObject | None":
        """Get the value at location as a DataObject, or None."""
        from ._object import DataObject  # noqa: PLC0415

        value = self._raw(location)
        if value is None:
            return None
        if not isinstance(value, dict):
            logger.debug(
                "Unable to extract child object at %r: found %s",
                location,
                type(value).__name__,
            )
            return None
        return DataObject(value)

    def get_data_array(self, location: "Location") -> "DataArray":
        """Get the value at location as a DataArray.

        Raises:
            MissingOrWrongTypeError: If the value is absent or not an array.
        """
        child = self.opt_array(location)
        if child is None:
            raise self._value_error(location, "DataArray")
        return child

    def opt_array(self, location: "Location") -> "DataArray | None":
        """Get the value at location as a DataArray, or None."""
        from ._array import DataArray  # noqa: PLC0415

        value = self._raw(location)
        if value is None:
            return None
        if not isinstance(value, list):
            logger.debug(
                "Unable to extract child array at %r: found %s",
                location,
                type(value).__name__,
            )
            return None
        return DataArray(value)

    def to_json(self) -> bytes:
        """Serialize the wrapped data to compact UTF-8 JSON."""
        return serialize_json(self._get_data()).encode("utf-8")

    def to_pretty_string(self) -> str:
        """Serialize the wrapped data to JSON indented by four spaces."""
        return serialize_pretty(self._get_data())

    def __str__(self) -> str:
        return serialize_json(self._get_data())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._get_data()!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._get_data() == cast("DataMixin", other)._get_data()

    __hash__ = None  # pyright: ignore[reportAssignmentType]
