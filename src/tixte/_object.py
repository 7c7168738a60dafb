"""DataObject: typed access to a JSON object."""

from typing import TYPE_CHECKING, ClassVar, cast

from ._exceptions import JsonParseError
from ._json import parse_json
from ._mixin import DataMixin, unwrap

if TYPE_CHECKING:
    from collections.abc import Iterable, KeysView, ValuesView

    from ._json import JSONSource
    from ._types import JSONObject, JSONValue, Location

__all__ = ["DataObject"]


class DataObject(DataMixin):
    """A JSON object with typed, fail-fast accessors.

    The wrapped dict is shared, not copied: nested objects returned by
    get_data_object() are views onto the same data, and mutations through
    put(), remove() and rename() are visible to every view.

    Example:
        >>> obj = DataObject.from_json(b'{"data": {"id": "42"}}')
        >>> obj.get_data_object("data").get_int("id")
        42
    """

    __slots__: ClassVar[tuple[str, ...]] = ("_data",)

    _data: "JSONObject"

    def __init__(self, data: "JSONObject | None" = None) -> None:
        self._data = {} if data is None else data

    @classmethod
    def empty(cls) -> "DataObject":
        """Create a DataObject wrapping a new empty dict."""
        return cls({})

    @classmethod
    def from_json(cls, source: "JSONSource") -> "DataObject":
        """Parse a JSON object.

        Args:
            source: JSON text, UTF-8 bytes, or a readable stream.

        Returns:
            A DataObject wrapping the parsed object.

        Raises:
            JsonParseError: If the JSON is malformed or not an object.
        """
        value = parse_json(source)
        if not isinstance(value, dict):
            msg = f"expected JSON object, got {type(value).__name__}"
            raise JsonParseError(msg)
        return cls(value)

    def _get_data(self) -> "JSONObject":
        return self._data

    def _raw(self, location: "Location") -> "JSONValue":
        return self._data.get(cast("str", location))

    def has_key(self, key: str) -> bool:
        """Check whether key is present, even if its value is null."""
        return key in self._data

    def keys(self) -> "KeysView[str]":
        return self._data.keys()

    def values(self) -> "ValuesView[JSONValue]":
        return self._data.values()

    def put(self, key: str, value: object) -> "DataObject":
        """Store value under key, replacing any previous value.

        DataObject, DataArray and objects implementing to_data() or
        to_data_array() are stored as their underlying JSON data.

        Returns:
            This DataObject, for chaining.
        """
        self._data[key] = unwrap(value)
        return self

    def put_null(self, key: str) -> "DataObject":
        """Store an explicit null under key."""
        self._data[key] = None
        return self

    def remove(self, key: str) -> "DataObject":
        """Remove key if present."""
        _ = self._data.pop(key, None)
        return self

    def rename(self, key: str, new_key: str) -> "DataObject":
        """Move the value under key to new_key. Does nothing if key is absent."""
        if key in self._data:
            self._data[new_key] = self._data.pop(key)
        return self

    def update(self, items: "Iterable[tuple[str, object]]") -> "DataObject":
        """Put every (key, value) pair from items."""
        for key, value in items:
            _ = self.put(key, value)
        return self

    def to_dict(self) -> "JSONObject":
        """Return the wrapped dict."""
        return self._data

    def to_data(self) -> "DataObject":
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
