"""DataArray: typed access to a JSON array."""

from typing import TYPE_CHECKING, ClassVar, cast

from ._exceptions import JsonParseError
from ._json import parse_json
from ._mixin import DataMixin, unwrap

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ._json import JSONSource
    from ._types import JSONArray, JSONValue, Location

__all__ = ["DataArray"]


class DataArray(DataMixin):
    """A JSON array with typed, fail-fast accessors.

    Indices are 0-based. An index outside the array is treated like a null
    value: required accessors raise, default accessors return the default.
    Negative indices never wrap around.
    """

    __slots__: ClassVar[tuple[str, ...]] = ("_data",)

    _data: "JSONArray"

    def __init__(self, data: "JSONArray | None" = None) -> None:
        self._data = [] if data is None else data

    @classmethod
    def empty(cls) -> "DataArray":
        """Create a DataArray wrapping a new empty list."""
        return cls([])

    @classmethod
    def from_collection(cls, values: "Iterable[object]") -> "DataArray":
        """Create a DataArray holding the given values."""
        return cls.empty().add_all(values)

    @classmethod
    def from_json(cls, source: "JSONSource") -> "DataArray":
        """Parse a JSON array.

        Args:
            source: JSON text, UTF-8 bytes, or a readable stream.

        Returns:
            A DataArray wrapping the parsed list.

        Raises:
            JsonParseError: If the JSON is malformed or not an array.
        """
        value = parse_json(source)
        if not isinstance(value, list):
            msg = f"expected JSON array, got {type(value).__name__}"
            raise JsonParseError(msg)
        return cls(value)

    def _get_data(self) -> "JSONArray":
        return self._data

    def _raw(self, location: "Location") -> "JSONValue":
        index = cast("int", location)
        if 0 <= index < len(self._data):
            return self._data[index]
        return None

    def length(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def add(self, value: object) -> "DataArray":
        """Append value. Returns this DataArray, for chaining."""
        self._data.append(unwrap(value))
        return self

    def add_all(self, values: "Iterable[object]") -> "DataArray":
        """Append every value."""
        self._data.extend(unwrap(value) for value in values)
        return self

    def insert(self, index: int, value: object) -> "DataArray":
        """Insert value before index."""
        self._data.insert(index, unwrap(value))
        return self

    def remove(self, index: int) -> "DataArray":
        """Remove the value at index.

        Raises:
            IndexError: If index is outside the array.
        """
        if not 0 <= index < len(self._data):
            msg = f"index {index} out of range for array of length {len(self._data)}"
            raise IndexError(msg)
        del self._data[index]
        return self

    def to_list(self) -> "JSONArray":
        """Return the wrapped list."""
        return self._data

    def to_data_array(self) -> "DataArray":
        return self

    def __iter__(self) -> "Iterator[JSONValue]":
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
