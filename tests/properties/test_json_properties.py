"""Property-based tests for JSON serialization and parsing."""

import json
from typing import TYPE_CHECKING

from hypothesis import given

from tixte import DataArray, DataObject, DataType
from tixte._json import parse_json, serialize_json

from .strategies import json_array_strategy, json_object_strategy, json_value_strategy

if TYPE_CHECKING:
    from tixte._types import JSONArray, JSONObject, JSONValue


class TestSerializationRoundtrip:
    """Serialize then parse produces equivalent data."""

    @given(json_value_strategy)
    def test_roundtrip_preserves_data(self, value: "JSONValue") -> None:
        """parse(serialize(value)) == value for any JSON value."""
        assert parse_json(serialize_json(value)) == value

    @given(json_object_strategy)
    def test_serialize_is_deterministic(self, obj: "JSONObject") -> None:
        assert serialize_json(obj) == serialize_json(obj)


class TestSerializationProperties:
    """Serialization output format invariants."""

    @given(json_object_strategy)
    def test_compact(self, obj: "JSONObject") -> None:
        """Output equals the standard library's compact form."""
        expected = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
        assert serialize_json(obj) == expected

    @given(json_object_strategy)
    def test_to_json_is_utf8_of_str(self, obj: "JSONObject") -> None:
        data = DataObject(obj)
        assert data.to_json() == str(data).encode("utf-8")


class TestContainers:
    @given(json_object_strategy)
    def test_object_from_json(self, obj: "JSONObject") -> None:
        assert DataObject.from_json(serialize_json(obj)) == DataObject(obj)

    @given(json_array_strategy)
    def test_array_from_json(self, array: "JSONArray") -> None:
        parsed = DataArray.from_json(serialize_json(array))
        assert parsed.length() == len(array)
        assert parsed.to_list() == array

    @given(json_value_strategy)
    def test_every_value_has_a_type(self, value: "JSONValue") -> None:
        data_type = DataType.get_type(value)
        assert data_type.is_type(value)
