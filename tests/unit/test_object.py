from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest

from tixte import DataArray, DataObject, DataType
from tixte._exceptions import JsonParseError, MissingOrWrongTypeError

if TYPE_CHECKING:
    from collections.abc import Callable


class TestFromJson:
    def test_parses_object(self) -> None:
        obj = DataObject.from_json('{"id": "42", "tags": ["a"]}')
        assert obj.to_dict() == {"id": "42", "tags": ["a"]}

    @pytest.mark.parametrize(
        ("text", "found"),
        [("[]", "list"), ("1", "int"), ('"x"', "str"), ("null", "NoneType")],
        ids=["array", "number", "string", "null"],
    )
    def test_non_object_raises(self, text: str, found: str) -> None:
        with pytest.raises(JsonParseError, match=f"expected JSON object, got {found}"):
            _ = DataObject.from_json(text)

    def test_malformed_raises(self) -> None:
        with pytest.raises(JsonParseError):
            _ = DataObject.from_json("{")


class TestStrictAccessors:
    @pytest.fixture
    def obj(self) -> DataObject:
        return DataObject(
            {
                "name": "alice",
                "count": 7,
                "ratio": 2.5,
                "numeric_string": "12",
                "flag": True,
                "flag_string": "TRUE",
                "nothing": None,
                "created": "2024-01-02T03:04:05+00:00",
            }
        )

    def test_get_string(self, obj: DataObject) -> None:
        assert obj.get_string("name") == "alice"

    def test_get_string_stringifies(self, obj: DataObject) -> None:
        assert obj.get_string("count") == "7"
        assert obj.get_string("flag") == "true"

    def test_get_int(self, obj: DataObject) -> None:
        assert obj.get_int("count") == 7

    def test_get_int_parses_strings(self, obj: DataObject) -> None:
        assert obj.get_int("numeric_string") == 12

    def test_get_int_truncates_floats(self, obj: DataObject) -> None:
        assert obj.get_int("ratio") == 2

    def test_get_double(self, obj: DataObject) -> None:
        assert obj.get_double("ratio") == 2.5
        assert obj.get_double("count") == 7.0

    def test_get_boolean(self, obj: DataObject) -> None:
        assert obj.get_boolean("flag") is True
        assert obj.get_boolean("flag_string") is True

    def test_get_datetime(self, obj: DataObject) -> None:
        assert obj.get_datetime("created") == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize(
        "getter",
        [
            DataObject.get_string,
            DataObject.get_int,
            DataObject.get_long,
            DataObject.get_double,
            DataObject.get_boolean,
            DataObject.get_datetime,
            DataObject.get_data_object,
            DataObject.get_data_array,
        ],
        ids=["string", "int", "long", "double", "boolean", "datetime", "obj", "arr"],
    )
    @pytest.mark.parametrize("key", ["nothing", "absent"], ids=["null", "absent"])
    def test_null_or_absent_raises(
        self, obj: DataObject, getter: "Callable[[DataObject, str], object]", key: str
    ) -> None:
        with pytest.raises(MissingOrWrongTypeError) as exc_info:
            _ = getter(obj, key)
        assert exc_info.value.key == key
        assert exc_info.value.is_missing

    def test_wrong_type_raises(self, obj: DataObject) -> None:
        with pytest.raises(MissingOrWrongTypeError, match="into type int") as exc_info:
            _ = obj.get_int("name")
        assert exc_info.value.expected == "int"
        assert exc_info.value.value == "alice"
        assert not exc_info.value.is_missing

    def test_boolean_rejects_numbers(self, obj: DataObject) -> None:
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get_boolean("count")

    def test_int_rejects_booleans(self, obj: DataObject) -> None:
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get_int("flag")

    def test_datetime_rejects_garbage(self, obj: DataObject) -> None:
        with pytest.raises(MissingOrWrongTypeError, match="datetime"):
            _ = obj.get_datetime("name")

    def test_child_object_of_wrong_type_raises(self, obj: DataObject) -> None:
        with pytest.raises(MissingOrWrongTypeError, match="DataObject") as exc_info:
            _ = obj.get_data_object("name")
        assert not exc_info.value.is_missing


class TestIntegerRanges:
    @pytest.mark.parametrize(
        ("method", "value"),
        [
            ("get_int", 2**31),
            ("get_int", -(2**31) - 1),
            ("get_unsigned_int", -1),
            ("get_unsigned_int", 2**32),
            ("get_long", 2**63),
            ("get_unsigned_long", -1),
            ("get_unsigned_long", 2**64),
        ],
        ids=[
            "int_over",
            "int_under",
            "uint_negative",
            "uint_over",
            "long_over",
            "ulong_negative",
            "ulong_over",
        ],
    )
    def test_out_of_range_raises(self, method: str, value: int) -> None:
        obj = DataObject({"v": value})
        with pytest.raises(MissingOrWrongTypeError):
            _ = getattr(obj, method)("v")

    @pytest.mark.parametrize(
        ("method", "value"),
        [
            ("get_int", 2**31 - 1),
            ("get_int", -(2**31)),
            ("get_unsigned_int", 2**32 - 1),
            ("get_long", -(2**63)),
            ("get_unsigned_long", 2**64 - 1),
        ],
        ids=["int_max", "int_min", "uint_max", "long_min", "ulong_max"],
    )
    def test_bounds_are_inclusive(self, method: str, value: int) -> None:
        obj = DataObject({"v": value})
        assert getattr(obj, method)("v") == value

    def test_infinite_float_is_not_an_int(self) -> None:
        obj = DataObject({"v": float("inf")})
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get_long("v")


class TestNumericStrings:
    @pytest.mark.parametrize(
        "text",
        ["4_2", "٤٢", "４２", "0x2a", "", " "],
        ids=["underscore", "arabic_indic", "fullwidth", "hex", "empty", "blank"],
    )
    def test_int_rejects_non_ascii_decimal(self, text: str) -> None:
        obj = DataObject({"v": text})
        with pytest.raises(MissingOrWrongTypeError, match="into type int"):
            _ = obj.get_int("v")

    @pytest.mark.parametrize(
        "text",
        ["4_2.5", "٤.٢", "nan", "Infinity", "1e999", "1.2.3"],
        ids=["underscore", "arabic_indic", "nan", "infinity", "overflow", "two_dots"],
    )
    def test_double_rejects_non_ascii_decimal(self, text: str) -> None:
        obj = DataObject({"v": text})
        with pytest.raises(MissingOrWrongTypeError, match="into type double"):
            _ = obj.get_double("v")

    @pytest.mark.parametrize(
        ("text", "expected"),
        [(" -12 ", -12), ("+7", 7), ("007", 7)],
        ids=["padded_negative", "plus_sign", "leading_zeros"],
    )
    def test_int_accepts_signed_decimal(self, text: str, expected: int) -> None:
        assert DataObject({"v": text}).get_int("v") == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("2.5", 2.5), ("-.5", -0.5), ("3.", 3.0), ("1e3", 1000.0), ("7", 7.0)],
        ids=["fraction", "leading_dot", "trailing_dot", "exponent", "integer"],
    )
    def test_double_accepts_decimal(self, text: str, expected: float) -> None:
        assert DataObject({"v": text}).get_double("v") == expected


class TestDoubleOverflow:
    def test_huge_integer_is_not_a_double(self) -> None:
        obj = DataObject.from_json('{"n": 1' + "0" * 400 + "}")
        with pytest.raises(MissingOrWrongTypeError, match="double") as exc_info:
            _ = obj.get_double("n")
        assert not exc_info.value.is_missing

    def test_huge_integer_in_array(self) -> None:
        arr = DataArray([10**400])
        with pytest.raises(MissingOrWrongTypeError):
            _ = arr.get_double(0)

    def test_huge_integer_with_default_still_raises(self) -> None:
        obj = DataObject({"n": 10**400})
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get_double("n", 0.0)

    def test_huge_integer_is_still_a_string(self) -> None:
        obj = DataObject({"n": 10**400})
        assert obj.get_string("n") == "1" + "0" * 400


class TestDatetimeOffsets:
    @pytest.mark.parametrize(
        "text",
        ["2023-05-06T07:08:09", "2023-05-06", "2023-05-06 07:08"],
        ids=["naive_datetime", "date_only", "naive_space_separated"],
    )
    def test_naive_timestamps_rejected(self, text: str) -> None:
        obj = DataObject({"at": text})
        with pytest.raises(MissingOrWrongTypeError, match="datetime"):
            _ = obj.get_datetime("at")

    def test_naive_datetime_instance_rejected(self) -> None:
        naive = datetime(2023, 5, 6, 7, 8, 9)  # noqa: DTZ001
        obj = DataObject.empty().put("at", naive)
        with pytest.raises(MissingOrWrongTypeError, match="datetime"):
            _ = obj.get_datetime("at")

    @pytest.mark.parametrize(
        ("text", "offset_hours"),
        [("2023-05-06T07:08:09Z", 0), ("2023-05-06T07:08:09+02:00", 2)],
        ids=["utc_designator", "positive_offset"],
    )
    def test_offset_timestamps_accepted(self, text: str, offset_hours: int) -> None:
        value = DataObject({"at": text}).get_datetime("at")
        assert value.utcoffset() == timedelta(hours=offset_hours)


class TestDefaultAccessors:
    def test_default_returned_for_absent(self) -> None:
        obj = DataObject.empty()
        assert obj.get_string("a", "fallback") == "fallback"
        assert obj.get_int("a", 3) == 3
        assert obj.get_boolean("a", True) is True
        assert obj.get_double("a", 0.5) == 0.5
        assert obj.get_datetime("a", None) is None

    def test_default_returned_for_null(self) -> None:
        obj = DataObject({"a": None})
        assert obj.get_string("a", None) is None

    def test_default_does_not_hide_wrong_type(self) -> None:
        obj = DataObject({"a": "x"})
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get_int("a", 0)


class TestOptionalChildren:
    def test_opt_object(self) -> None:
        obj = DataObject({"child": {"a": 1}})
        child = obj.opt_object("child")
        assert child is not None
        assert child.get_int("a") == 1

    def test_opt_object_wrong_type_is_none(self) -> None:
        assert DataObject({"child": [1]}).opt_object("child") is None

    def test_opt_array(self) -> None:
        array = DataObject({"items": [1, 2]}).opt_array("items")
        assert array is not None
        assert array.length() == 2

    def test_opt_array_absent_is_none(self) -> None:
        assert DataObject.empty().opt_array("items") is None

    def test_children_share_data(self) -> None:
        obj = DataObject({"child": {"a": 1}})
        _ = obj.get_data_object("child").put("b", 2)
        assert obj.to_dict() == {"child": {"a": 1, "b": 2}}


class TestInspection:
    def test_has_key_is_true_for_null(self) -> None:
        obj = DataObject({"a": None})
        assert obj.has_key("a")
        assert obj.is_null("a")
        assert "a" in obj

    def test_is_null_for_absent(self) -> None:
        assert DataObject.empty().is_null("missing")

    def test_is_type(self) -> None:
        obj = DataObject({"a": 1, "b": [1]})
        assert obj.is_type("a", DataType.INT)
        assert obj.is_type("b", DataType.ARRAY)
        assert obj.is_type("c", DataType.NULL)

    def test_get_and_opt(self) -> None:
        obj = DataObject({"a": [1]})
        assert obj.get("a") == [1]
        assert obj.opt("b") is None
        with pytest.raises(MissingOrWrongTypeError):
            _ = obj.get("b")

    def test_keys_values_len(self) -> None:
        obj = DataObject({"a": 1, "b": 2})
        assert list(obj.keys()) == ["a", "b"]
        assert list(obj.values()) == [1, 2]
        assert len(obj) == 2


class TestMutation:
    def test_put_chains(self) -> None:
        obj = DataObject.empty().put("a", 1).put("b", "x")
        assert obj.to_dict() == {"a": 1, "b": "x"}

    def test_put_unwraps_containers(self) -> None:
        inner = DataObject.empty().put("x", 1)
        array = DataArray.from_collection([1, 2])
        obj = DataObject.empty().put("inner", inner).put("list", array)
        assert obj.to_dict() == {"inner": {"x": 1}, "list": [1, 2]}

    def test_put_null(self) -> None:
        obj = DataObject.empty().put_null("a")
        assert obj.has_key("a")
        assert obj.is_null("a")

    def test_remove(self) -> None:
        obj = DataObject({"a": 1}).remove("a").remove("missing")
        assert obj.to_dict() == {}

    def test_rename(self) -> None:
        obj = DataObject({"a": 1}).rename("a", "b")
        assert obj.to_dict() == {"b": 1}

    def test_rename_absent_is_noop(self) -> None:
        obj = DataObject({"a": 1}).rename("missing", "b")
        assert obj.to_dict() == {"a": 1}

    def test_update(self) -> None:
        obj = DataObject({"a": 1}).update([("b", 2), ("a", 3)])
        assert obj.to_dict() == {"a": 3, "b": 2}


class TestSerialization:
    def test_to_json_is_compact_utf8(self) -> None:
        obj = DataObject({"name": "café", "n": [1, 2]})
        assert obj.to_json() == '{"name":"café","n":[1,2]}'.encode()

    def test_str_is_compact_json(self) -> None:
        assert str(DataObject({"a": True})) == '{"a":true}'

    def test_pretty_string(self) -> None:
        assert DataObject({"a": 1}).to_pretty_string() == '{\n    "a": 1\n}'

    def test_equality_by_content(self) -> None:
        assert DataObject({"a": 1}) == DataObject({"a": 1})
        assert DataObject({"a": 1}) != DataObject({"a": 2})
        assert DataObject({}) != DataArray([])

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            _ = hash(DataObject.empty())
