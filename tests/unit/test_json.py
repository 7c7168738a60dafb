import io

import pytest

from tixte._exceptions import JsonParseError
from tixte._json import (
    DataType,
    parse_json,
    serialize_json,
    serialize_pretty,
    stringify,
)


class TestDataType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, DataType.INT),
            (1.5, DataType.FLOAT),
            ("a", DataType.STRING),
            ({}, DataType.OBJECT),
            ([], DataType.ARRAY),
            (True, DataType.BOOLEAN),
            (None, DataType.NULL),
            (object(), DataType.UNKNOWN),
        ],
        ids=["int", "float", "string", "object", "array", "bool", "null", "unknown"],
    )
    def test_get_type(self, value: object, expected: DataType) -> None:
        assert DataType.get_type(value) is expected

    def test_bool_is_not_int(self) -> None:
        assert not DataType.INT.is_type(True)
        assert DataType.BOOLEAN.is_type(False)

    def test_unknown_matches_nothing(self) -> None:
        assert not DataType.UNKNOWN.is_type(object())


class TestParseJson:
    def test_parses_str(self) -> None:
        assert parse_json('{"a": 1}') == {"a": 1}

    def test_parses_bytes(self) -> None:
        assert parse_json(b'[1, "\xc3\xa9"]') == [1, "é"]

    def test_parses_stream(self) -> None:
        assert parse_json(io.BytesIO(b'{"ok": true}')) == {"ok": True}

    def test_parses_text_stream(self) -> None:
        assert parse_json(io.StringIO("null")) is None

    @pytest.mark.parametrize(
        "text",
        ["", "{", '{"a":}', "[1,]", "nope"],
        ids=["empty", "unclosed", "missing_value", "trailing_comma", "bare_word"],
    )
    def test_malformed_raises(self, text: str) -> None:
        with pytest.raises(JsonParseError, match="invalid JSON"):
            _ = parse_json(text)

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(JsonParseError, match="invalid JSON"):
            _ = parse_json(b'"\xff\xfe\xfa"')

    def test_deep_nesting_raises(self) -> None:
        with pytest.raises(JsonParseError, match="nesting depth"):
            _ = parse_json("[" * 100_000 + "]" * 100_000)

    def test_unsupported_source_raises(self) -> None:
        with pytest.raises(JsonParseError, match="cannot parse JSON from int"):
            _ = parse_json(42)  # pyright: ignore[reportArgumentType]


class TestSerializeJson:
    def test_compact(self) -> None:
        assert serialize_json({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'

    def test_preserves_unicode(self) -> None:
        assert serialize_json({"name": "café"}) == '{"name":"café"}'

    def test_pretty_uses_four_spaces(self) -> None:
        assert serialize_pretty({"a": 1}) == '{\n    "a": 1\n}'


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (1.5, "1.5"),
            ({"a": 1}, '{"a":1}'),
            ([1, "x"], '[1,"x"]'),
        ],
        ids=["str", "true", "false", "int", "float", "object", "array"],
    )
    def test_stringify(self, value: object, expected: str) -> None:
        assert stringify(value) == expected
