import tomllib

import pytest

from configfile.codecs._toml import TomlCodec, _strip_none
from configfile.errors import DecodeError, EncodeError
from configfile.formats import FormatTag


def test_encode_roundtrip_nested():
    data = {"host": "example.com", "inner": {"answer": 42}, "tags": ["a", "b"]}
    raw = TomlCodec().encode(data)

    assert tomllib.loads(raw.decode("utf-8")) == data


def test_encode_drops_none():
    raw = TomlCodec().encode({"a": 1, "b": None, "c": {"d": None}})
    assert tomllib.loads(raw.decode("utf-8")) == {"a": 1, "c": {}}


def test_strip_none_in_lists():
    assert _strip_none({"xs": [1, None, 2]}) == {"xs": [1, 2]}


def test_encode_non_table_root():
    with pytest.raises(EncodeError) as exc:
        TomlCodec().encode([1, 2, 3])

    assert exc.value.format is FormatTag.TOML
    assert "table" in str(exc.value)


def test_decode_invalid():
    with pytest.raises(DecodeError) as exc:
        TomlCodec().decode(b"a = [1,2,,3]")

    assert exc.value.format is FormatTag.TOML
    assert isinstance(exc.value.__cause__, tomllib.TOMLDecodeError)
    assert "Couldn't parse TOML data" in str(exc.value)


def test_decode_valid():
    assert TomlCodec().decode(b"a = 1\nb = '2'") == {"a": 1, "b": "2"}
