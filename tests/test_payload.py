import datetime as dt
from dataclasses import dataclass, field
from enum import Enum

import pytest

from configfile.payload import PayloadError, from_plain, root_name, to_plain


class Mode(Enum):
    FAST = "fast"
    SAFE = "safe"


@dataclass
class Inner:
    answer: int


@dataclass
class Settings:
    host: str
    port: int
    tags: list[str]
    inner: Inner
    ratio: float = 0.5
    debug: bool = False
    nickname: str | None = None
    mode: Mode = Mode.SAFE
    limits: dict[str, int] = field(default_factory=dict)
    shape: tuple[int, int] | None = None


SAMPLE = Settings(
    host="example.com",
    port=443,
    tags=["example", "test"],
    inner=Inner(answer=42),
    limits={"rps": 10},
    shape=(3, 4),
)

SAMPLE_PLAIN = {
    "host": "example.com",
    "port": 443,
    "tags": ["example", "test"],
    "inner": {"answer": 42},
    "ratio": 0.5,
    "debug": False,
    "nickname": None,
    "mode": "safe",
    "limits": {"rps": 10},
    "shape": [3, 4],
}

# ================================================================
# to_plain
# ================================================================


def test_to_plain_dataclass():
    assert to_plain(SAMPLE) == SAMPLE_PLAIN


def test_to_plain_keeps_datetimes():
    ts = dt.datetime(2024, 1, 2, 3, 4, 5)
    assert to_plain({"at": ts}) == {"at": ts}


def test_to_plain_rejects_non_string_keys():
    with pytest.raises(TypeError):
        to_plain({1: "a"})


def test_to_plain_rejects_unknown_objects():
    with pytest.raises(TypeError) as exc:
        to_plain({"a": {1, 2}})

    assert "set" in str(exc.value)


def test_root_name():
    assert root_name(SAMPLE) == "Settings"
    assert root_name({"a": 1}) == "config"


# ================================================================
# from_plain (typed codecs)
# ================================================================


def test_from_plain_dataclass():
    assert from_plain(SAMPLE_PLAIN, Settings) == SAMPLE


def test_from_plain_dict_passthrough():
    assert from_plain({"a": [1, 2]}) == {"a": [1, 2]}


def test_from_plain_fills_defaults():
    data = {"host": "h", "port": 1, "tags": [], "inner": {"answer": 0}}
    cfg = from_plain(data, Settings)

    assert cfg.ratio == 0.5
    assert cfg.limits == {}
    assert cfg.mode is Mode.SAFE


def test_from_plain_ignores_unknown_keys():
    data = {"answer": 1, "extra": "ignored"}
    assert from_plain(data, Inner) == Inner(answer=1)


def test_from_plain_int_accepted_for_float():
    cfg = from_plain({**SAMPLE_PLAIN, "ratio": 2}, Settings)
    assert cfg.ratio == 2.0
    assert isinstance(cfg.ratio, float)


@pytest.mark.parametrize(
    "patch, where",
    [
        ({"port": "443"}, "$.port"),
        ({"port": True}, "$.port"),
        ({"tags": "example"}, "$.tags"),
        ({"inner": {"answer": "x"}}, "$.inner.answer"),
        ({"mode": "turbo"}, "$.mode"),
        ({"shape": [1, 2, 3]}, "$.shape"),
        ({"debug": "yes"}, "$.debug"),
    ],
)
def test_from_plain_type_mismatch(patch, where):
    with pytest.raises(PayloadError) as exc:
        from_plain({**SAMPLE_PLAIN, **patch}, Settings)

    assert where in str(exc.value)


def test_from_plain_missing_field():
    data = dict(SAMPLE_PLAIN)
    del data["host"]

    with pytest.raises(PayloadError) as exc:
        from_plain(data, Settings)

    assert "$.host: missing field" in str(exc.value)


def test_from_plain_root_not_mapping():
    with pytest.raises(PayloadError):
        from_plain([1, 2, 3], Settings)
    with pytest.raises(PayloadError):
        from_plain(None, dict)


# ================================================================
# from_plain (untyped codecs)
# ================================================================


def test_from_plain_untyped_coerces_scalars():
    data = {
        "host": "example.com",
        "port": "443",
        "tags": ["example", "test"],
        "inner": {"answer": "42"},
        "ratio": "0.5",
        "debug": "false",
        "mode": "safe",
        "limits": {"rps": "10"},
        "shape": ["3", "4"],
    }
    assert from_plain(data, Settings, typed=False) == SAMPLE


def test_from_plain_untyped_single_item_list():
    data = {"host": "h", "port": "1", "tags": "only", "inner": {"answer": "1"}}
    cfg = from_plain(data, Settings, typed=False)
    assert cfg.tags == ["only"]


def test_from_plain_untyped_missing_list_is_empty():
    data = {"host": "h", "port": "1", "inner": {"answer": "1"}}
    cfg = from_plain(data, Settings, typed=False)
    assert cfg.tags == []


def test_from_plain_untyped_bad_number():
    with pytest.raises(PayloadError):
        from_plain({"answer": "forty-two"}, Inner, typed=False)
