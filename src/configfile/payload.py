"""
Conversion between configuration values and plain data.

Codecs only see plain data: dicts with string keys, lists and scalars. This
module flattens dataclass instances into that shape before encoding, and
rebuilds the caller's declared type after decoding.
"""

from __future__ import annotations

__all__ = ["PayloadError", "to_plain", "from_plain", "root_name"]

import dataclasses
import datetime as dt
import types
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

_SCALARS = (str, int, float, bool, dt.datetime, dt.date, dt.time)

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class PayloadError(ValueError):
    """Decoded data does not match the requested type."""


def root_name(value: Any) -> str:
    """Return the document root name for ``value`` (used by XML)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return type(value).__name__
    return "config"


def to_plain(value: Any) -> Any:
    """Convert a configuration value into plain data.

    Raises:
        TypeError: If ``value`` contains an object that has no plain form,
            or a mapping with non-string keys.
    """
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Enum):
        return to_plain(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Mapping keys must be strings, got {key!r}")
            out[key] = to_plain(item)
        return out
    if isinstance(value, list | tuple):
        return [to_plain(item) for item in value]
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def from_plain(data: Any, tp: Any = dict, *, typed: bool = True) -> Any:
    """Build an instance of ``tp`` from decoded plain data.

    Args:
        data: Output of a codec's ``decode``.
        tp: The requested type. ``dict`` (the default) returns the mapping
            as decoded.
        typed: False for codecs whose leaves are all strings; scalars are
            then parsed and single items are accepted where a list is
            expected.

    Returns:
        The rebuilt value.

    Raises:
        PayloadError: If ``data`` cannot be converted to ``tp``.
    """
    return _convert(data, tp, typed, "$")


def _convert(data: Any, tp: Any, typed: bool, loc: str) -> Any:
    if tp is Any or tp is object:
        return data

    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Union or origin is types.UnionType:
        return _convert_union(data, args, typed, loc)

    if tp is type(None):
        if data is None:
            return None
        raise PayloadError(f"{loc}: expected null, got {_describe(data)}")

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _convert_dataclass(data, tp, typed, loc)

    if tp is dict or origin is dict:
        if not typed and data == "":
            data = {}
        if not isinstance(data, dict):
            raise PayloadError(f"{loc}: expected a mapping, got {_describe(data)}")
        if not args:
            return dict(data)
        return {k: _convert(v, args[1], typed, f"{loc}.{k}") for k, v in data.items()}

    if tp is list or origin is list:
        items = _as_sequence(data, typed, loc)
        if not args:
            return list(items)
        return [_convert(v, args[0], typed, f"{loc}[{i}]") for i, v in enumerate(items)]

    if tp is tuple or origin is tuple:
        items = _as_sequence(data, typed, loc)
        if not args:
            return tuple(items)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(
                _convert(v, args[0], typed, f"{loc}[{i}]") for i, v in enumerate(items)
            )
        if len(items) != len(args):
            raise PayloadError(
                f"{loc}: expected {len(args)} items, got {len(items)}"
            )
        return tuple(
            _convert(v, a, typed, f"{loc}[{i}]")
            for i, (v, a) in enumerate(zip(items, args, strict=True))
        )

    if isinstance(tp, type) and issubclass(tp, Enum):
        try:
            return tp(data)
        except ValueError:
            pass
        if not typed:
            for member in tp:
                if str(member.value) == data:
                    return member
        raise PayloadError(f"{loc}: {data!r} is not a valid {tp.__name__}")

    if tp is bool:
        return _convert_bool(data, typed, loc)
    if tp is int:
        return _convert_number(data, int, typed, loc)
    if tp is float:
        return _convert_number(data, float, typed, loc)

    if isinstance(tp, type):
        if isinstance(data, tp):
            return data
        raise PayloadError(f"{loc}: expected {tp.__name__}, got {_describe(data)}")

    raise PayloadError(f"{loc}: unsupported type annotation {tp!r}")


def _convert_union(data: Any, args: tuple[Any, ...], typed: bool, loc: str) -> Any:
    if data is None and type(None) in args:
        return None

    errors: list[str] = []
    for arg in args:
        if arg is type(None):
            continue
        try:
            return _convert(data, arg, typed, loc)
        except PayloadError as e:
            errors.append(str(e))
    raise PayloadError("; ".join(errors) or f"{loc}: no matching type")


def _convert_dataclass(data: Any, tp: type, typed: bool, loc: str) -> Any:
    if not typed and data == "":
        data = {}
    if not isinstance(data, dict):
        raise PayloadError(f"{loc}: expected a mapping, got {_describe(data)}")

    hints = get_type_hints(tp)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(tp):
        if not f.init:
            continue
        ftype = hints.get(f.name, Any)
        floc = f"{loc}.{f.name}"

        if f.name in data:
            kwargs[f.name] = _convert(data[f.name], ftype, typed, floc)
            continue

        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        if has_default:
            continue
        if _accepts_none(ftype):
            kwargs[f.name] = None
        elif not typed and _is_collection(ftype):
            # empty sequences and mappings leave no element behind
            empty: Any = {} if (get_origin(ftype) or ftype) is dict else []
            kwargs[f.name] = _convert(empty, ftype, typed, floc)
        else:
            raise PayloadError(f"{floc}: missing field")

    return tp(**kwargs)


def _convert_bool(data: Any, typed: bool, loc: str) -> bool:
    if isinstance(data, bool):
        return data
    if not typed and isinstance(data, str):
        text = data.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise PayloadError(f"{loc}: expected a boolean, got {_describe(data)}")


def _convert_number(data: Any, kind: type, typed: bool, loc: str) -> Any:
    if isinstance(data, bool):
        raise PayloadError(f"{loc}: expected {kind.__name__}, got bool")
    if isinstance(data, kind):
        return data
    if kind is float and isinstance(data, int):
        return float(data)
    if not typed and isinstance(data, str):
        try:
            return kind(data.strip())
        except ValueError:
            pass
    raise PayloadError(f"{loc}: expected {kind.__name__}, got {_describe(data)}")


def _as_sequence(data: Any, typed: bool, loc: str) -> list[Any]:
    if isinstance(data, list | tuple):
        return list(data)
    if not typed:
        return [data]
    raise PayloadError(f"{loc}: expected a list, got {_describe(data)}")


def _accepts_none(tp: Any) -> bool:
    origin = get_origin(tp)
    return (origin is Union or origin is types.UnionType) and type(None) in get_args(
        tp
    )


def _is_collection(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return origin in (list, tuple, dict)


def _describe(data: Any) -> str:
    if data is None:
        return "null"
    return type(data).__name__
