from __future__ import annotations

__all__ = [
    "OverwritePolicy",
    "load",
    "load_with_specific_format",
    "load_or_default",
    "store",
    "store_with_specific_format",
    "store_without_overwrite",
    "dumps",
    "loads",
]

import logging
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Any, TypeVar

from configfile.errors import (
    AlreadyExistsError,
    DecodeError,
    EncodeError,
    FileAccessError,
    UnknownExtensionError,
)
from configfile.formats import FormatTag, tag_for_extension, tag_for_path
from configfile.payload import PayloadError, from_plain, root_name, to_plain
from configfile.protocols import CodecProtocol, Storable
from configfile.registry import hub

logger = logging.getLogger(__name__)

T = TypeVar("T")

PathArg = str | PathLike[str]


class OverwritePolicy(Enum):
    """Whether a store may replace an existing file."""

    ALLOW = "allow"
    FORBID = "forbid"


def _as_path(path: PathArg) -> Path:
    p = Path(path)
    try:
        return p.expanduser()
    except RuntimeError as e:
        # unknown user in "~user/..." or no home directory
        raise FileAccessError(p, OSError(str(e))) from e


def _as_format(format: FormatTag | str) -> FormatTag:
    """
    Accept a :class:`FormatTag`, its value (``"toml"``) or an extension
    (``"yml"``, ``".json"``).

    Raises:
        UnknownExtensionError: If ``format`` names no known format.
    """
    if isinstance(format, FormatTag):
        return format
    if isinstance(format, str):
        try:
            return FormatTag(format)
        except ValueError:
            return tag_for_extension(format)
    raise UnknownExtensionError(repr(format))


def _resolve_codec(path: Path, format: FormatTag | str | None) -> CodecProtocol:
    """
    Pick the codec for a call.

    An explicit ``format`` wins over the path's extension. Resolution never
    touches the filesystem.

    Raises:
        UnknownExtensionError: If ``format`` is None and the extension is
            not registered, or ``format`` names no known format.
        FormatDisabledError: If the format has no enabled codec.
    """
    tag = _as_format(format) if format is not None else tag_for_path(path)
    codec = hub.get_codec(tag)
    logger.debug("Using %s codec for %s", tag.value, path)
    return codec


def _decode(codec: CodecProtocol, raw: bytes, config_type: Any) -> Any:
    data = codec.decode(raw)
    try:
        return from_plain(data, config_type, typed=codec.typed)
    except PayloadError as e:
        raise DecodeError(codec.format, e) from e


def _encode(codec: CodecProtocol, value: Any) -> bytes:
    try:
        data = to_plain(value)
    except TypeError as e:
        raise EncodeError(codec.format, e) from e
    return codec.encode(data, root=root_name(value))


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, e) from e


def _write_bytes(path: Path, raw: bytes, overwrite: OverwritePolicy) -> None:
    """
    Write ``raw`` to ``path``, creating missing parent directories.

    With :attr:`OverwritePolicy.FORBID` the file is opened in exclusive mode,
    so a file that appeared after the existence check is not clobbered.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to create directory for '%s': %s", path, e)
        raise FileAccessError(path, e) from e

    mode = "xb" if overwrite is OverwritePolicy.FORBID else "wb"
    try:
        with path.open(mode) as f:
            f.write(raw)
    except FileExistsError as e:
        if overwrite is OverwritePolicy.FORBID:
            raise AlreadyExistsError(path) from e
        raise FileAccessError(path, e) from e
    except OSError as e:
        logger.error("Failed to write config file '%s': %s", path, e)
        raise FileAccessError(path, e) from e

    logger.info("Configuration saved to %s", path)


def _load(path: PathArg, format: FormatTag | str | None, config_type: Any) -> Any:
    p = _as_path(path)
    codec = _resolve_codec(p, format)
    logger.debug("Loading configuration from: %s", p)
    raw = _read_bytes(p)
    return _decode(codec, raw, config_type)


def _store(
    value: Any,
    path: PathArg,
    format: FormatTag | str | None,
    overwrite: OverwritePolicy,
) -> None:
    p = _as_path(path)
    codec = _resolve_codec(p, format)
    if overwrite is OverwritePolicy.FORBID:
        try:
            exists = p.exists()
        except OSError as e:
            raise FileAccessError(p, e) from e
        if exists:
            raise AlreadyExistsError(p)
    raw = _encode(codec, value)
    _write_bytes(p, raw, overwrite)


def _target_path(value: Any, path: PathArg | None) -> PathArg:
    if path is not None:
        return path
    if isinstance(value, Storable):
        return value.config_path()
    raise TypeError(
        f"No path given and {type(value).__name__} does not provide config_path()"
    )


def load(path: PathArg, config_type: type[T] = dict) -> T:  # type: ignore[assignment]
    """
    Load a configuration file, choosing the format from its extension.

    Args:
        path: File to read. The extension selects the format
            (``.toml``, ``.json``, ``.xml``, ``.yaml``/``.yml``, ``.ron``).
        config_type: Type to build from the decoded data: ``dict`` or a
            dataclass.
            XML text carries no types, so with ``dict`` every XML leaf comes
            back as a string and a single repeated element as a scalar;
            pass a dataclass to get the stored types back.

    Returns:
        The decoded configuration.

    Raises:
        UnknownExtensionError: If the extension is not registered.
        FormatDisabledError: If the format has no enabled codec.
        FileAccessError: If the file is missing or unreadable.
        DecodeError: If the content is malformed or does not fit
            ``config_type``.
    """
    return _load(path, None, config_type)


def load_with_specific_format(
    path: PathArg,
    format: FormatTag | str,
    config_type: type[T] = dict,  # type: ignore[assignment]
) -> T:
    """
    Load a configuration file in ``format``, ignoring its extension.

    Raises:
        FormatDisabledError: If ``format`` has no enabled codec; nothing is
            read in that case.
        FileAccessError: If the file is missing or unreadable.
        DecodeError: If the content is malformed.
    """
    return _load(path, format, config_type)


def load_or_default(path: PathArg, config_type: type[T] = dict) -> T:  # type: ignore[assignment]
    """
    Load a configuration file, or return ``config_type()`` if it does not exist.

    Only a missing file falls back to the default; a file that exists but
    cannot be read or parsed still raises. Nothing is written.
    """
    try:
        return _load(path, None, config_type)
    except FileAccessError as e:
        if not e.not_found:
            raise
    logger.debug("Config file %s not found, using defaults", path)
    return config_type()


def store(value: Any, path: PathArg | None = None) -> None:
    """
    Store a configuration value, choosing the format from the extension.

    Parent directories are created and an existing file is replaced.

    Args:
        value: A dict or dataclass instance.
            A dict written as XML only round-trips as strings; see
            :func:`load`.
        path: Destination file. May be omitted when ``value`` implements
            :class:`~configfile.protocols.Storable`.

    Raises:
        TypeError: If ``path`` is omitted and ``value`` is not Storable.
        UnknownExtensionError: If the extension is not registered.
        FormatDisabledError: If the format has no enabled codec.
        EncodeError: If the value cannot be serialized.
        FileAccessError: If writing fails.
    """
    _store(value, _target_path(value, path), None, OverwritePolicy.ALLOW)


def store_with_specific_format(
    value: Any,
    path: PathArg,
    format: FormatTag | str,
) -> None:
    """Store a configuration value in ``format``, ignoring the extension."""
    _store(value, path, format, OverwritePolicy.ALLOW)


def store_without_overwrite(value: Any, path: PathArg | None = None) -> None:
    """
    Store a configuration value only if the destination does not exist yet.

    Raises:
        AlreadyExistsError: If the file exists. Checked before encoding,
            and the existing file is left untouched.
    """
    _store(value, _target_path(value, path), None, OverwritePolicy.FORBID)


def dumps(value: Any, format: FormatTag | str) -> bytes:
    """Serialize a configuration value to bytes without touching any file."""
    return _encode(hub.get_codec(_as_format(format)), value)


def loads(
    raw: bytes | str,
    format: FormatTag | str,
    config_type: type[T] = dict,  # type: ignore[assignment]
) -> T:
    """Parse a configuration value from bytes (or text) without touching any file."""
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return _decode(hub.get_codec(_as_format(format)), raw, config_type)
