"""
Exceptions raised by configfile.

Every failure of a public entry point is one of the classes below, and each
carries an :class:`ErrorKind` so callers can branch on ``err.kind`` instead
of on the concrete class.
"""

from __future__ import annotations

__all__ = [
    "ErrorKind",
    "ConfigFileError",
    "FileAccessError",
    "UnknownExtensionError",
    "FormatDisabledError",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "AlreadyExistsError",
]

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from configfile.formats import FormatTag


class ErrorKind(Enum):
    IO = "io"
    UNKNOWN_EXTENSION = "unknown_extension"
    FORMAT_DISABLED = "format_disabled"
    ENCODE = "encode"
    DECODE = "decode"
    ALREADY_EXISTS = "already_exists"


class ConfigFileError(Exception):
    """Base class for configfile errors."""

    kind: ErrorKind


class FileAccessError(ConfigFileError):
    """Reading or writing the configuration file failed."""

    kind = ErrorKind.IO

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Couldn't read or write config file {path}: {cause}")
        self.path = path
        self.cause = cause

    @property
    def not_found(self) -> bool:
        """True if the underlying failure is a missing file."""
        return isinstance(self.cause, FileNotFoundError)


class UnknownExtensionError(ConfigFileError):
    """No format is registered for the file extension."""

    kind = ErrorKind.UNKNOWN_EXTENSION

    def __init__(self, extension: str, path: Path | None = None) -> None:
        where = f" ({path})" if path is not None else ""
        super().__init__(
            f"Don't know how to parse file with extension {extension!r}{where}"
        )
        self.extension = extension
        self.path = path


class FormatDisabledError(ConfigFileError):
    """The format is known but no codec is enabled for it."""

    kind = ErrorKind.FORMAT_DISABLED

    def __init__(self, format: FormatTag, reason: str | None = None) -> None:
        msg = f"Format {getattr(format, 'value', format)!r} is not enabled"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.format = format


class CodecError(ConfigFileError):
    """A codec backend failed; the native exception is chained as the cause."""

    def __init__(self, format: FormatTag, message: str) -> None:
        super().__init__(message)
        self.format = format


class EncodeError(CodecError):
    kind = ErrorKind.ENCODE

    def __init__(self, format: FormatTag, detail: object) -> None:
        super().__init__(
            format, f"Couldn't serialize {format.value.upper()} data: {detail}"
        )


class DecodeError(CodecError):
    kind = ErrorKind.DECODE

    def __init__(self, format: FormatTag, detail: object) -> None:
        super().__init__(
            format, f"Couldn't parse {format.value.upper()} data: {detail}"
        )


class AlreadyExistsError(ConfigFileError):
    """Refused to overwrite an existing file."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, path: Path) -> None:
        super().__init__(f"File already exists: {path}")
        self.path = path
