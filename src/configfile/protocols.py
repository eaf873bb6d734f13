"""
Protocol definitions for codec adapters and self-locating values.
"""

from __future__ import annotations

__all__ = ["CodecProtocol", "Storable"]

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from configfile.formats import FormatTag


class CodecProtocol(Protocol):
    """Protocol for a single-format codec adapter.

    A codec translates between plain data (dicts, lists and scalars) and the
    raw bytes of one serialization format. It performs no I/O and never lets
    the backend's own exception types escape.
    """

    format: FormatTag

    #: False when decoding cannot recover scalar types (e.g. XML text nodes).
    typed: bool

    def encode(self, data: Any, *, root: str = "config") -> bytes:
        """Serializes plain data into bytes.

        Args:
            data: Plain data produced by :func:`configfile.payload.to_plain`.
            root: Name of the root node, for formats that need one.

        Returns:
            The encoded document.

        Raises:
            EncodeError: The backend could not serialize ``data``.
        """
        ...

    def decode(self, raw: bytes) -> Any:
        """Parses bytes into plain data.

        Args:
            raw: The complete file content.

        Returns:
            The decoded document as plain data.

        Raises:
            DecodeError: ``raw`` is malformed for this format.
        """
        ...


@runtime_checkable
class Storable(Protocol):
    """A value that knows where it is stored on disk."""

    def config_path(self) -> Path:
        """Returns the file path this value is stored to."""
        ...
