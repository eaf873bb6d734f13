"""
Format tags and the mapping from file extensions to formats.
"""

from __future__ import annotations

__all__ = [
    "FormatTag",
    "EXTENSIONS",
    "tag_for_extension",
    "tag_for_path",
    "extensions_for",
]

from enum import Enum
from os import PathLike
from pathlib import Path

from configfile.errors import UnknownExtensionError


class FormatTag(Enum):
    """Serialization formats known to configfile.

    The value names the codec module (``configfile.codecs._<value>``).
    """

    TOML = "toml"
    JSON = "json"
    XML = "xml"
    YAML = "yaml"
    RON = "ron"

    def __str__(self) -> str:
        return self.value


# Matched as-is: no case folding.
EXTENSIONS: dict[str, FormatTag] = {
    "toml": FormatTag.TOML,
    "json": FormatTag.JSON,
    "xml": FormatTag.XML,
    "yaml": FormatTag.YAML,
    "yml": FormatTag.YAML,
    "ron": FormatTag.RON,
}


def tag_for_extension(ext: str) -> FormatTag:
    """Return the format registered for a file extension.

    Args:
        ext: The extension, with or without its leading dot (``".yml"`` or
            ``"yml"``).

    Returns:
        The matching :class:`FormatTag`.

    Raises:
        UnknownExtensionError: If no format is registered for ``ext``.
    """
    key = ext[1:] if ext.startswith(".") else ext
    try:
        return EXTENSIONS[key]
    except KeyError:
        raise UnknownExtensionError(ext) from None


def tag_for_path(path: str | PathLike[str]) -> FormatTag:
    """Return the format implied by the last suffix of ``path``."""
    suffix = Path(path).suffix
    try:
        return tag_for_extension(suffix)
    except UnknownExtensionError as e:
        raise UnknownExtensionError(e.extension, path=Path(path)) from None


def extensions_for(tag: FormatTag) -> tuple[str, ...]:
    """Return every extension that maps to ``tag``."""
    return tuple(ext for ext, t in EXTENSIONS.items() if t is tag)
