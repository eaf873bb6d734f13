"""
This module provides registration and lazy discovery of codec adapters, and
tracks which formats are enabled.
"""

from __future__ import annotations

__all__ = ["CodecHub", "hub", "parse_enabled_formats"]

import logging
import os
from collections.abc import Callable, Iterable
from importlib import import_module
from typing import TYPE_CHECKING, TypeVar

from configfile.errors import FormatDisabledError
from configfile.formats import FormatTag

if TYPE_CHECKING:
    from configfile.protocols import CodecProtocol

    C = TypeVar("C", bound=CodecProtocol)

logger = logging.getLogger(__name__)

_CODECS_PKG = "configfile.codecs"

ENV_ENABLED_FORMATS = "CONFIGFILE_FORMATS"


def parse_enabled_formats(value: str | None) -> frozenset[FormatTag] | None:
    """Parse a comma separated list of format names.

    Args:
        value: e.g. ``"toml, json"``. ``None`` or an empty string means no
            restriction.

    Returns:
        The selected tags, or None if every format is allowed.

    Raises:
        ValueError: If a name does not match any :class:`FormatTag`.
    """
    if not value or not value.strip():
        return None

    tags: set[FormatTag] = set()
    for name in value.split(","):
        name = name.strip().lower()
        if not name:
            continue
        try:
            tags.add(FormatTag(name))
        except ValueError:
            raise ValueError(f"Unknown format in {ENV_ENABLED_FORMATS}: {name!r}") from None
    return frozenset(tags)


class CodecHub:
    """Central registry for codec adapters.

    Codec classes register themselves with :meth:`register_codec`. A codec
    module is named after its format:

        configfile.codecs._<format>

    and is imported the first time that format is requested. A format can
    only be used when it is in the enabled set *and* its module imports,
    which means the backend library it wraps is installed.
    """

    def __init__(self, enabled: Iterable[FormatTag] | None = None) -> None:
        self._codecs: dict[FormatTag, type[CodecProtocol]] = {}
        self._instances: dict[FormatTag, CodecProtocol] = {}
        self._unavailable: dict[FormatTag, str] = {}
        self._enabled: frozenset[FormatTag] | None = None
        self.set_enabled(enabled)

        # Packages searched for codec modules
        self._sources: list[str] = [_CODECS_PKG]

    @property
    def enabled(self) -> frozenset[FormatTag]:
        """Formats allowed by configuration (whether or not a codec exists)."""
        if self._enabled is None:
            return frozenset(FormatTag)
        return self._enabled

    def set_enabled(self, formats: Iterable[FormatTag] | None) -> None:
        """Restrict the hub to ``formats``; ``None`` allows every format."""
        self._enabled = None if formats is None else frozenset(formats)
        logger.debug("Enabled formats: %s", sorted(t.value for t in self.enabled))

    def register_codec(
        self,
        format: FormatTag,
    ) -> Callable[[type[C]], type[C]]:
        """Decorator for registering a codec class."""

        def deco(cls: type[C]) -> type[C]:
            self._codecs[format] = cls
            self._instances.pop(format, None)
            self._unavailable.pop(format, None)
            return cls

        return deco

    def is_available(self, format: FormatTag) -> bool:
        """Return True if ``format`` is enabled and a codec can be loaded."""
        try:
            self.get_codec(format)
        except FormatDisabledError:
            return False
        return True

    def available_formats(self) -> list[FormatTag]:
        """Return every usable format, in declaration order."""
        return [tag for tag in FormatTag if self.is_available(tag)]

    def get_codec(self, format: FormatTag) -> CodecProtocol:
        """Return the codec instance for ``format``.

        Raises:
            FormatDisabledError: If the format is not enabled, or no codec
                module exists for it, or the codec's backend is missing.
        """
        if format not in self.enabled:
            raise FormatDisabledError(format, "excluded by configuration")

        codec = self._instances.get(format)
        if codec is not None:
            return codec

        cls = self._codecs.get(format)
        if cls is None:
            self._try_import_codec(format)
            cls = self._codecs.get(format)

        if cls is None:
            reason = self._unavailable.get(format, "no codec available")
            raise FormatDisabledError(format, reason)

        codec = cls()
        self._instances[format] = codec
        return codec

    def _try_import_codec(self, format: FormatTag) -> None:
        """Attempt to import the codec module for a format."""
        if format in self._unavailable:
            return

        for base in self._sources:
            modname = f"{base}._{format.value}"
            try:
                import_module(modname)
                logger.debug("Loaded codec module %s", modname)
                return
            except ModuleNotFoundError as e:
                if e.name and modname.startswith(e.name):
                    continue
                # The codec module exists but its backend library does not.
                logger.warning(
                    "Codec for %s unavailable, missing dependency %r",
                    format.value,
                    e.name,
                )
                self._unavailable[format] = f"missing dependency {e.name!r}"
                return
            except ImportError as e:
                # Installed but broken, e.g. a missing shared library.
                logger.warning("Codec for %s failed to import: %s", format.value, e)
                self._unavailable[format] = f"import failed: {e}"
                return

        self._unavailable[format] = "no codec available"


hub = CodecHub(parse_enabled_formats(os.environ.get(ENV_ENABLED_FORMATS)))
