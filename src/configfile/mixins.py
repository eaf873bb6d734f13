"""
Mixins that attach the load/store entry points to a configuration class.
"""

from __future__ import annotations

__all__ = ["FromConfigFile", "IntoConfigFile", "StorableConfig"]

from pathlib import Path
from typing import ClassVar, TypeVar

from configfile import file_io
from configfile.file_io import PathArg
from configfile.formats import FormatTag

T = TypeVar("T")


class FromConfigFile:
    """Mixin providing ``from_config_file`` constructors."""

    @classmethod
    def from_config_file(
        cls: type[T],
        path: PathArg,
        format: FormatTag | None = None,
    ) -> T:
        """Load an instance from ``path``; see :func:`configfile.load`."""
        if format is not None:
            return file_io.load_with_specific_format(path, format, cls)
        return file_io.load(path, cls)

    @classmethod
    def from_config_file_or_default(cls: type[T], path: PathArg) -> T:
        """Load an instance from ``path``, or ``cls()`` if it does not exist."""
        return file_io.load_or_default(path, cls)


class IntoConfigFile:
    """Mixin providing ``to_config_file`` writers."""

    def to_config_file(
        self,
        path: PathArg,
        format: FormatTag | None = None,
    ) -> None:
        if format is not None:
            file_io.store_with_specific_format(self, path, format)
        else:
            file_io.store(self, path)

    def to_config_file_without_overwrite(self, path: PathArg) -> None:
        file_io.store_without_overwrite(self, path)


class StorableConfig(FromConfigFile, IntoConfigFile):
    """Configuration that knows its own file.

    Set ``CONFIG_PATH`` on the subclass, or override :meth:`config_path`
    when the location depends on the instance.
    """

    CONFIG_PATH: ClassVar[PathArg | None] = None

    def config_path(self) -> Path:
        if self.CONFIG_PATH is None:
            raise TypeError(f"{type(self).__name__} does not define CONFIG_PATH")
        return Path(self.CONFIG_PATH)

    @classmethod
    def load(cls: type[S]) -> S:
        """Load from the class's ``CONFIG_PATH``, or return defaults if missing."""
        if cls.CONFIG_PATH is None:
            raise TypeError(f"{cls.__name__} does not define CONFIG_PATH")
        return file_io.load_or_default(cls.CONFIG_PATH, cls)

    def store(self) -> None:
        """Write to :meth:`config_path`, replacing any existing file."""
        file_io.store(self)

    def store_without_overwrite(self) -> None:
        file_io.store_without_overwrite(self)


S = TypeVar("S", bound=StorableConfig)
