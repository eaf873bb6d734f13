"""
Read and write configuration files, picking the format from the extension.

Example::

    from dataclasses import dataclass

    import configfile

    @dataclass
    class Config:
        host: str = "localhost"

    configfile.store(Config(host="example.com"), "/tmp/myconfig.toml")
    cfg = configfile.load("/tmp/myconfig.toml", Config)
"""

from .version import __version__ as __version__

__title__ = "configfile"
__description__ = "Read and write configuration files in any supported format."
__license__ = "BSD-2-Clause"

__all__ = [
    "FormatTag",
    "OverwritePolicy",
    "ErrorKind",
    "ConfigFileError",
    "FileAccessError",
    "UnknownExtensionError",
    "FormatDisabledError",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "AlreadyExistsError",
    "Storable",
    "FromConfigFile",
    "IntoConfigFile",
    "StorableConfig",
    "hub",
    "load",
    "load_with_specific_format",
    "load_or_default",
    "store",
    "store_with_specific_format",
    "store_without_overwrite",
    "dumps",
    "loads",
    "user_config_file",
]

from .errors import (
    AlreadyExistsError,
    CodecError,
    ConfigFileError,
    DecodeError,
    EncodeError,
    ErrorKind,
    FileAccessError,
    FormatDisabledError,
    UnknownExtensionError,
)
from .file_io import (
    OverwritePolicy,
    dumps,
    load,
    load_or_default,
    load_with_specific_format,
    loads,
    store,
    store_with_specific_format,
    store_without_overwrite,
)
from .formats import FormatTag
from .mixins import FromConfigFile, IntoConfigFile, StorableConfig
from .paths import user_config_file
from .protocols import Storable
from .registry import hub
