import tomllib
from typing import Any

import tomli_w

from configfile.errors import EncodeError
from configfile.formats import FormatTag
from configfile.registry import hub

from .base import BaseCodec


def _strip_none(value: Any) -> Any:
    """Drop ``None`` entries, which TOML cannot represent."""
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list | tuple):
        return [_strip_none(v) for v in value if v is not None]
    return value


@hub.register_codec(FormatTag.TOML)
class TomlCodec(BaseCodec):
    """TOML codec: ``tomllib`` for reading, ``tomli_w`` for writing."""

    format = FormatTag.TOML

    decode_errors = (tomllib.TOMLDecodeError, ValueError)

    def _encode(self, data: Any, *, root: str) -> bytes:
        if not isinstance(data, dict):
            raise EncodeError(
                self.format,
                f"document root must be a table, got {type(data).__name__}",
            )
        return tomli_w.dumps(_strip_none(data)).encode("utf-8")

    def _decode(self, raw: bytes) -> Any:
        return tomllib.loads(raw.decode("utf-8"))
