import json
from typing import Any

from configfile.formats import FormatTag
from configfile.registry import hub

from .base import BaseCodec


@hub.register_codec(FormatTag.JSON)
class JsonCodec(BaseCodec):
    """JSON codec backed by the standard library."""

    format = FormatTag.JSON

    def _encode(self, data: Any, *, root: str) -> bytes:
        text = json.dumps(data, indent=2, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    def _decode(self, raw: bytes) -> Any:
        return json.loads(raw.decode("utf-8"))
