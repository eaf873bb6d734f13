from typing import Any

import yaml

from configfile.formats import FormatTag
from configfile.registry import hub

from .base import BaseCodec


@hub.register_codec(FormatTag.YAML)
class YamlCodec(BaseCodec):
    """YAML codec backed by PyYAML's safe loader and dumper."""

    format = FormatTag.YAML

    encode_errors = (yaml.YAMLError, TypeError, ValueError)
    decode_errors = (yaml.YAMLError, ValueError)

    def _encode(self, data: Any, *, root: str) -> bytes:
        text = yaml.safe_dump(
            data,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )
        return text.encode("utf-8")

    def _decode(self, raw: bytes) -> Any:
        return yaml.safe_load(raw.decode("utf-8"))
