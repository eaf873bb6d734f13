"""
XML codec backed by lxml.

Mapping between plain data and elements:

* the document root is named after the payload type
* each mapping key becomes a child element
* a list becomes repeated elements with the same tag
* scalars become element text, ``None`` is omitted

Decoding cannot tell ``"1"`` from ``1``, so leaves come back as strings and
repeated tags as lists; :func:`configfile.payload.from_plain` coerces them
against the declared type.
"""

from typing import Any

from lxml import etree

from configfile.errors import EncodeError
from configfile.formats import FormatTag
from configfile.registry import hub

from .base import BaseCodec


@hub.register_codec(FormatTag.XML)
class XmlCodec(BaseCodec):
    format = FormatTag.XML
    typed = False

    decode_errors = (etree.XMLSyntaxError, ValueError)

    def _encode(self, data: Any, *, root: str) -> bytes:
        if not isinstance(data, dict):
            raise EncodeError(
                self.format,
                f"document root must be a mapping, got {type(data).__name__}",
            )
        elem = etree.Element(root)
        for key, value in data.items():
            self._append(elem, str(key), value)
        return etree.tostring(
            elem,
            pretty_print=True,
            xml_declaration=True,
            encoding="utf-8",
        )

    def _decode(self, raw: bytes) -> Any:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        elem = etree.fromstring(raw, parser=parser)
        value = self._to_plain(elem)
        return value if isinstance(value, dict) else {}

    def _append(self, parent: etree._Element, tag: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, list | tuple):
            for item in value:
                if isinstance(item, list | tuple):
                    raise EncodeError(
                        self.format, f"nested sequences are not supported ({tag!r})"
                    )
                self._append(parent, tag, item)
            return

        child = etree.SubElement(parent, tag)
        if isinstance(value, dict):
            for key, item in value.items():
                self._append(child, str(key), item)
        elif isinstance(value, bool):
            child.text = "true" if value else "false"
        else:
            child.text = str(value)

    def _to_plain(self, elem: etree._Element) -> Any:
        # skip comments and processing instructions
        children = [c for c in elem if isinstance(c.tag, str)]
        if not children:
            return elem.text or ""

        out: dict[str, Any] = {}
        for child in children:
            value = self._to_plain(child)
            tag = etree.QName(child).localname
            if tag not in out:
                out[tag] = value
            elif isinstance(out[tag], list):
                out[tag].append(value)
            else:
                out[tag] = [out[tag], value]
        return out
