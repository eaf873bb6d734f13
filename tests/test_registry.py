import logging

import pytest

from configfile.codecs.base import BaseCodec
from configfile.errors import ErrorKind, FormatDisabledError
from configfile.formats import FormatTag
from configfile.registry import CodecHub, hub, parse_enabled_formats

# ================================================================
# parse_enabled_formats
# ================================================================


@pytest.mark.parametrize("value", [None, "", "   "])
def test_parse_enabled_formats_unset(value):
    assert parse_enabled_formats(value) is None


def test_parse_enabled_formats_list():
    assert parse_enabled_formats("toml, JSON,,yaml ") == {
        FormatTag.TOML,
        FormatTag.JSON,
        FormatTag.YAML,
    }


def test_parse_enabled_formats_rejects_unknown():
    with pytest.raises(ValueError) as exc:
        parse_enabled_formats("toml,ini")

    assert "ini" in str(exc.value)


# ================================================================
# Global hub
# ================================================================


def test_bundled_codecs_available():
    assert hub.available_formats() == [
        FormatTag.TOML,
        FormatTag.JSON,
        FormatTag.XML,
        FormatTag.YAML,
    ]


def test_ron_has_no_codec():
    with pytest.raises(FormatDisabledError) as exc:
        hub.get_codec(FormatTag.RON)

    assert exc.value.kind is ErrorKind.FORMAT_DISABLED
    assert exc.value.format is FormatTag.RON


def test_codec_instances_are_cached():
    assert hub.get_codec(FormatTag.JSON) is hub.get_codec(FormatTag.JSON)


def test_codec_reports_its_format():
    for tag in hub.available_formats():
        assert hub.get_codec(tag).format is tag


def test_set_enabled_restricts_formats():
    hub.set_enabled({FormatTag.TOML})

    assert hub.enabled == {FormatTag.TOML}
    assert hub.is_available(FormatTag.TOML)
    assert not hub.is_available(FormatTag.JSON)
    with pytest.raises(FormatDisabledError) as exc:
        hub.get_codec(FormatTag.JSON)
    assert "configuration" in str(exc.value)

    hub.set_enabled(None)
    assert hub.is_available(FormatTag.JSON)


# ================================================================
# Registration and discovery
# ================================================================


class FakeRonCodec(BaseCodec):
    format = FormatTag.RON

    def _encode(self, data, *, root):
        return repr(data).encode()

    def _decode(self, raw):
        return {"raw": raw.decode()}


def test_register_codec_enables_format():
    h = CodecHub()
    h.register_codec(FormatTag.RON)(FakeRonCodec)

    codec = h.get_codec(FormatTag.RON)
    assert isinstance(codec, FakeRonCodec)
    assert codec.decode(b"()") == {"raw": "()"}


def test_register_codec_respects_enabled_set():
    h = CodecHub(enabled={FormatTag.JSON})
    h.register_codec(FormatTag.RON)(FakeRonCodec)

    with pytest.raises(FormatDisabledError):
        h.get_codec(FormatTag.RON)


def test_missing_backend_disables_format(monkeypatch, caplog):
    def fake_import(name):
        raise ModuleNotFoundError("No module named 'yaml'", name="yaml")

    monkeypatch.setattr("configfile.registry.import_module", fake_import)
    h = CodecHub()

    with caplog.at_level(logging.WARNING, logger="configfile.registry"):
        with pytest.raises(FormatDisabledError) as exc:
            h.get_codec(FormatTag.YAML)

    assert "missing dependency 'yaml'" in str(exc.value)
    assert "missing dependency" in caplog.text
    assert not h.is_available(FormatTag.YAML)


def test_broken_backend_disables_format(monkeypatch, caplog):
    def fake_import(name):
        raise ImportError("libxml2.so.2: cannot open shared object file")

    monkeypatch.setattr("configfile.registry.import_module", fake_import)
    h = CodecHub()

    with caplog.at_level(logging.WARNING, logger="configfile.registry"):
        with pytest.raises(FormatDisabledError) as exc:
            h.get_codec(FormatTag.XML)

    assert exc.value.format is FormatTag.XML
    assert "libxml2.so.2" in str(exc.value)
    assert "failed to import" in caplog.text
    assert not h.is_available(FormatTag.XML)
