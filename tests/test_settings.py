from pathlib import Path

import pytest
from pydantic import ValidationError

from upnpbindgen.settings import ErrorPolicy, RootDocument, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("UPNPBINDGEN_ADDRESS", raising=False)
    settings = Settings()

    assert settings.address == "http://fritz.box:49000"
    assert [(d.path, d.prefix) for d in settings.documents] == [
        ("tr64desc.xml", "tr064"),
        ("igddesc.xml", "igd"),
    ]
    assert settings.error_policy is ErrorPolicy.FAIL_FAST
    assert settings.verify_ssl is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("UPNPBINDGEN_ADDRESS", "https://192.168.178.1:49443")
    monkeypatch.setenv("UPNPBINDGEN_ERROR_POLICY", "collect")
    monkeypatch.setenv("UPNPBINDGEN_OUTPUT_PATH", "/tmp/bindings")

    settings = Settings()

    assert settings.address == "https://192.168.178.1:49443"
    assert settings.error_policy is ErrorPolicy.COLLECT
    assert settings.output_path == Path("/tmp/bindings")


def test_address_must_be_http():
    with pytest.raises(ValidationError):
        Settings(address="fritz.box:49000")


def test_output_paths():
    settings = Settings(output_path=Path("out"))
    document = RootDocument(path="igddesc.xml", prefix="igd")

    assert settings.responses_path(document) == Path("out/igd_responses")
    assert settings.requests_path(document) == Path("out/igd_requests")
    assert settings.requests_path(RootDocument(path="desc.xml")) == Path("out/requests")


@pytest.mark.parametrize(
    "value, path, prefix",
    [
        ("tr64desc.xml:tr064", "tr64desc.xml", "tr064"),
        ("igddesc.xml", "igddesc.xml", ""),
    ],
)
def test_root_document_parse(value, path, prefix):
    document = RootDocument.parse(value)

    assert (document.path, document.prefix) == (path, prefix)


def test_root_document_url():
    document = RootDocument(path="/tr64desc.xml", prefix="tr064")

    assert document.url("http://fritz.box:49000") == "http://fritz.box:49000/tr64desc.xml"
    assert document.url("http://fritz.box:49000/") == "http://fritz.box:49000/tr64desc.xml"
    assert document.file_prefix == "tr064_"
