from __future__ import annotations

import logging
from pathlib import Path

import pytest

from upnpbindgen.errors import TransportError
from upnpbindgen.settings import RootDocument, Settings

DATA = Path(__file__).parent / "data"
ADDRESS = "http://fritz.box:49000"


def pytest_configure(config):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load(name: str) -> str:
    return (DATA / name).read_text()


class FakeTransport:
    """Serves documents from memory and records every requested url."""

    def __init__(self, documents: dict[str, str]):
        self.documents = documents
        self.requested: list[str] = []

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        try:
            return self.documents[url]
        except KeyError:
            raise TransportError(url, "404 Not Found") from None


@pytest.fixture
def documents() -> dict[str, str]:
    return {
        f"{ADDRESS}/{path.name}": path.read_text() for path in sorted(DATA.glob("*.xml"))
    }


@pytest.fixture
def transport(documents) -> FakeTransport:
    return FakeTransport(documents)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        address=ADDRESS,
        documents=[RootDocument(path="tr64desc.xml", prefix="tr064")],
        output_path=tmp_path / "output",
    )
