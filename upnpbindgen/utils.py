from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Callable, Protocol

import aiohttp
import xmltodict

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_RE = re.compile(' xmlns="[^"]+"')


class Fetcher(Protocol):
    async def fetch(self, url: str) -> str:
        ...


def create_session(verify_ssl: bool) -> aiohttp.ClientSession:
    return aiohttp.ClientSession(connector=aiohttp.TCPConnector(ssl=verify_ssl))


class Transport:
    """Fetches whole documents from the device, one request at a time."""

    def __init__(self, verify_ssl: bool = False, session: aiohttp.ClientSession | None = None):
        self.verify_ssl = verify_ssl
        self.http = session
        self._owns_session = session is None

    async def __aenter__(self) -> Transport:
        if self.http is None:
            self.http = create_session(self.verify_ssl)
        return self

    async def __aexit__(self, *exc_info):
        if self._owns_session and self.http is not None:
            await self.http.close()
            self.http = None

    async def fetch(self, url: str) -> str:
        if self.http is None:
            raise RuntimeError("transport used outside of its context")

        logger.debug("GET %s", url)
        try:
            async with self.http.get(url) as response:
                response.raise_for_status()
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc


def strip_default_namespace(xml: str) -> str:
    return DEFAULT_NAMESPACE_RE.sub("", xml, count=1)


def xml2dict(
    xml: str | bytes,
    force_list: Callable[[list, str, Any], bool] | None = None,
    process_namespaces: bool = False,
) -> dict:
    return xmltodict.parse(
        xml,
        force_list=force_list,
        process_namespaces=process_namespaces,
    )
