"""
Transport
=========

Network boundary of the client. The pipeline only needs ``call`` to take a
method name and the exact request body and hand back decoded response text.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import aiohttp

from .exceptions import ServerError, TransportError
from ..utils.config import ClientSettings


class Transport(ABC):
    @abstractmethod
    async def call(self, method: str, body: str, dl_session: str = "", proxy: str = "") -> str: ...

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False


class AiohttpTransport(Transport):
    """POSTs JSON-RPC bodies to the web endpoint posing as the browser extension."""

    def __init__(self, settings: Optional[ClientSettings] = None):
        self.settings = settings or ClientSettings()
        self.logger = logging.getLogger(self.__class__.__name__)
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(limit=64, ttl_dns_cache=300)
            timeout = aiohttp.ClientTimeout(total=self.settings.timeout)
            self._session = aiohttp.ClientSession(connector=self._connector, timeout=timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None
            self._connector = None

    def build_url(self, method: str) -> str:
        return f"{self.settings.endpoint}?client={self.settings.client_tag}&method={method}"

    def build_headers(self, dl_session: str = "") -> Dict[str, str]:
        headers = {
            'Accept': '*/*',
            'Accept-Language': self.settings.accept_language,
            'Content-Type': 'application/json',
            'Origin': self.settings.origin,
            'Referer': self.settings.referer,
            'User-Agent': self.settings.user_agent,
        }
        if dl_session:
            headers['Cookie'] = f"dl_session={dl_session}"
        return headers

    async def call(self, method: str, body: str, dl_session: str = "", proxy: str = "") -> str:
        session = await self._get_session()
        url = self.build_url(method)
        self.logger.debug(f"POST {method} ({len(body)} bytes, proxy={'yes' if proxy else 'no'})")
        try:
            async with session.post(
                url,
                data=body.encode('utf-8'),
                headers=self.build_headers(dl_session),
                proxy=proxy or None,
            ) as resp:
                raw = await resp.read()
                text = raw.decode('utf-8', errors='replace')
                status = resp.status
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"{method} request timed out") from e

        if 400 <= status < 500:
            self.logger.warning(f"{method} rejected with HTTP {status}")
            raise ServerError(status, text)
        if status >= 500:
            raise TransportError(f"{method} failed with HTTP {status}")
        return text
