# bountyboard_bot/services/document_fetcher.py
"""
Quest document fetchers.

A fetcher turns a document location (``<category-base-path><filename>``) into
a decoded JSON value. Two transports are provided: HTTP(S) via aiohttp for
boards hosted next to a static site, and a local directory for development
and self-hosted data folders.
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional, Protocol
from urllib.parse import urljoin

import aiohttp

from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)


class DocumentFetchError(Exception):
    """Raised when a single quest document cannot be produced."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Could not load {location}: {reason}")


class TransportError(DocumentFetchError):
    """Network failure, non-success response, or unreadable file."""


class DocumentParseError(DocumentFetchError):
    """The document was retrieved but is not valid UTF-8 JSON."""


class DocumentFetcher(Protocol):
    async def fetch(self, location: str) -> Any: ...

    async def close(self) -> None: ...


def _decode(location: str, raw: bytes) -> Any:
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(location, f"invalid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(location, f"malformed JSON ({exc})") from exc
    except RecursionError as exc:
        raise DocumentParseError(location, "JSON nested too deeply") from exc


class HttpDocumentFetcher:
    """Fetch documents relative to a base URL with a shared client session."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def resolve(self, location: str) -> str:
        return urljoin(self.base_url, location)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def fetch(self, location: str) -> Any:
        url = self.resolve(location)
        session = self._get_session()
        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise TransportError(location, f"HTTP {response.status}")
                raw = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(location, f"{type(exc).__name__}: {exc}") from exc
        return _decode(location, raw)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


class FileDocumentFetcher:
    """Read documents from a directory on disk without blocking the event loop."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, location: str) -> Path:
        return self.root / location

    async def fetch(self, location: str) -> Any:
        path = self.resolve(location)
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise TransportError(location, f"{type(exc).__name__}: {exc}") from exc
        return _decode(location, raw)

    async def close(self) -> None:
        return None


def build_fetcher(root: str, *, timeout: float = 10.0) -> DocumentFetcher:
    """Pick the transport matching ``root`` (a URL or a directory)."""

    if root.startswith(("http://", "https://")):
        logger.info("Serving quest documents over HTTP from %s", root)
        return HttpDocumentFetcher(root, timeout=timeout)
    logger.info("Serving quest documents from directory %s", root)
    return FileDocumentFetcher(root)


__all__ = [
    "DocumentFetchError",
    "DocumentFetcher",
    "DocumentParseError",
    "FileDocumentFetcher",
    "HttpDocumentFetcher",
    "TransportError",
    "build_fetcher",
]
