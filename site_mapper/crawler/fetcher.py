# site_mapper/crawler/fetcher.py
"""
Fetcher module: HTTP retrieval of documents and robots.txt with retry/backoff.
"""
from __future__ import annotations

import asyncio
import random
from typing import Sequence

from aiohttp import ClientError, ClientSession
from bs4.builder import ParserRejectedMarkup

from site_mapper.config import MapperConfig
from site_mapper.crawler.robots import robots_url
from site_mapper.logger import logger
from site_mapper.parser.html_parser import ParsedDocument, parse_document


class FetchError(Exception):
    """A URL could not be turned into a parsed document."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def format_url(url: str) -> str:
    """Percent-encode spaces, which servers reject in request lines."""
    return url.replace(" ", "%20")


class Fetcher:
    """Fetches pages through a shared aiohttp session."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)
    _DOCUMENT_TYPES: Sequence[str] = ("text/html", "application/xhtml+xml")

    def __init__(self, session: ClientSession, config: MapperConfig) -> None:
        self.session = session
        self.config = config

    async def fetch_document(self, url: str) -> ParsedDocument:
        """
        GET *url* and parse it.

        Raises FetchError on connection errors (after retries), non-2xx
        responses, non-HTML content, an undecodable body or markup the parser rejects.
        """
        target = format_url(url)
        attempts = 0
        while True:
            try:
                async with self.session.get(target) as resp:
                    status = resp.status
                    if status in self._RETRY_STATUS:
                        raise ClientError(f"retryable status {status}")
                    if not 200 <= status < 300:
                        raise FetchError(url, f"HTTP {status}")
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if mime not in self._DOCUMENT_TYPES:
                        raise FetchError(url, f"not a document ({mime or 'no content type'})")
                    try:
                        html = await resp.text(errors="replace")
                    except (LookupError, UnicodeDecodeError) as exc:
                        raise FetchError(url, f"undecodable body: {exc}") from exc
                break
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                backoff = min(60.0, self.config.retry_backoff * (2**attempts + random.random()))
                logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
                await asyncio.sleep(backoff)
        try:
            return parse_document(html, url)
        except (ParserRejectedMarkup, ValueError, AssertionError) as exc:
            raise FetchError(url, f"unparsable body: {exc}") from exc

    async def fetch_robots_body(self, root_url: str) -> str:
        """Return the robots.txt body for *root_url*, or ``""`` on any failure."""
        url = robots_url(root_url)
        try:
            async with self.session.get(format_url(url)) as resp:
                if resp.status != 200:
                    logger.debug("robots.txt %s -> HTTP %s", url, resp.status)
                    return ""
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError, LookupError, UnicodeDecodeError) as exc:
            logger.warning("Error loading robots.txt %s: %s", url, exc)
            return ""


__all__ = ("FetchError", "Fetcher", "format_url")
