# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import json
import time
from typing import Iterator, List, Optional

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import MapperConfig
from site_mapper.crawler.classifier import make_link
from site_mapper.crawler.fetcher import FetchError, Fetcher
from site_mapper.crawler.models import Link, PageRecord, VisitedSet
from site_mapper.crawler.rate_limiter import RateLimiter
from site_mapper.crawler.robots import DisallowPatterns, build_from_robots_body, is_disallowed
from site_mapper.logger import logger
from site_mapper.parser.html_parser import ParsedDocument

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """Crawl session: owns the visited set, disallow patterns, limiter and results.

    With ``concurrency == 1`` pages are visited depth-first in pre-order, the
    first internal link of a page being exhausted before its second one is
    dispatched. Larger values switch to a worker pool fed by a queue, in
    which case result order follows the worklist rather than the link tree.
    """

    def __init__(self, config: MapperConfig) -> None:
        self.config = config
        self.root_url: str = config.root_url
        self.visited = VisitedSet()
        self.results: List[PageRecord] = []
        self.disallowed_pages: List[str] = []
        self.patterns = DisallowPatterns()
        self.limiter = RateLimiter(config.rate_limit)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> SiteCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        await self._load_robots()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[PageRecord]:
        logger.info("Crawl started: %s", self.root_url)
        start = time.monotonic()
        try:
            if self.config.crawl_deadline:
                await asyncio.wait_for(self._traverse(), timeout=self.config.crawl_deadline)
            else:
                await self._traverse()
        except asyncio.TimeoutError:
            logger.warning(
                "Crawl deadline of %s s reached, returning %d pages collected so far",
                self.config.crawl_deadline,
                len(self.results),
            )
        duration = time.monotonic() - start
        logger.info("Finished: %d pages in %.2f s", len(self.results), duration)
        if self.disallowed_pages:
            logger.info("Blocked by robots.txt: %d", len(self.disallowed_pages))
        return list(self.results)

    async def _traverse(self) -> None:
        if self.config.concurrency > 1:
            await self._crawl_pooled()
        else:
            await self._crawl_depth_first()

    async def _crawl_depth_first(self) -> None:
        # One iterator per open page replaces the recursive call stack.
        root = await self._visit(self.root_url)
        if root is None:
            return
        stack: List[Iterator[Link]] = [iter(root.internal_links)]
        while stack:
            link = next(stack[-1], None)
            if link is None:
                stack.pop()
                continue
            if link.target in self.visited:
                continue
            await self.limiter.acquire()
            page = await self._visit(link.target)
            if page is not None:
                stack.append(iter(page.internal_links))

    async def _crawl_pooled(self) -> None:
        queue: asyncio.Queue[str] = asyncio.Queue()
        self.visited.add(self.root_url)
        queue.put_nowait(self.root_url)
        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    async def _worker(self, queue: asyncio.Queue[str]) -> None:
        while True:
            url = await queue.get()
            try:
                if url != self.root_url:
                    await self.limiter.acquire()
                page = await self._visit(url)
                if page is not None:
                    for link in page.internal_links:
                        # claiming at enqueue time keeps two workers off one URL
                        if self.visited.add(link.target):
                            queue.put_nowait(link.target)
            except Exception:
                # keep the worker alive; only this branch is lost
                logger.exception("Unexpected error while crawling %s", url)
            finally:
                queue.task_done()

    async def _visit(self, url: str) -> Optional[PageRecord]:
        """Crawl a single URL; every failure only ends this branch."""
        logger.info("SCRAPING: %s", url)
        if not url:
            logger.error("URL is empty, skipping branch")
            return None

        self.visited.add(url)

        if is_disallowed(url, self.patterns):
            logger.info("URL %s is disallowed", url)
            self.disallowed_pages.append(url)
            return None

        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        try:
            document = await self.fetcher.fetch_document(url)
        except FetchError as exc:
            logger.warning("Failed %s", exc)
            return None

        page = self._build_page(url, document)
        logger.debug("PAGE: %s", json.dumps(page.to_dict(self.config.link_format), ensure_ascii=False))
        self.results.append(page)
        return page

    def _build_page(self, url: str, document: ParsedDocument) -> PageRecord:
        page = PageRecord(url=url, title=document.title)
        for anchor in document.anchors:
            page.add_link(make_link(anchor.href, self.root_url, anchor.label))
        for src in document.resources:
            page.add_source(src)
        return page

    async def _load_robots(self) -> None:
        if self.fetcher is None:
            return
        body = await self.fetcher.fetch_robots_body(self.root_url)
        patterns = build_from_robots_body(body)
        if patterns.has_blank() and not self.config.honor_blank_disallow:
            logger.info("Ignoring blank Disallow in robots.txt (allows everything)")
            patterns = patterns.without_blank()
        self.patterns = patterns.extend(self.config.extra_disallow)
        logger.debug("Disallow patterns: %s", list(self.patterns.values))
