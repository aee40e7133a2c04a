# File: site_mapper/engine.py
"""site_mapper.engine: entry points that run a crawl and serialize its result."""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from site_mapper.config import MapperConfig
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.models import PageRecord
from site_mapper.logger import logger
from site_mapper.report.json_report import serialize_records

__all__ = ["URL_NOT_PROVIDED", "COULD_NOT_PROCESS", "start_crawl", "get_site_map"]

URL_NOT_PROVIDED = "URL NOT PROVIDED"
COULD_NOT_PROCESS = "COULD NOT PROCESS REQUEST"


async def start_crawl(cfg: MapperConfig) -> List[PageRecord]:
    """
    Run a crawl session for *cfg* and return its page records.

    Parameters
    ----------
    cfg : MapperConfig
        Crawl configuration.

    Returns
    -------
    List[PageRecord]
        Records in crawl order, one per successfully fetched URL.
    """
    async with SiteCrawler(cfg) as crawler:
        return await crawler.crawl()


def get_site_map(root_url: Optional[str], rate_limit: Any = None, **options: Any) -> str:
    """Crawl *root_url* and return the sitemap as a JSON string.

    Returns ``URL NOT PROVIDED`` when *root_url* is empty and
    ``COULD NOT PROCESS REQUEST`` when the result cannot be serialized.
    Extra keyword arguments are passed to :class:`MapperConfig`.
    """
    if not root_url or not root_url.strip():
        logger.error("URL is null.")
        return URL_NOT_PROVIDED

    cfg = MapperConfig(root_url=root_url, rate_limit=rate_limit, **options)
    records = asyncio.run(start_crawl(cfg))
    try:
        return serialize_records(records, cfg.link_format)
    except (TypeError, ValueError) as exc:
        logger.error("Could not serialize sitemap: %s", exc)
        return COULD_NOT_PROCESS
