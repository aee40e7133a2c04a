# site_mapper/crawler/classifier.py
"""
Link classification relative to the crawl root.

Hrefs are expected to be already resolved to absolute URLs by the HTML
parser; classification only looks at string prefixes.
"""
from __future__ import annotations

from typing import Optional, Tuple

from site_mapper.crawler.models import Link, LinkCategory


def _anchor_prefixes(root_url: str) -> Tuple[str, ...]:
    return (
        "#",
        "/#",
        f"{root_url}#",
        f"{root_url}/#",
        f"{root_url}?",
        f"{root_url}/?",
    )


def is_page_link(href: str, root_url: str) -> bool:
    """True if *href* is an in-page anchor or a query variant of the root."""
    return href.startswith(_anchor_prefixes(root_url))


def is_internal_link(href: str, root_url: str) -> bool:
    """True if *href* is a page of the crawled site (root-relative paths included)."""
    return (href.startswith(root_url) or href.startswith("/")) and not is_page_link(href, root_url)


def classify(href: str, root_url: str) -> LinkCategory:
    if is_page_link(href, root_url):
        return LinkCategory.IN_PAGE_ANCHOR
    if is_internal_link(href, root_url):
        return LinkCategory.INTERNAL_PAGE
    return LinkCategory.EXTERNAL_SITE


def make_link(href: str, root_url: str, label: Optional[str] = None) -> Link:
    """Build a classified :class:`Link` for *href*."""
    return Link(target=href, category=classify(href, root_url), label=label or None)


__all__ = ("classify", "is_internal_link", "is_page_link", "make_link")
