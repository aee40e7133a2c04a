# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler: links, page records and the visited set.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Literal, Optional, Set

LinkFormat = Literal["object", "url"]


class LinkCategory(str, Enum):
    """Where a discovered href points to, relative to the crawl root."""

    INTERNAL_PAGE = "internal"
    EXTERNAL_SITE = "external"
    IN_PAGE_ANCHOR = "anchor"


@dataclass(frozen=True, slots=True)
class Link:
    """A classified reference found in a document."""

    target: str
    category: LinkCategory
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "label": self.label, "category": self.category.value}


@dataclass(slots=True)
class PageRecord:
    """Title, classified links and media references of one crawled URL.

    ``add_link`` and ``add_source`` ignore targets that were already added,
    so a page lists every target once regardless of how many anchors or
    elements reference it.
    """

    url: str
    title: str = ""
    internal_links: List[Link] = field(default_factory=list)
    external_links: List[Link] = field(default_factory=list)
    page_links: List[Link] = field(default_factory=list)
    media_sources: List[str] = field(default_factory=list)
    _link_targets: Set[str] = field(default_factory=set, repr=False, compare=False)
    _source_urls: Set[str] = field(default_factory=set, repr=False, compare=False)

    def links(self, category: LinkCategory) -> List[Link]:
        if category is LinkCategory.INTERNAL_PAGE:
            return self.internal_links
        if category is LinkCategory.EXTERNAL_SITE:
            return self.external_links
        return self.page_links

    def add_link(self, link: Link) -> bool:
        """Append *link* to the list of its category; False if the target is known."""
        if link.target in self._link_targets:
            return False
        self._link_targets.add(link.target)
        self.links(link.category).append(link)
        return True

    def add_source(self, src: str) -> bool:
        if src in self._source_urls:
            return False
        self._source_urls.add(src)
        self.media_sources.append(src)
        return True

    def to_dict(self, link_format: LinkFormat = "object") -> Dict[str, Any]:
        def dump(links: List[Link]) -> List[Any]:
            if link_format == "url":
                return [link.target for link in links]
            return [link.to_dict() for link in links]

        return {
            "url": self.url,
            "title": self.title,
            "internalLinks": dump(self.internal_links),
            "externalLinks": dump(self.external_links),
            "pageLinks": dump(self.page_links),
            "mediaSources": list(self.media_sources),
        }


class VisitedSet:
    """URLs already dispatched for crawling.

    A URL and its single-trailing-slash variant share one entry.
    """

    __slots__ = ("_keys",)

    def __init__(self) -> None:
        self._keys: Set[str] = set()

    @staticmethod
    def _key(url: str) -> str:
        return url[:-1] if url.endswith("/") else url

    def add(self, url: str) -> bool:
        """Mark *url* visited. Returns False if it (or its slash variant) already was."""
        key = self._key(url)
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self._key(url) in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)


__all__ = ("LinkCategory", "LinkFormat", "Link", "PageRecord", "VisitedSet")
