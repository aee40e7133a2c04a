# === FILE: site_mapper/parser/html_parser.py ===
"""HTML parsing utilities for SiteMapper.

:func:`parse_document` turns fetched markup into a :class:`ParsedDocument`
carrying exactly what the crawler needs:

* title    : document <title> text or ``""`` if absent.
* anchors  : every ``<a href>`` in document order, href resolved to an
  absolute URL against the page URL, plus its visible text.
* resources: every element with a ``src`` attribute (images, scripts,
  frames…), resolved the same way.

No filtering or deduplication happens here; that is the page record's job.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("Anchor", "ParsedDocument", "parse_document")


@dataclass(slots=True)
class Anchor:
    """An ``<a>`` element: absolute href and anchor text."""

    href: str
    label: str = ""


@dataclass(slots=True)
class ParsedDocument:
    """Lightweight representation of an HTML page."""

    url: str
    title: str
    anchors: list[Anchor] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)


def _attr(tag: Tag, name: str) -> str | None:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else None


def _resolve(base_url: str, ref: str) -> str | None:
    """Absolute form of *ref*, or None when it is not a valid URL (e.g. ``http://[::1``)."""
    try:
        return urljoin(base_url, ref)
    except ValueError:
        return None


def parse_document(html: str, base_url: str) -> ParsedDocument:
    """Parse *html* fetched from *base_url*."""
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    anchors: list[Anchor] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = _attr(tag, "href")
        absolute = _resolve(base_url, href) if href is not None else None
        if absolute is None:
            continue
        anchors.append(Anchor(href=absolute, label=tag.get_text(" ", strip=True)))

    resources: list[str] = []
    for tag in soup.find_all(src=True):
        if not isinstance(tag, Tag):
            continue
        src = _attr(tag, "src")
        absolute = _resolve(base_url, src) if src else None
        if absolute:
            resources.append(absolute)

    return ParsedDocument(url=base_url, title=title, anchors=anchors, resources=resources)
