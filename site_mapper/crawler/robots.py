# site_mapper/crawler/robots.py
"""
Disallow filter built from a site's robots.txt.

Only ``Disallow`` values are read, regardless of the user-agent group they
belong to. ``*`` matches one or more arbitrary characters and a trailing
``$`` anchors the pattern to the end of the URL; every other character is
literal. Unanchored patterns match anywhere within the candidate URL.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class DisallowPatterns:
    """Ordered, immutable set of compiled Disallow patterns."""

    values: Tuple[str, ...] = ()
    compiled: Tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_values(cls, values: Iterable[str]) -> DisallowPatterns:
        vals = tuple(values)
        return cls(vals, tuple(compile_pattern(v) for v in vals))

    def extend(self, values: Iterable[str]) -> DisallowPatterns:
        return DisallowPatterns.from_values(self.values + tuple(values))

    def without_blank(self) -> DisallowPatterns:
        """Drop blank values, which would otherwise match every URL."""
        return DisallowPatterns.from_values(v for v in self.values if v)

    def has_blank(self) -> bool:
        return "" in self.values

    def __len__(self) -> int:
        return len(self.compiled)

    def __iter__(self) -> Iterator[re.Pattern[str]]:
        return iter(self.compiled)


def compile_pattern(value: str) -> re.Pattern[str]:
    anchored = value.endswith("$")
    if anchored:
        value = value[:-1]
    regex = ".+".join(re.escape(part) for part in value.split("*"))
    if anchored:
        regex += "$"
    return re.compile(regex)


def build_from_robots_body(body: str) -> DisallowPatterns:
    """Collect the Disallow values of a robots.txt body, in file order."""
    values = []
    for raw in body.splitlines():
        line = raw.split("#", 1)[0].strip()
        key, sep, val = line.partition(":")
        if sep and key.strip().lower() == "disallow":
            values.append(val.strip())
    return DisallowPatterns.from_values(values)


def is_disallowed(url: str, patterns: DisallowPatterns) -> bool:
    return any(p.search(url) for p in patterns)


def robots_url(root_url: str) -> str:
    """robots.txt location for *root_url* (a slash is inserted when missing)."""
    base = root_url if root_url.endswith("/") else root_url + "/"
    return base + "robots.txt"


__all__ = (
    "DisallowPatterns",
    "build_from_robots_body",
    "compile_pattern",
    "is_disallowed",
    "robots_url",
)
