"""site_mapper.crawler: traversal, link classification, robots filter and pacing."""
from site_mapper.crawler.classifier import classify
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.models import Link, LinkCategory, PageRecord, VisitedSet

__all__ = ["SiteCrawler", "classify", "Link", "LinkCategory", "PageRecord", "VisitedSet"]
