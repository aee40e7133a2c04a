# File: tests/test_engine.py
import json

import pytest

import site_mapper.engine as engine_module
from site_mapper.crawler.models import Link, LinkCategory, PageRecord
from site_mapper.engine import COULD_NOT_PROCESS, URL_NOT_PROVIDED, get_site_map


@pytest.fixture()
def fake_crawl(monkeypatch):
    """Replace the crawl with a canned result and record the config it receives."""
    seen = {}
    page = PageRecord(url="http://x.com", title="Home")
    page.add_link(Link("http://x.com/a", LinkCategory.INTERNAL_PAGE, "A"))

    async def fake_start_crawl(cfg):
        seen["config"] = cfg
        return [page]

    monkeypatch.setattr(engine_module, "start_crawl", fake_start_crawl)
    return seen


@pytest.mark.parametrize("root_url", [None, "", "   "])
def test_missing_url_sentinel(root_url):
    assert get_site_map(root_url) == URL_NOT_PROVIDED


def test_get_site_map_returns_json(fake_crawl):
    result = json.loads(get_site_map("http://x.com/", rate_limit="3"))
    assert result[0]["url"] == "http://x.com"
    assert result[0]["internalLinks"][0]["target"] == "http://x.com/a"
    assert fake_crawl["config"].root_url == "http://x.com"
    assert fake_crawl["config"].rate_limit == 3


def test_get_site_map_url_link_format(fake_crawl):
    result = json.loads(get_site_map("http://x.com", link_format="url"))
    assert result[0]["internalLinks"] == ["http://x.com/a"]


def test_invalid_rate_defaults_to_one(fake_crawl):
    get_site_map("http://x.com", rate_limit="fast")
    assert fake_crawl["config"].rate_limit == 1


def test_serialization_failure_sentinel(fake_crawl, monkeypatch):
    def broken(*args, **kwargs):
        raise TypeError("not serializable")

    monkeypatch.setattr(engine_module, "serialize_records", broken)
    assert get_site_map("http://x.com") == COULD_NOT_PROCESS
