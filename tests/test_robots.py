# File: tests/test_robots.py
from site_mapper.crawler.robots import (
    DisallowPatterns,
    build_from_robots_body,
    compile_pattern,
    is_disallowed,
    robots_url,
)

ROBOTS = """
User-agent: *
Disallow: /wp-admin/
disallow: /private/*.pdf   # documents
Allow: /public/
Disallow: /exact$
"""


def test_build_collects_disallow_values_in_order():
    patterns = build_from_robots_body(ROBOTS)
    assert patterns.values == ("/wp-admin/", "/private/*.pdf", "/exact$")
    assert len(patterns) == 3


def test_disallowed_prefix_matches_within_url():
    patterns = build_from_robots_body("Disallow: /wp-admin/")
    assert is_disallowed("http://x.com/wp-admin/login", patterns)
    assert not is_disallowed("http://x.com/blog", patterns)


def test_wildcard_needs_at_least_one_character():
    pattern = compile_pattern("/private/*.pdf")
    assert pattern.search("http://x.com/private/report.pdf")
    assert not pattern.search("http://x.com/private/.pdf")
    assert not pattern.search("http://x.com/private/report.html")


def test_end_anchor():
    patterns = build_from_robots_body("Disallow: /exact$")
    assert is_disallowed("http://x.com/exact", patterns)
    assert not is_disallowed("http://x.com/exact/more", patterns)


def test_regex_characters_are_literal():
    patterns = build_from_robots_body("Disallow: /a.b?c=1")
    assert is_disallowed("http://x.com/a.b?c=1", patterns)
    assert not is_disallowed("http://x.com/aXb?c=1", patterns)


def test_blank_disallow_matches_everything():
    patterns = build_from_robots_body("User-agent: *\nDisallow:")
    assert patterns.has_blank()
    assert is_disallowed("http://x.com/anything", patterns)
    assert len(patterns.without_blank()) == 0


def test_empty_body_disallows_nothing():
    patterns = build_from_robots_body("")
    assert len(patterns) == 0
    assert not is_disallowed("http://x.com/", patterns)


def test_extend_appends_values():
    patterns = DisallowPatterns().extend(["/tmp/"])
    assert is_disallowed("http://x.com/tmp/file", patterns)


def test_robots_url_inserts_slash():
    assert robots_url("http://x.com") == "http://x.com/robots.txt"
    assert robots_url("http://x.com/") == "http://x.com/robots.txt"
