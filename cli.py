# cli.py

"""
Standalone entry point: crawl a site and write sitemap.json.

Usage:
    python cli.py ROOT_URL [REQUESTS_PER_SECOND] [--pretty] [--html sitemap.html]

Example:
    python cli.py https://example.com 2 --pretty
"""
from site_mapper.cli import crawl


if __name__ == '__main__':
    crawl()
