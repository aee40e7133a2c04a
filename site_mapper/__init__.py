# site_mapper/__init__.py
"""
SiteMapper package initializer.
Defines package version and exposes the CLI and the library entry point.
"""
__version__ = "0.1.0"

# Expose CLI entry point
from site_mapper.cli import cli
from site_mapper.engine import get_site_map, start_crawl
