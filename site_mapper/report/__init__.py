# File: site_mapper/report/__init__.py
"""site_mapper.report: sitemap writers (JSON and HTML) used by the CLI and the library API."""

from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json, serialize_records

__all__ = ["render_json", "render_html", "serialize_records"]
