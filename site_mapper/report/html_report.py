# File: site_mapper/report/html_report.py
"""site_mapper.report.html_report: HTML sitemap rendering with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_mapper.crawler.models import PageRecord

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "sitemap.html.j2"


def render_html(
    records: Sequence[PageRecord],
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Render the crawl result through a Jinja2 template and save it.

    Args:
        records: page records of the crawl.
        template_dir: directory holding ``sitemap.html.j2``; *None* selects
            the template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "root_url": records[0].url if records else "",
        "pages": [record.to_dict("object") for record in records],
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
