# site_mapper/report/json_report.py

"""
JSON sitemap generation for SiteMapper.

The crawl result is serialized as an array of page objects with the keys
``url``, ``title``, ``internalLinks``, ``externalLinks``, ``pageLinks`` and
``mediaSources``.
"""
import json
from pathlib import Path
from typing import Optional, Sequence

from site_mapper.config import RESULTS_FILE_NAME
from site_mapper.crawler.models import LinkFormat, PageRecord


def serialize_records(
    records: Sequence[PageRecord],
    link_format: LinkFormat = "object",
    indent: Optional[int] = None,
) -> str:
    """Return the crawl result as a JSON string."""
    data = [record.to_dict(link_format) for record in records]
    return json.dumps(data, ensure_ascii=False, indent=indent)


def render_json(
    records: Sequence[PageRecord],
    output_path: Path | str = RESULTS_FILE_NAME,
    link_format: LinkFormat = "object",
    indent: Optional[int] = 2,
) -> Path:
    """
    Write the sitemap to *output_path*, replacing any previous file.

    :param records: page records of the crawl
    :param output_path: path to the JSON file (``sitemap.json`` by default)
    :param link_format: ``"object"`` for link objects, ``"url"`` for plain targets
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    path = render_json(pages)
    print(f"Sitemap saved to: {path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # serialize before opening so a failure never truncates the previous file
    payload = serialize_records(records, link_format, indent)
    with output.open('w', encoding='utf-8') as f:
        f.write(payload)

    return output
