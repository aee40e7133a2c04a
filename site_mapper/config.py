# === FILE: site_mapper/config.py ===
"""
Loading and validation of the SiteMapper crawl configuration.
Pydantic describes the schema; YAML and JSON files are both accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_mapper.logger import logger

DEFAULT_RATE_LIMIT = 1
DEFAULT_USER_AGENT = "W3C-checklink/4.5 [4.160] libwww-perl/5.823"
RESULTS_FILE_NAME = "sitemap.json"


class MapperConfig(BaseModel):
    """Configuration for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_url: str = Field(..., min_length=1, description="Root URL of the crawl.")
    rate_limit: int = Field(DEFAULT_RATE_LIMIT, description="Requests per second.")
    concurrency: int = Field(1, ge=1, description="Worker pool size (1 = depth-first).")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    crawl_deadline: Optional[float] = Field(None, gt=0, description="Overall crawl deadline (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    retry_times: int = Field(2, ge=0, description="Retries on 5xx/429 and connection errors.")
    retry_backoff: float = Field(1.0, ge=0, description="Backoff multiplier between retries.")
    extra_disallow: List[str] = Field(default_factory=list, description="Disallow values added to robots.txt ones.")
    honor_blank_disallow: bool = Field(False, description="Treat a blank Disallow as a full-site exclusion.")
    link_format: Literal["object", "url"] = Field("object", description="Link schema in the JSON output.")
    output: str = Field(RESULTS_FILE_NAME, min_length=1, description="Sitemap file path.")

    @field_validator("root_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("rate_limit", mode="before")
    def _coerce_rate_limit(cls, v: Any) -> int:
        if v is None:
            return DEFAULT_RATE_LIMIT
        try:
            rate = int(float(v))
        except (TypeError, ValueError, OverflowError):
            logger.warning("Invalid rate value %r. Defaulting to %d.", v, DEFAULT_RATE_LIMIT)
            return DEFAULT_RATE_LIMIT
        if rate < 1:
            logger.warning("Rate value must be positive, got %r. Defaulting to %d.", v, DEFAULT_RATE_LIMIT)
            return DEFAULT_RATE_LIMIT
        return rate


_DEFAULT_CFG = Path("configs/site_mapper.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> MapperConfig:
    """
    Read YAML or JSON, apply *overrides* and return a validated MapperConfig.

    Overrides whose value is ``None`` are ignored so that unset CLI options
    do not mask values from the file. With ``path=None`` the default file is
    used when it exists, otherwise the overrides alone must be sufficient.
    A missing explicit path raises FileNotFoundError.
    """
    if path is None:
        data = _read_file(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({key: value for key, value in overrides.items() if value is not None})
    return MapperConfig(**data)


__all__ = [
    "DEFAULT_RATE_LIMIT",
    "DEFAULT_USER_AGENT",
    "RESULTS_FILE_NAME",
    "MapperConfig",
    "load_config",
]
