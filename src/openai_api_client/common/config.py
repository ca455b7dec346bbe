"""Client configuration and YAML loading.

Example ``client.yaml``::

    base_url: https://api.openai.com/v1
    blocking_transport: true
    timeout: 120.0
    organization: org-123

The credential is deliberately not part of the configuration surface.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from openai_api_client.common.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 120.0


def normalize_base_url(url: str) -> str:
    """Validate an absolute http(s) URL and strip the trailing slash."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid base URL: {url!r}", cause=e) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(
            f"Base URL must be an absolute http(s) URL, got {url!r}"
        )
    return str(parsed).rstrip("/")


class ClientConfig(BaseModel):
    """Recognized client options."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = DEFAULT_BASE_URL
    # True selects the blocking transport, False the asyncio one.
    blocking_transport: bool = True
    # Handed to httpx; the client core never enforces its own deadline.
    timeout: float | None = Field(default=DEFAULT_TIMEOUT, gt=0)
    organization: str | None = None

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        try:
            return normalize_base_url(v)
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    @field_validator("organization")
    @classmethod
    def _blank_org_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


def load_cfg(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | Path) -> ClientConfig:
    """
    Load a ``ClientConfig`` from a YAML file.

    Args:
        path: YAML config path.

    Raises:
        ConfigurationError: File missing, not valid YAML, or fails validation.
    """
    try:
        raw = load_cfg(path)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file {path} is not valid YAML", cause=e) from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    try:
        return ClientConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            details={"errors": e.errors(include_url=False, include_input=False)},
            cause=e,
        ) from e
