"""Configuration for the tester runtime.

Rules:
- Primary source: `tester_config.json` in the working directory (optional).
- Overrides: environment variables prefixed with `TESTER_`.
- Validation: Pydantic models enforce value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


ROOT_CONFIG = Path("tester_config.json")
logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class TesterConfig(BaseModel):
    log_level: str = Field(default="INFO")
    base_url: str = Field(default="http://testserver")
    raise_server_exceptions: bool = Field(default=True)
    max_diagnostic_body: int = Field(default=2048, gt=0)
    report_requests: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        level = str(v).strip().upper()
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return level

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring non-object JSON config %s", path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _flag(text: Optional[str], default: bool) -> bool:
    if text is None:
        return default
    return str(text).strip().lower() in _TRUE


def load_config(path: Path = ROOT_CONFIG) -> TesterConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) tester_config.json
    3) Model defaults
    """
    base = _read_json_file(path)
    defaults = TesterConfig.model_fields

    log_level = _env("TESTER_LOG_LEVEL") or base.get("log_level") or defaults["log_level"].default
    base_url = _env("TESTER_BASE_URL") or base.get("base_url") or defaults["base_url"].default
    raise_exc = _flag(
        _env("TESTER_RAISE_SERVER_EXCEPTIONS"),
        bool(base.get("raise_server_exceptions", defaults["raise_server_exceptions"].default)),
    )
    report = _flag(
        _env("TESTER_REPORT_REQUESTS"),
        bool(base.get("report_requests", defaults["report_requests"].default)),
    )
    max_body_text = _env("TESTER_MAX_DIAGNOSTIC_BODY") or base.get("max_diagnostic_body") or defaults["max_diagnostic_body"].default

    try:
        return TesterConfig(
            log_level=log_level,
            base_url=base_url,
            raise_server_exceptions=raise_exc,
            max_diagnostic_body=int(str(max_body_text).strip()),
            report_requests=report,
        )
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid tester configuration: %s", e)
        raise


__all__ = ["TesterConfig", "load_config"]
