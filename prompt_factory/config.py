"""Configuration utilities for the questionnaire tool.

This module loads configuration with the following rules:
- Primary source: `prompt_factory.json` in the working directory.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("prompt_factory.json")
DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_QUESTIONNAIRE = DATA_DIR / "questionnaire.json"
DEFAULT_SCHEMA = DATA_DIR / "schema.json"
MAX_FIX_PASSES = 3
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: an unreadable override falls through to the next source
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class SourcesConfig(BaseModel):
    questionnaire_path: Path
    schema_path: Path

    @field_validator("questionnaire_path", "schema_path")
    @classmethod
    def path_must_be_non_empty(cls, v: Path) -> Path:
        if not str(v).strip():
            raise ValueError("source paths must be non-empty")
        return v


class RepairConfig(BaseModel):
    max_fix_passes: int = Field(default=MAX_FIX_PASSES, gt=0)


class OutputConfig(BaseModel):
    out_dir: Path = Field(default=Path("out"))


class AppConfig(BaseModel):
    sources: SourcesConfig
    repair: RepairConfig
    output: OutputConfig
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value = str(v).strip().upper()
        if value not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return value


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) prompt_factory.json in the working directory
    4) Bundled defaults
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    questionnaire = (
        _env("PROMPT_FACTORY_QUESTIONNAIRE")
        or _read_config_file("questionnaire.path")
        or _base("sources.questionnaire_path")
        or str(DEFAULT_QUESTIONNAIRE)
    )
    schema = (
        _env("PROMPT_FACTORY_SCHEMA")
        or _read_config_file("schema.path")
        or _base("sources.schema_path")
        or str(DEFAULT_SCHEMA)
    )
    out_dir = _env("PROMPT_FACTORY_OUT_DIR") or _read_config_file("out.dir") or _base("output.out_dir", "out")
    max_passes_text = (
        _env("PROMPT_FACTORY_MAX_FIX_PASSES")
        or _read_config_file("repair.max_fix_passes")
        or _base("repair.max_fix_passes", str(MAX_FIX_PASSES))
    )
    log_level = _env("PROMPT_FACTORY_LOG_LEVEL") or _read_config_file("log.level") or _base("log_level", "WARNING")

    try:
        cfg = AppConfig(
            sources=SourcesConfig(questionnaire_path=Path(questionnaire), schema_path=Path(schema)),
            repair=RepairConfig(max_fix_passes=str(max_passes_text).strip()),
            output=OutputConfig(out_dir=Path(str(out_dir))),
            log_level=str(log_level),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "SourcesConfig",
    "RepairConfig",
    "OutputConfig",
    "MAX_FIX_PASSES",
    "load_config",
]
