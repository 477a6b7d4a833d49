"""Settings for the loader and CLI.

Values come from an optional YAML file, then a few environment overrides.
Everything facility-specific (rinks, excluded teams, category markers) lives
here so another facility only needs a different config file.
"""
from __future__ import annotations

import logging
import pathlib
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from .categories import DEFAULT_CATEGORIES, DEFAULT_RULES
from .constants import (
    EVENT_TYPE_BLOCK,
    EXCLUDED_TEAM_IDS,
    FACILITY_ID,
    ORG_PREFIX,
    REGISTRATION_BASE_URL,
    RINK_NAMES,
    VISIBLE_RINK_IDS,
)
from .models import Category, CategoryRule
from .utils import read_env

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = pathlib.Path("rinkcal.yaml")


class Settings(BaseModel):
    data_dir: str = "public/data"
    base_url: Optional[str] = None
    timeout: float = 15
    retry_attempts: int = 3
    log_level: str = "INFO"

    rinks: Dict[int, str] = Field(default_factory=lambda: dict(RINK_NAMES))
    visible_rink_ids: List[int] = Field(default_factory=lambda: list(VISIBLE_RINK_IDS))
    block_event_type: str = EVENT_TYPE_BLOCK
    excluded_team_ids: List[int] = Field(default_factory=lambda: list(EXCLUDED_TEAM_IDS))
    org_prefix: str = ORG_PREFIX

    registration_base_url: str = REGISTRATION_BASE_URL
    facility_id: int = FACILITY_ID

    categories: List[Category] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES), min_length=1)
    category_rules: List[CategoryRule] = Field(default_factory=lambda: list(DEFAULT_RULES))


def load_config(path: str | pathlib.Path | None = None) -> Settings:
    cfg_path = pathlib.Path(path) if path else DEFAULT_CONFIG_PATH
    raw: dict = {}
    if cfg_path.exists():
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    elif path:
        logger.warning("Config file %s not found, using defaults", cfg_path)

    for key, env in (
        ("data_dir", "RINKCAL_DATA_DIR"),
        ("base_url", "RINKCAL_BASE_URL"),
        ("log_level", "RINKCAL_LOG_LEVEL"),
    ):
        value = read_env(env)
        if value:
            raw[key] = value
    return Settings.model_validate(raw)
