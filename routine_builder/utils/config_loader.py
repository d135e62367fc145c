"""
Configuration loader for the routine builder (catalog, relay, storage).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).parent.parent.parent


class CatalogConfig(BaseModel):
    source: Literal["local", "http"] = "local"
    path: str = "data/products.json"
    url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class RelayConfig(BaseModel):
    worker_url: str = "http://localhost:8787"
    model: str = "gpt-4.1-mini"
    # None leaves timeouts to the transport: a hung request stays pending
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class StorageConfig(BaseModel):
    backend: Literal["memory", "redis"] = "memory"
    url: Optional[str] = None
    key_prefix: str = "routine_builder:"


class AdvisorConfig(BaseModel):
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    relay: RelayConfig = Field(default_factory=RelayConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def resolve_repo_path(path: Union[str, Path], base_dir: Optional[Path] = None) -> Path:
    """Resolve a config-relative path against the repository root."""
    p = Path(path)
    if p.is_absolute():
        return p
    return (base_dir or REPO_ROOT) / p


def load_advisor_config(config_path: Optional[Path] = None) -> AdvisorConfig:
    """
    Load and validate advisor configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/advisor_config.yml

    Returns:
        Validated AdvisorConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = REPO_ROOT / "config" / "advisor_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Advisor config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = AdvisorConfig(**data)
        logger.info("Successfully loaded advisor config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Advisor config validation failed: %s", e)
        raise
