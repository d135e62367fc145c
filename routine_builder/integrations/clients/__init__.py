"""
Catalog source clients.

Exactly one place decides which source backs the catalog: build_catalog_source.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from routine_builder.integrations.contracts.catalog import CatalogSource
from routine_builder.utils.config_loader import CatalogConfig, resolve_repo_path

from .local_catalog import LocalCatalogClient
from .real_http.http_catalog import HttpCatalogClient


def build_catalog_source(cfg: CatalogConfig, base_dir: Optional[Path] = None) -> CatalogSource:
    if cfg.source == "http":
        return HttpCatalogClient(url=cfg.url, timeout_seconds=cfg.timeout_seconds)
    return LocalCatalogClient(resolve_repo_path(cfg.path, base_dir))


__all__ = ["LocalCatalogClient", "HttpCatalogClient", "build_catalog_source"]
