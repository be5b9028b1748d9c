"""Configuration helpers for the kamerwatch importer."""
from __future__ import annotations

from .settings import (
    AppConfig,
    CacheConfig,
    CrawlConfig,
    SourceConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "CacheConfig",
    "CrawlConfig",
    "SourceConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
