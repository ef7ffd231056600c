"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .logging import configure_logging
from .registry import DEFAULT_ORCID_BASE_URL, RegistryConfig, get_registry_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_ORCID_BASE_URL",
    "ConfigurationError",
    "DatabaseConfig",
    "RegistryConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_registry_config",
    "get_storage_config",
]
