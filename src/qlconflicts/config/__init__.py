"""Application configuration helpers."""

from __future__ import annotations

from .env import env_list, optional_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .remote import RemoteApiConfig, get_remote_api_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ReconcileConfig",
    "RemoteApiConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_list",
    "get_database_config",
    "get_reconcile_config",
    "get_remote_api_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
