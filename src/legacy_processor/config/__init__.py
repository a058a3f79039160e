"""Application configuration helpers."""

from __future__ import annotations

from .env import (
    ConfigurationError,
    MissingConfigurationError,
    require_env_var,
    require_env_vars,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .legacy import LegacyDefaults, get_legacy_defaults
from .logging import configure_logging
from .services import (
    AuthConfig,
    ServiceConfig,
    ServiceEndpoints,
    get_auth_config,
    get_service_config,
    get_service_endpoints,
)
from .storage import DatabaseConfig, get_database_config

__all__ = [
    "AuthConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "LegacyDefaults",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ServiceConfig",
    "ServiceEndpoints",
    "configure_logging",
    "get_auth_config",
    "get_database_config",
    "get_legacy_defaults",
    "get_service_config",
    "get_service_endpoints",
    "require_env_var",
    "require_env_vars",
]
