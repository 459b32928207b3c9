"""Configuration package for the nihongo backend."""

from nihongo.config.app_config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    WebConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "WebConfig",
    "clear_config_cache",
    "load_app_config",
]
