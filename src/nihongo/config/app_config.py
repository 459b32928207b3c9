"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml
with fallback to built-in defaults. Secrets (admin credentials, session
signing key) are never stored in the file: the config only names the
environment variables that hold them.

Usage:
    from nihongo.config.app_config import load_app_config

    config = load_app_config()
    username = config.auth.get_username()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Overrides database.path when set
DB_PATH_ENV = "NIHONGO_DB_PATH"


@dataclass
class DatabaseConfig:
    """SQLite database settings."""

    path: Path = Path("db/nihongo.db")
    timeout_seconds: float = 5.0


@dataclass
class AuthConfig:
    """Single shared admin credential and session cookie settings."""

    username_env: str = "ADMIN_USERNAME"
    password_env: str = "ADMIN_PASSWORD"
    secret_env: str = "SESSION_SECRET"
    cookie_name: str = "auth"
    session_hours: int = 24

    def get_username(self) -> str | None:
        """Get admin username from environment variable."""
        return os.environ.get(self.username_env)

    def get_password(self) -> str | None:
        """Get admin password from environment variable."""
        return os.environ.get(self.password_env)

    def get_secret(self) -> str:
        """Get the session signing key.

        Falls back to the admin password. An empty result means sessions
        cannot be issued or verified.
        """
        return os.environ.get(self.secret_env) or self.get_password() or ""

    @property
    def max_age_seconds(self) -> int:
        return self.session_hours * 60 * 60


@dataclass
class WebConfig:
    """HTTP layer settings."""

    public_dir: Path = Path("public")
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    web: WebConfig = field(default_factory=WebConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {
            "path": "db/nihongo.db",
            "timeout_seconds": 5.0,
        },
        "auth": {
            "username_env": "ADMIN_USERNAME",
            "password_env": "ADMIN_PASSWORD",
            "secret_env": "SESSION_SECRET",
            "cookie_name": "auth",
            "session_hours": 24,
        },
        "web": {
            "public_dir": "public",
            "cors_origins": ["*"],
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    db_data = {**defaults["database"], **(data.get("database") or {})}
    db_path = os.environ.get(DB_PATH_ENV) or db_data["path"]
    database = DatabaseConfig(
        path=Path(db_path),
        timeout_seconds=float(db_data["timeout_seconds"]),
    )

    auth_data = {**defaults["auth"], **(data.get("auth") or {})}
    auth = AuthConfig(
        username_env=auth_data["username_env"],
        password_env=auth_data["password_env"],
        secret_env=auth_data["secret_env"],
        cookie_name=auth_data["cookie_name"],
        session_hours=int(auth_data["session_hours"]),
    )

    web_data = {**defaults["web"], **(data.get("web") or {})}
    web = WebConfig(
        public_dir=Path(web_data["public_dir"]),
        cors_origins=list(web_data["cors_origins"]),
    )

    return AppConfig(database=database, auth=auth, web=web)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
