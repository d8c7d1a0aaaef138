# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - StorageConfig (dataclass)
#     backend: str       (default "file", or "mongo")
#     data_dir: str      (default "data/")
#
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "ewaste_hub")
#     collection: str    (default "kv")
#
# - SessionConfig (dataclass)
#     admin_email / admin_password / admin_name / admin_id
#     stable_identity_ids: bool (default True)
#
# - AppConfig (dataclass)
#     storage: StorageConfig
#     mongo: MongoConfig
#     session: SessionConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from ewaste.config import get_config
#   config = get_config()
#   print(config.storage.data_dir)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from ewaste.errors import ConfigError


STORAGE_BACKENDS = ("file", "mongo")


@dataclass
class StorageConfig:
    """Where the key-value state lives."""
    backend: str = "file"
    data_dir: str = "data/"

    def __post_init__(self):
        if self.backend not in STORAGE_BACKENDS:
            raise ConfigError(
                f"Unknown storage backend '{self.backend}' "
                f"(expected one of {', '.join(STORAGE_BACKENDS)})"
            )


@dataclass
class MongoConfig:
    """MongoDB configuration (only used by the mongo backend)."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "ewaste_hub"
    collection: str = "kv"


@dataclass
class SessionConfig:
    """Built-in administrator account and identity id policy."""
    admin_email: str = "admin@example.com"
    admin_password: str = "password"
    admin_name: str = "Admin User"
    admin_id: str = "1"
    stable_identity_ids: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    session: SessionConfig = field(default_factory=SessionConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")


def _env_bool(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got '{raw}'")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    storage_config = StorageConfig(
        backend=os.getenv("STORAGE_BACKEND", "file").strip().lower(),
        data_dir=os.getenv("DATA_DIR", "data/")
    )

    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=_env_int("MONGO_PORT", "27017"),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "ewaste_hub"),
        collection=os.getenv("MONGO_COLLECTION", "kv")
    )

    session_config = SessionConfig(
        admin_email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
        admin_password=os.getenv("ADMIN_PASSWORD", "password"),
        admin_name=os.getenv("ADMIN_NAME", "Admin User"),
        admin_id=os.getenv("ADMIN_ID", "1"),
        stable_identity_ids=_env_bool("STABLE_IDENTITY_IDS", "true")
    )

    _config_instance = AppConfig(
        storage=storage_config,
        mongo=mongo_config,
        session=session_config
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
