"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional, Union

from dotenv import load_dotenv

from utils.logger import get_logger

load_dotenv()

logger = get_logger(__name__)


def _env(name: str, default: str) -> str:
    """Read an environment variable, treating an empty value as unset."""
    return os.getenv(name) or default


def _number_env(name: str, default: Union[int, float], cast: Callable = int):
    """Read a numeric variable, falling back to the default when it is not a number."""
    raw = _env(name, str(default))
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


# ── MySQL ─────────────────────────────────────────────────
@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings shared by the pool and the schema initializer.

    Attributes:
        host: Database server address (DB_HOST).
        user: Auth username (DB_USER).
        password: Auth password (DB_PASSWORD, empty by default).
        database: Target database name (DB_NAME).
        port: Server port (DB_PORT).
        pool_size: Max simultaneously open pool connections (DB_POOL_SIZE).
        pool_timeout: Seconds a queued acquire may wait (DB_POOL_TIMEOUT).
            None means wait forever.
        connect_timeout: TCP connect timeout in seconds (DB_CONNECT_TIMEOUT).
    """
    host: str = "127.0.0.1"
    user: str = "root"
    password: str = ""
    database: str = "smart_street_light"
    port: int = 3306
    pool_size: int = 10
    pool_timeout: Optional[float] = 30.0
    connect_timeout: int = 10

    @classmethod
    def from_env(cls, default_host: str = "127.0.0.1") -> "DatabaseConfig":
        """
        Build a config from environment variables.

        Numeric variables that are not numbers fall back to their
        defaults with a warning.

        Args:
            default_host: Host used when DB_HOST is unset. The pool
                defaults to 127.0.0.1, the initializer to localhost.
        """
        pool_timeout = _number_env("DB_POOL_TIMEOUT", 30.0, float)
        return cls(
            host=_env("DB_HOST", default_host),
            user=_env("DB_USER", "root"),
            password=os.getenv("DB_PASSWORD", ""),
            database=_env("DB_NAME", "smart_street_light"),
            port=_number_env("DB_PORT", 3306),
            pool_size=_number_env("DB_POOL_SIZE", 10),
            pool_timeout=pool_timeout if pool_timeout > 0 else None,
            connect_timeout=_number_env("DB_CONNECT_TIMEOUT", 10),
        )


DB_CONFIG: DatabaseConfig = DatabaseConfig.from_env()
INIT_DB_CONFIG: DatabaseConfig = DatabaseConfig.from_env(default_host="localhost")
