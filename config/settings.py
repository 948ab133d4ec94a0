"""
Centralized configuration management for the query gateway.

Handles environment variables, database config, and application settings
with type safety and validation.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DatabaseConfig:
    """Where the gateway sends compiled queries."""

    url: str = "sqlite:///gateway.db"
    pool_size: int = 5
    max_overflow: int = 10

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def safe_url(self) -> str:
        """URL with any password masked, safe for log lines."""
        scheme, sep, rest = self.url.partition("://")
        credentials, at, location = rest.rpartition("@")
        if not at or ":" not in credentials:
            return self.url
        user = credentials.split(":", 1)[0]
        return f"{scheme}{sep}{user}:***@{location}"

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Load database config from environment variables."""
        return cls(
            url=os.getenv("DB_URL", "sqlite:///gateway.db"),
            pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
        )


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class GatewayConfig:
    """Application-level configuration."""

    title: str = "SQL Query Gateway"
    version: str = "0.1.0"

    # HTTP
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Observability
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Load app config from environment variables."""
        return cls(
            title=os.getenv("APP_TITLE", "SQL Query Gateway"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


class Config:
    """Global configuration manager."""

    _instance: Optional["Config"] = None

    def __init__(self):
        self.db = DatabaseConfig.from_env()
        self.app = GatewayConfig.from_env()

    @classmethod
    def load(cls) -> "Config":
        """Singleton pattern - load or return existing config."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
