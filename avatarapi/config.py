"""Avatar API configuration management.

Loads configuration from environment variables with sensible defaults.
A `.env` file in the working directory is honoured if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from avatarapi.canonical.teacher_key import KeyStrategy

# Load .env file if present
load_dotenv()

# Fixed name of the backing document inside the data directory
STORE_FILENAME = "teachers.json"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ServerConfig:
    """HTTP listener and outer-surface settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "public"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    enable_metrics: bool = True


@dataclass
class StoreConfig:
    """Configuration store settings."""

    data_dir: Path = Path("data")
    key_strategy: KeyStrategy = KeyStrategy.DIGEST
    record_updated_at: bool = True

    @property
    def path(self) -> Path:
        """Path to the backing JSON document."""
        return self.data_dir / STORE_FILENAME


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    json_logs: bool = False

    server: ServerConfig = field(default_factory=ServerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - HOST / PORT: listener address (default 0.0.0.0:3000)
        - DATA_DIR: directory holding teachers.json (default "data")
        - TEACHER_KEY_STRATEGY: "digest" (default) or "passthrough"
        - RECORD_UPDATED_AT: stamp updatedAt on every save (default true)
        - STATIC_DIR, CORS_ORIGINS, ENABLE_METRICS
        - LOG_LEVEL, JSON_LOGS

        Raises:
            ValueError: If PORT is not an integer or the key strategy is unknown
        """
        strategy_raw = os.getenv("TEACHER_KEY_STRATEGY", "digest").strip().lower()
        try:
            key_strategy = KeyStrategy(strategy_raw)
        except ValueError:
            raise ValueError(
                f"TEACHER_KEY_STRATEGY must be one of "
                f"{[s.value for s in KeyStrategy]}, got {strategy_raw!r}"
            ) from None

        cors_raw = os.getenv("CORS_ORIGINS", "*")
        cors_origins = [origin.strip() for origin in cors_raw.split(",") if origin.strip()]

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=_env_bool("JSON_LOGS", "false"),
            server=ServerConfig(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                static_dir=os.getenv("STATIC_DIR", "public"),
                cors_origins=cors_origins,
                enable_metrics=_env_bool("ENABLE_METRICS", "true"),
            ),
            store=StoreConfig(
                data_dir=Path(os.getenv("DATA_DIR", "data")),
                key_strategy=key_strategy,
                record_updated_at=_env_bool("RECORD_UPDATED_AT", "true"),
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config
    _config = None
