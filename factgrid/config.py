import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from factgrid.cli.util.paths import FactGridPaths
from factgrid.domain.dataset.model.value import WATCHED_RATES, RefreshRate
from factgrid.domain.refresh.gate import DEFAULT_MIN_HOURS


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by FACTGRID_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("FACTGRID_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "FactGrid"
    version: str = "0.1.0"
    description: str = "Ingestion and change tracking for world-data snapshots"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter).

    An empty url means "derive from FactGridPaths"; the actual path is
    computed in Config's model_validator.
    """

    url: str = ""
    echo: bool = False
    auto_migrate: bool = True  # Auto-migrate for SQLite, manual for PostgreSQL


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from FACTGRID_LOG_FILE env var."""
        return os.environ.get("FACTGRID_LOG_FILE")


class HttpConfig(BaseModel):
    """Outbound HTTP client settings shared by all adapters and probes."""

    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    user_agent: str = "factgrid/0.1 (+https://github.com/factgrid/factgrid)"


class TriggersConfig(BaseModel):
    """Scheduled and on-demand triggers."""

    cron_secret: str | None = None  # None = on-demand triggers are open
    refresh_cron: str = "*/30 * * * *"
    watchdog_cron: str = "0 6 * * *"  # Morning UTC catches overnight releases
    enabled: bool = True  # Run the scheduler inside the server process


class RefreshConfig(BaseModel):
    fetch_timeout: float = 60.0
    min_hours: dict[RefreshRate, float] = Field(default_factory=lambda: dict(DEFAULT_MIN_HOURS))


class WatchdogConfig(BaseModel):
    probe_timeout: float = 20.0
    watched_rates: list[RefreshRate] = Field(default_factory=lambda: list(WATCHED_RATES))


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    http: HttpConfig = HttpConfig()
    triggers: TriggersConfig = TriggersConfig()
    refresh: RefreshConfig = RefreshConfig()
    watchdog: WatchdogConfig = WatchdogConfig()
    # slug -> adapter settings, validated against the adapter's config_class
    sources: dict[str, dict[str, Any]] = {}

    model_config = {
        "env_prefix": "FACTGRID_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows FACTGRID_DATABASE__URL override
    }

    @model_validator(mode="after")
    def derive_database_url(self) -> Self:
        """Derive database URL from FactGridPaths if not explicitly set."""
        if not self.database.url:
            paths = FactGridPaths()
            self.database = DatabaseConfig(
                url=f"sqlite+aiosqlite:///{paths.database_file}",
                echo=self.database.echo,
                auto_migrate=self.database.auto_migrate,
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - FACTGRID_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so that all loggers pick
    up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
