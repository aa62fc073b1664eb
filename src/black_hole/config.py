"""Server configuration.

Settings are read from a TOML file (``config.toml`` by default) and
validated with pydantic-settings. Environment variables prefixed with
``BLACK_HOLE_`` override file values, using ``__`` between section and key:

    BLACK_HOLE_PROXY__ENABLED=true
    BLACK_HOLE_SERVER__PORT=9000

Example config.toml:

    [proxy]
    enabled = true
    static_dir = "./static"
    cache_dir = "./cache"

    [log]
    enabled = true
    level = "info"

    [server]
    host = "localhost"
    port = 8080
"""

import logging
import tomllib
from pathlib import Path
from typing import Literal, Optional, Tuple, Type

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")

LogLevel = Literal["trace", "debug", "info", "warn", "warning", "error"]


class ProxySettings(BaseModel):
    """Static root, package cache and origin proxying."""

    enabled: bool = False
    static_dir: Path = Path("./static")
    cache_dir: Path = Path("./cache")
    fetch_timeout: float = Field(default=30.0, gt=0)


class LogSettings(BaseModel):
    """Logging output."""

    enabled: bool = True
    level: LogLevel = "info"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ServerSettings(BaseModel):
    """HTTP listener."""

    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    ui_dir: Path = Path("./ui")


class Settings(BaseSettings):
    """Black Hole server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BLACK_HOLE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    proxy: ProxySettings = Field(default_factory=ProxySettings)
    log: LogSettings = Field(default_factory=LogSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Environment takes precedence over values loaded from the TOML file
        return env_settings, init_settings


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to config file (defaults to ./config.toml)

    Returns:
        Settings instance; defaults are used when the file does not exist

    Raises:
        ConfigError: If the file cannot be parsed or fails validation
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    path = Path(path)

    data: dict = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e
    else:
        logger.warning(f"Config file not found: {path}, using defaults")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
