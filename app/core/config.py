import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

import yaml
from pydantic import field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from app.core.exceptions import ConfigError


DEFAULT_CONFIG_FILE = "config/config.yaml"

# Nested YAML keys -> flat settings fields
YAML_FIELD_MAP = {
    ("server", "port"): "PORT",
    ("server", "host"): "HOST",
    ("database", "path"): "DATABASE_PATH",
    ("cors", "allowedOrigins"): "CORS_ALLOWED_ORIGINS",
    ("cors", "allowedMethods"): "CORS_ALLOWED_METHODS",
    ("cors", "allowedHeaders"): "CORS_ALLOWED_HEADERS",
    ("logging", "level"): "LOG_LEVEL",
}


def load_yaml_config(path: str) -> Dict[str, Any]:
    """
    Read a YAML config file and flatten it into settings field names.

    A missing file yields an empty dict. A file that exists but cannot be
    read or parsed raises ConfigError.
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"error reading config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"error parsing config file {path}: top level must be a mapping")

    values: Dict[str, Any] = {}
    for (section, key), field_name in YAML_FIELD_MAP.items():
        section_values = raw.get(section) or {}
        if key in section_values:
            values[field_name] = section_values[key]
    return values


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by the optional YAML config file."""

    def __init__(self, settings_cls: Type[BaseSettings], config_file: str):
        super().__init__(settings_cls)
        self._values = load_yaml_config(config_file)

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        return dict(self._values)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Values are resolved in this order: constructor kwargs, environment
    variables, .env file, YAML config file, then the defaults below.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = ""

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # =============================================================================
    # SQLITE DATABASE
    # =============================================================================
    DATABASE_PATH: str = "students.db"

    # Database URL - set directly or built from DATABASE_PATH
    DATABASE_URL: Optional[str] = None
    DB_ECHO_SQL: bool = False

    # =============================================================================
    # CORS
    # =============================================================================
    CORS_ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]
    CORS_ALLOWED_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOWED_HEADERS: List[str] = ["Origin", "Content-Type", "Accept"]

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    CONFIG_FILE: str = DEFAULT_CONFIG_FILE

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def build_database_url(cls, v: Optional[str], info) -> str:
        """
        Build DATABASE_URL from DATABASE_PATH if not provided.
        """
        if isinstance(v, str) and v:
            return v
        return f"sqlite:///{info.data.get('DATABASE_PATH')}"

    @field_validator(
        "CORS_ALLOWED_ORIGINS", "CORS_ALLOWED_METHODS", "CORS_ALLOWED_HEADERS",
        mode="before",
    )
    @classmethod
    def parse_cors_list(cls, v):
        """Parse CORS lists from a JSON string or list."""
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # The YAML path itself follows the same precedence: kwargs, env, .env
        init_kwargs = getattr(init_settings, "init_kwargs", {})
        config_file = (
            init_kwargs.get("CONFIG_FILE")
            or os.environ.get("CONFIG_FILE")
            or dotenv_settings().get("CONFIG_FILE")
            or DEFAULT_CONFIG_FILE
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSource(settings_cls, config_file),
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_default=True,
    )


# Create global settings instance
settings = Settings()
