"""Configuration management for the Telemetry Hub CLI."""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any, Union
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import logging
from urllib.parse import urlparse

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

import tomli


DEFAULT_CONFIG_FILE = "config.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


class HubConfig(BaseModel):
    """Configuration for the telemetry hub connection."""

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="api-key", description="Hub API key sent as X-Api-Key")
    hub_url: str = Field(..., alias="hub-url", description="Base URL of the telemetry hub")
    request_timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=0, description="Retries on connection failures")

    @field_validator('hub_url')
    @classmethod
    def validate_hub_url(cls, v: str) -> str:
        """Validate that hub_url is an http(s) URL with a host."""
        if not v or not v.strip():
            raise ValueError("hub-url cannot be empty")

        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Invalid hub URL format: {v}")

        return v.rstrip('/')

    @field_validator('api_key')
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("api-key cannot be empty")
        return v.strip()

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate max_retries is reasonable."""
        if v < 0:
            raise ValueError("max_retries cannot be negative")
        if v > 10:
            raise ValueError("max_retries should not exceed 10 (excessive retrying)")
        return v

    @field_validator('request_timeout')
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate request_timeout is reasonable."""
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        if v > 300:  # 5 minutes
            raise ValueError("request_timeout should not exceed 300 seconds")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""

    hub: HubConfig
    log_level: str = Field(default="WARNING", description="Logging level")


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger = logging.getLogger(__name__)

    try:
        suffix = config_path.suffix.lower()
        if suffix in ['.yaml', '.yml']:
            if not YAML_AVAILABLE:
                raise ImportError("PyYAML is required for YAML config files. Install with: pip install pyyaml")
            with open(config_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}

        elif suffix == '.json':
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f) or {}

        elif suffix in ['.toml', '']:
            with open(config_path, 'rb') as f:
                return tomli.load(f)

        else:
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    except Exception as e:
        logger.error(f"Failed to load config file {config_path}: {e}")
        raise


def _hub_section(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """Collect hub settings from a top-level layout or a ``[hub]`` table."""
    hub_data = {
        key: value for key, value in config_data.items()
        if key in ('api-key', 'hub-url', 'request_timeout', 'max_retries')
    }
    nested = config_data.get('hub')
    if isinstance(nested, dict):
        hub_data.update(nested)
    return hub_data


def load_config(config_file: Optional[Union[str, Path]] = DEFAULT_CONFIG_FILE) -> AppConfig:
    """Load configuration from the config file, .env and environment.

    Priority (highest to lowest):
    1. Environment variables (TELEMETRY_API_KEY, TELEMETRY_HUB_URL, ...)
    2. Config file
    3. Default values

    Raises:
        ConfigError: If the file is missing, unreadable or the result is invalid
    """
    logger = logging.getLogger(__name__)

    config_data: Dict[str, Any] = {}
    if config_file:
        try:
            config_data = load_config_file(config_file)
        except Exception as e:
            raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e
        if not isinstance(config_data, dict):
            raise ConfigError(
                f"Failed to load configuration from {config_file}: top-level must be a table/mapping"
            )
        logger.info(f"Loaded configuration from: {config_file}")

    load_dotenv()

    hub_data = _hub_section(config_data)
    env_overrides = {
        "api-key": os.getenv("TELEMETRY_API_KEY"),
        "hub-url": os.getenv("TELEMETRY_HUB_URL"),
        "request_timeout": os.getenv("TELEMETRY_REQUEST_TIMEOUT"),
        "max_retries": os.getenv("TELEMETRY_MAX_RETRIES"),
    }
    hub_data.update({k: v for k, v in env_overrides.items() if v is not None})

    for required in ("api-key", "hub-url"):
        if required not in hub_data:
            raise ConfigError(f"Failed to load configuration from {config_file}: missing {required}")

    try:
        hub_config = HubConfig(
            api_key=hub_data["api-key"],
            hub_url=hub_data["hub-url"],
            request_timeout=int(hub_data.get("request_timeout", 30)),
            max_retries=int(hub_data.get("max_retries", 0)),
        )
        return AppConfig(
            hub=hub_config,
            log_level=os.getenv("LOG_LEVEL") or config_data.get("log_level", "WARNING"),
        )
    except (ValidationError, ValueError, TypeError) as e:
        raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e
