"""Configuration management using Pydantic BaseSettings with JSON file support."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def flatten_json_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested JSON sections into a single level of settings.

    {"source": {"csv_url": "..."}, "server": {"server_port": 8080}}
    becomes {"csv_url": "...", "server_port": 8080}.

    Keys starting with "_" (like "_comment") are skipped.
    """
    flat: dict[str, Any] = {}
    for key, value in config.items():
        if key.startswith("_"):
            continue
        if isinstance(value, dict):
            flat.update(flatten_json_config(value))
        else:
            flat[key] = value
    return flat


def load_json_config(config_file: Optional[str] = None) -> dict[str, Any]:
    """Load settings from a JSON file.

    Args:
        config_file: Path to the JSON file. Falls back to the CONFIG_FILE env var.

    Returns:
        Flattened settings, or an empty dict if no usable file was found.
    """
    file_path = config_file or os.getenv("CONFIG_FILE")
    if not file_path:
        return {}

    path = Path(file_path)
    if not path.exists():
        logger.warning(f"Config file not found: {file_path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file {file_path}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Error reading config file {file_path}: {e}")
        return {}

    if not isinstance(config, dict):
        logger.error(f"Config file {file_path} must contain a JSON object")
        return {}

    logger.info(f"Loaded configuration from: {file_path}")
    return flatten_json_config(config)


class Settings(BaseSettings):
    """Application configuration with JSON file and environment variable support.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. JSON config file (specified via CONFIG_FILE env var)
    3. Default values
    """

    # Catalog source
    csv_url: str = ""
    source_timeout_seconds: float = 10.0

    # Refresh loop
    catalog_refresh_minutes: int = 10

    # Search
    search_shard_count: int = 10
    # Wall clock used as the query instant; only its time of day matters
    venue_timezone: str = "UTC"

    # Server Configuration
    server_port: int = 8080
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def __init__(self, **kwargs):
        """Initialize settings from JSON file and environment variables.

        Priority: env vars > JSON config > defaults
        """
        json_config = load_json_config()

        # Init kwargs outrank env vars in BaseSettings; drop JSON keys that
        # have an env override.
        json_config = {
            key: value
            for key, value in json_config.items()
            if os.getenv(key.upper()) is None
        }

        super().__init__(**{**json_config, **kwargs})

