import json
from pathlib import Path
from typing import Dict, Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.const import (
    DEFAULT_APP_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_STORAGE_TYPE,
    LIBRARY_LOG_LEVELS,
)
from src.template_cache.const import (
    DEFAULT_CACHE_MAX_AGE_SECONDS,
    DEFAULT_CACHE_MAX_SIZE,
    DEFAULT_CACHE_VERSION,
    TEMPLATE_CACHE_PREFIX,
    TEMPLATE_USAGE_PREFIX,
)


class Config(BaseSettings):
    """Global configuration settings for the Notas AI template cache service."""

    app_name: str = DEFAULT_APP_NAME
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    cache_max_size: int = DEFAULT_CACHE_MAX_SIZE
    cache_max_age_seconds: int = DEFAULT_CACHE_MAX_AGE_SECONDS
    cache_version: int = DEFAULT_CACHE_VERSION
    cache_storage_key: str = TEMPLATE_CACHE_PREFIX
    usage_stats_key: str = TEMPLATE_USAGE_PREFIX

    storage_type: str = DEFAULT_STORAGE_TYPE
    storage_path: Optional[Path] = None
    database_path: Path = Path("data/templates.db")

    model_config = SettingsConfigDict(
        env_prefix='NOTASAI_',
    )

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path("config.json")
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
                for path_key in ("storage_path", "database_path"):
                    if config.get(path_key):
                        config[path_key] = Path(config[path_key])
                return config
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
