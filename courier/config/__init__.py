from functools import lru_cache
from typing import Optional

from courier.config.models import ConfigModel, LoggingConfig, TransportConfig


class ConfigurationService:
    """Configuration service that manages config loading without global state."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self._config = self._load_config()

    def _load_config(self) -> ConfigModel:
        return ConfigModel.load(self.config_path)

    def get_config(self) -> ConfigModel:
        return self._config

    def reload_config(self) -> ConfigModel:
        """Reload configuration from file."""
        self._config = self._load_config()
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigurationService:
    """Process wide configuration service, created on first use."""
    return ConfigurationService()


def get_config() -> ConfigModel:
    return get_config_service().get_config()


__all__ = ['ConfigModel', 'ConfigurationService', 'LoggingConfig', 'TransportConfig', 'get_config', 'get_config_service']
