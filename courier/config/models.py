from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from courier.common.yaml_utils import safe_load_with_env

from .paths import get_app_dir


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default='INFO', description='Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')
    console_enabled: bool = Field(default=True, description='Enable console logging')
    file_enabled: bool = Field(default=False, description='Enable file logging')
    log_file_dir: Optional[str] = Field(default=None, description='Log directory (defaults to ~/.courier/logs)')
    max_file_size: str = Field(default='10MB', description='Maximum log file size before rotation')
    backup_count: int = Field(default=4, description='Number of backup files to keep')


class TransportConfig(BaseModel):
    """Settings for the shared httpx clients."""

    timeout: float = Field(default=30.0, gt=0, description='Overall request timeout in seconds')
    connect_timeout: Optional[float] = Field(default=None, gt=0, description='Connect timeout, defaults to timeout')
    follow_redirects: bool = Field(default=True)
    verify_ssl: bool = Field(default=True)
    http2: bool = Field(default=False)
    max_connections: int = Field(default=100, ge=1)
    max_keepalive_connections: int = Field(default=20, ge=0)
    user_agent: Optional[str] = Field(default='courier-http')
    default_headers: Dict[str, str] = Field(default_factory=dict)


class ConfigModel(BaseModel):
    """Configuration model with validation."""

    model_config = ConfigDict(extra='allow')

    version: str = Field(default='1', description='Config version')
    transport: TransportConfig = Field(default_factory=TransportConfig)
    redact_headers: List[str] = Field(default_factory=lambda: ['authorization', 'x-api-key', 'cookie', 'set-cookie'])
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description='Logging configuration')

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'ConfigModel':
        """Load configuration from YAML.

        An explicit config_path is the only file read when given. Otherwise
        ~/.courier/config.yaml and then ./config.yaml are merged, later files
        overriding earlier ones. Missing files fall back to defaults.
        """
        if config_path:
            config_paths = [config_path]
        else:
            config_paths = [str(get_app_dir() / 'config.yaml'), 'config.yaml']

        data = {}
        for path in config_paths:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    file_data = safe_load_with_env(f) or {}
            except FileNotFoundError:
                continue
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in config file {path}: {e}')
            if not isinstance(file_data, dict):
                raise ValueError(f'Config file {path} must contain a mapping, got {type(file_data).__name__}')
            data.update(file_data)

        return cls(**data)
