"""
Configuration management for eakwell

Provides environment-based configuration with sensible defaults,
optionally loaded from a YAML file.
"""

import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any, Union

import yaml

from .errors import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / '.eakwell' / 'config.yaml'

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class EakwellConfig:
    """Library-wide defaults"""

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Timing helpers (seconds)
    throttle_interval: float = 1.0
    wait_for_interval: float = 0.1

    # Requests (seconds)
    ajax_timeout: float = 20.0

    def __post_init__(self):
        """Load configuration from environment variables"""

        # Logging
        self.log_level = os.getenv('EAKWELL_LOG_LEVEL', os.getenv('LOG_LEVEL', self.log_level))

        # Timing
        self.throttle_interval = _env_float('EAKWELL_THROTTLE_INTERVAL', self.throttle_interval)
        self.wait_for_interval = _env_float('EAKWELL_WAIT_FOR_INTERVAL', self.wait_for_interval)

        # Requests
        self.ajax_timeout = _env_float('EAKWELL_AJAX_TIMEOUT', self.ajax_timeout)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EakwellConfig':
        """Create configuration from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'EakwellConfig':
        """Load configuration from a YAML file"""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Could not read configuration file {path}",
                context={"path": str(path)},
                cause=e,
                error_code=ErrorCode.CONFIG_FILE_UNREADABLE
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                context={"path": str(path)}
            )

        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data)

    def validate(self) -> bool:
        """Validate configuration"""
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}",
                context={"log_level": self.log_level}
            )

        for name in ('throttle_interval', 'wait_for_interval', 'ajax_timeout'):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive", context={name: value})

        return True


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Environment variable {name} must be a number",
            context={name: raw},
            cause=e
        )


def load_config(path: Optional[Union[str, Path]] = None) -> EakwellConfig:
    """Load configuration from <path>, or from the default file when present"""
    if path is None:
        path = DEFAULT_CONFIG_FILE
        if not path.exists():
            config = EakwellConfig()
            config.validate()
            return config

    config = EakwellConfig.from_yaml(path)
    config.validate()
    return config


# Global configuration instance
_config: Optional[EakwellConfig] = None


def get_config() -> EakwellConfig:
    """Return the process-wide configuration, creating it on first use"""
    global _config
    if _config is None:
        _config = EakwellConfig()
    return _config


def set_config(config: Optional[EakwellConfig]) -> None:
    """Replace the process-wide configuration (None restores the defaults)"""
    global _config
    if config is not None:
        config.validate()
    _config = config


def setup_logging(config: EakwellConfig):
    """Setup logging based on configuration"""

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format=config.log_format
    )

    # Set specific loggers to appropriate levels
    logging.getLogger('aiohttp').setLevel(logging.WARNING)

    # Set eakwell loggers to debug in development
    if config.log_level.upper() == 'DEBUG':
        logging.getLogger('eakwell').setLevel(logging.DEBUG)
