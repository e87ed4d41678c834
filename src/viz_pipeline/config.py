"""
Configuration Management

Loads and manages pipeline configuration from YAML files and environment variables.
"""

import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dotenv import load_dotenv

from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path('config') / 'pipeline_config.yaml'


class Config:
    """
    Pipeline configuration manager.

    Loads configuration from:
    1. YAML file (config/pipeline_config.yaml, relative to the working directory)
    2. Environment variables (.env)

    Example:
        >>> config = Config()
        >>> print(config.get('summarizer.sample_size'))
        100
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        # Load .env file if it exists
        env_path = Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        # Default config file
        explicit = config_file is not None
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        # Load YAML config
        self.config: Dict[str, Any] = {}
        if explicit or Path(config_file).exists():
            # an explicitly named file must exist
            self.config = load_yaml_config(config_file)
            logger.info(f"Loaded config from: {config_file}")
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        # Apply environment variable overrides
        self._apply_env_overrides()

    @classmethod
    def defaults(cls) -> "Config":
        """
        Build an in-memory configuration with built-in defaults only.

        Reads no files and no environment variables.
        """
        config = cls.__new__(cls)
        config.config = {}
        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv('TYPE_SAMPLE_SIZE'):
            self.set('summarizer.sample_size', int(os.getenv('TYPE_SAMPLE_SIZE')))

        if os.getenv('TOP_N_CHARTS'):
            self.set('report.top_n', int(os.getenv('TOP_N_CHARTS')))

        if os.getenv('LOG_LEVEL'):
            self.set('logging.level', os.getenv('LOG_LEVEL'))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'recommender.max_bar_categories')
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config.get('report.top_n')
            9
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'summarizer.sample_size')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for a specific stage.

        Args:
            stage: Section name ('summarizer', 'recommender', 'report', 'logging', ...)

        Returns:
            Stage configuration dictionary (empty if absent)
        """
        return self.config.get(stage) or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the full configuration as a dictionary.

        Returns:
            Deep copy of the configuration dictionary
        """
        return copy.deepcopy(self.config)


# Global config instance
_global_config = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Get or create the process-wide configuration instance.

    Args:
        config_file: Path to config file (only used on first call)

    Returns:
        Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config
