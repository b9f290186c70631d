"""
Configuration loading for the Offboarding Engine.

Configuration is a plain dictionary of defaults, optionally overridden by
a YAML or JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "date_format": "%d/%m/%Y",
    "currency": "SAR",
    "default_financial_lookback_years": 1,
}


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to a .yaml, .yml or .json file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed
    """
    config = dict(DEFAULT_CONFIG)
    if config_path is None:
        return config

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                file_config = yaml.safe_load(f) or {}
            else:
                file_config = json.load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load configuration from {path}: {e}") from e

    if not isinstance(file_config, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")

    config.update(file_config)
    logger.info(f"Loaded configuration from {path}")
    return config


def configure_logging(level: str = "INFO"):
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
