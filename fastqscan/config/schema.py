"""
FastQScan v0.1.0

Configuration schema for FastQScan.

Defines all available configuration parameters with defaults and validation.
The malformed-record budget and the set of statistics are fixed and are
deliberately absent here.

Author: FastQScan Development Team
License: MIT
"""

import copy
import logging
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be parsed."""
    pass


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Processing
    # ========================================================================
    'processing': {
        'progress_interval': 100,  # Log progress every N records
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'json_indent': 2,  # None for compact JSON

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Also log to this file when set
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigValidationError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {config_path}: {e}"
            )

        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping at the top level"
            )

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration to a YAML file.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(copy.deepcopy(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    # Unknown top-level sections
    for section in config:
        if section not in DEFAULT_CONFIG:
            errors.append(f"Unknown configuration section: {section}")

    # Processing
    interval = config.get('processing', {}).get('progress_interval')
    if not isinstance(interval, int) or isinstance(interval, bool) or interval < 1:
        errors.append(f"Invalid progress_interval: {interval!r} (must be a positive integer)")

    # Output
    output = config.get('output', {})
    indent = output.get('json_indent')
    if indent is not None and (not isinstance(indent, int) or isinstance(indent, bool) or indent < 0):
        errors.append(f"Invalid json_indent: {indent!r} (must be a non-negative integer or null)")

    log_settings = output.get('logging', {})
    level = log_settings.get('level')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level!r} (choose from {', '.join(VALID_LOG_LEVELS)})")

    log_file = log_settings.get('log_file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append(f"Invalid log_file: {log_file!r} (must be a path string or null)")

    return errors


def log_level(config: Dict[str, Any]) -> int:
    """Resolve the configured logging level to a ``logging`` constant."""
    return getattr(logging, config['output']['logging']['level'].upper())
