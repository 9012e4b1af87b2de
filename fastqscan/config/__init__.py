"""
FastQScan v0.1.0

Configuration management for FastQScan.

Author: FastQScan Development Team
License: MIT
"""

from .schema import (
    ConfigValidationError,
    DEFAULT_CONFIG,
    load_config,
    save_config_template,
    validate_config,
    log_level,
)

__all__ = [
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config_template",
    "validate_config",
    "log_level",
]
