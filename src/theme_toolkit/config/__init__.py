"""Configuration module for Theme Toolkit."""

from .schema import ImportConfig, DEFAULT_CONFIG
from .loader import load_config, save_config, parse_config

__all__ = [
    'ImportConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'save_config',
    'parse_config',
]
