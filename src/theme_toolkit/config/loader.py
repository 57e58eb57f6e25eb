"""
Configuration Loader for Theme Toolkit

Loads import configuration from YAML or JSON files.
"""

import json
from pathlib import Path
from typing import Union

import yaml

from .schema import ImportConfig


def load_config(config_path: Union[str, Path]) -> ImportConfig:
    """Load import configuration from YAML or JSON file.

    Args:
        config_path: Path to configuration file (.yaml, .yml, or .json)

    Returns:
        ImportConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is unsupported or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    return parse_config(data or {})


def parse_config(data: dict) -> ImportConfig:
    """Parse configuration data into ImportConfig model.

    Accepts sizes either as raw byte counts or as ``max_archive_mb`` /
    ``max_entry_mb`` shorthands.

    Args:
        data: Raw configuration dictionary

    Returns:
        ImportConfig instance
    """
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    data = dict(data)

    # Megabyte shorthands
    for short_key, full_key in (('max_archive_mb', 'max_archive_bytes'),
                                ('max_entry_mb', 'max_entry_bytes')):
        if short_key in data:
            megabytes = data.pop(short_key)
            if full_key not in data:
                data[full_key] = int(float(megabytes) * 1024 * 1024)

    return ImportConfig(**data)


def save_config(config: ImportConfig, output_path: Union[str, Path]) -> None:
    """Save import configuration to YAML or JSON file.

    Args:
        config: ImportConfig instance to save
        output_path: Path for output file
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    data = config.model_dump(exclude_none=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        elif suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")
