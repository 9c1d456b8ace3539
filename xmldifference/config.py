"""Loading engine configuration from YAML or JSON files."""

from __future__ import annotations

from pathlib import Path

import yaml

from .exceptions import ConfigError
from .models import EngineConfig


def load_config(path: str | Path) -> EngineConfig:
    """
    Load engine configuration from a YAML or JSON file.

    Example file:

        ignore_whitespace: true
        log_level: DEBUG
        max_document_size_mb: 10

    Args:
        path: Path to the configuration file

    Returns:
        EngineConfig built from the file; an empty file gives the defaults
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        content = f.read()

    # JSON is valid YAML, so one parser handles both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}")

    return EngineConfig.from_dict(data)
