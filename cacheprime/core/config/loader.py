"""
Configuration loader — reads cacheprime.yml into a GeneratorConfig.

The file is optional. Without one, every command runs on the built-in
defaults. When present it is parsed with ``yaml.safe_load`` and
validated against the Pydantic schema.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from cacheprime.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "cacheprime.yml"


class ConfigError(Exception):
    """Raised when the generator configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for cacheprime.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to cacheprime.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to cacheprime.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found — using defaults", CONFIG_FILE)
            return GeneratorConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "generator" key or be flat
    section = data.get("generator", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Expected 'generator' to be a mapping in {path}")

    try:
        config = GeneratorConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info(
        "Loaded config from %s (total=%d, block=%d, algorithm=%s)",
        path,
        config.total_size,
        config.block_size,
        config.algorithm,
    )
    return config
