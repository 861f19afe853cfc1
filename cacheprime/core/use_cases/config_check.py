"""
Config check use case — validate cacheprime.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cacheprime.core.config.loader import ConfigError, find_config_file, load_config
from cacheprime.core.models.config import GeneratorConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump(mode="json") if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate generator configuration and report issues.

    Args:
        config_path: Optional explicit path to cacheprime.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    if config_path is None:
        result.warnings.append("No cacheprime.yml found — built-in defaults apply.")

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    # Semantic checks
    if config.block_size > config.total_size:
        result.errors.append(
            f"block_size ({config.block_size}) is larger than total_size ({config.total_size})."
        )
    elif config.total_size % config.block_size != 0:
        result.errors.append(
            f"total_size ({config.total_size}) is not divisible by block_size ({config.block_size})."
        )

    if config.algorithm != "md5":
        result.warnings.append(
            f"algorithm '{config.algorithm}' differs from the md5 default; "
            "blocks will not match data generated with defaults."
        )

    result.valid = not result.errors
    return result
