"""
Generate use case — resolve settings, run the generator, report.

Settings resolve in precedence order:
    explicit argument (CLI flag)  >  cacheprime.yml  >  built-in defaults
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cacheprime.core.config.loader import ConfigError, load_config
from cacheprime.core.models.config import GeneratorConfig
from cacheprime.core.models.generation import BlockOutcome, Manifest
from cacheprime.core.persistence.manifest_file import manifest_path
from cacheprime.core.services.generator import (
    GenerationError,
    ProgressCallback,
    generate,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generation run."""

    manifest: Manifest | None = None
    manifest_path: Path | None = None
    generated: int = 0
    skipped: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "generated": self.generated,
            "skipped": self.skipped,
            "manifest_path": str(self.manifest_path),
            "manifest": self.manifest.model_dump(mode="json") if self.manifest else None,
        }


def resolve_config(
    config_path: Path | None = None,
    total_size: int | None = None,
    block_size: int | None = None,
    algorithm: str | None = None,
) -> GeneratorConfig:
    """Load cacheprime.yml and apply explicit overrides on top.

    Raises:
        ConfigError: If the config file or an override is invalid.
    """
    config = load_config(config_path)

    overrides = {
        key: value
        for key, value in (
            ("total_size", total_size),
            ("block_size", block_size),
            ("algorithm", algorithm),
        )
        if value is not None
    }
    if not overrides:
        return config

    try:
        return GeneratorConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigError(f"Invalid generator settings: {e}") from e


def run_generate(
    target_dir: Path,
    config_path: Path | None = None,
    total_size: int | None = None,
    block_size: int | None = None,
    algorithm: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> GenerateResult:
    """Generate block files into target_dir.

    Args:
        target_dir: Data directory to fill.
        config_path: Optional explicit path to cacheprime.yml.
        total_size: Override for the total size in bytes.
        block_size: Override for the block size in bytes.
        algorithm: Override for the seeding hash algorithm.
        on_progress: Forwarded to the generator, once per block.

    Returns:
        GenerateResult with the manifest and block counts, or an error.
    """
    result = GenerateResult()

    try:
        config = resolve_config(config_path, total_size, block_size, algorithm)
    except ConfigError as e:
        result.error = str(e)
        return result

    def _track(outcome: BlockOutcome) -> None:
        if outcome.status == "generated":
            result.generated += 1
        else:
            result.skipped += 1
        if on_progress is not None:
            on_progress(outcome)

    try:
        result.manifest = generate(
            target_dir,
            config.total_size,
            config.block_size,
            algorithm=config.algorithm,
            on_progress=_track,
        )
    except GenerationError as e:
        result.error = str(e)
        return result
    except OSError as e:
        logger.error("Generation in %s failed: %s", target_dir, e)
        result.error = f"Filesystem error: {e}"
        return result

    result.manifest_path = manifest_path(Path(target_dir))
    return result
