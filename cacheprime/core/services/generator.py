"""
Deterministic bulk file generator.

Writes ``total_size / block_size`` block files into a data directory,
skipping any block whose file already exists, then records the run in
cache_metadata.json. Execution is strictly sequential. Filesystem
errors are fatal and propagate to the caller untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from cacheprime.core.models.generation import (
    DEFAULT_ALGORITHM,
    BlockOutcome,
    GenerationRequest,
    Manifest,
)
from cacheprime.core.persistence.manifest_file import save_manifest
from cacheprime.core.services.blocks import block_filename, write_block

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[BlockOutcome], None]


class GenerationError(Exception):
    """Raised when a generation request is invalid."""


def build_request(
    target_dir: Path | str,
    total_size: int,
    block_size: int,
    algorithm: str = DEFAULT_ALGORITHM,
) -> GenerationRequest:
    """Validate raw parameters into a GenerationRequest.

    Raises:
        GenerationError: If sizes are non-positive, the total is not a
            multiple of the block size, or the algorithm is unusable.
    """
    try:
        return GenerationRequest(
            target_dir=Path(target_dir),
            total_size=total_size,
            block_size=block_size,
            algorithm=algorithm,
        )
    except ValidationError as e:
        raise GenerationError(f"Invalid generation request: {e}") from e


def generate(
    target_dir: Path | str,
    total_size: int,
    block_size: int,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    on_progress: ProgressCallback | None = None,
) -> Manifest:
    """Generate deterministic block files and write the manifest.

    Args:
        target_dir: Data directory, created (with parents) if missing.
        total_size: Total bytes to generate.
        block_size: Bytes per block file. Must divide total_size.
        algorithm: hashlib algorithm seeding the block content.
        on_progress: Called once per block index, in order.

    Returns:
        The manifest that was written.

    Raises:
        GenerationError: If the request is invalid (nothing is written).
        OSError: If the directory cannot be created or a write fails.
    """
    request = build_request(target_dir, total_size, block_size, algorithm)
    data_dir = request.target_dir

    data_dir.mkdir(parents=True, exist_ok=True)

    total = request.block_count
    logger.info(
        "Generating %d block(s) of %d bytes in %s (%s)",
        total,
        request.block_size,
        data_dir,
        request.algorithm,
    )

    generated = 0
    for index in range(total):
        filename = block_filename(index)
        path = data_dir / filename

        if path.exists():
            status = "skipped"
            logger.debug("Block %d exists, skipping: %s", index, path)
        else:
            write_block(path, index, request.block_size, request.algorithm)
            status = "generated"
            generated += 1

        if on_progress is not None:
            on_progress(
                BlockOutcome(
                    index=index,
                    filename=filename,
                    status=status,
                    position=index + 1,
                    total=total,
                )
            )

    manifest = Manifest(
        blocks=total,
        block_size=request.block_size,
        total_size=request.total_size,
        data_dir=str(data_dir),
        algorithm=request.algorithm,
    )
    save_manifest(manifest, data_dir)

    logger.info("Generation complete: %d generated, %d skipped", generated, total - generated)
    return manifest
