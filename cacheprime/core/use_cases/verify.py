"""
Verify use case — check a data directory against its expected content.

The layout (block count, size, algorithm) comes from the manifest when
one exists. Otherwise it is resolved the same way ``generate`` resolves
it: explicit overrides, then cacheprime.yml, then defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cacheprime.core.config.loader import ConfigError
from cacheprime.core.persistence.manifest_file import load_manifest
from cacheprime.core.services.blocks import block_filename, block_matches, write_block
from cacheprime.core.services.generator import GenerationError, build_request
from cacheprime.core.use_cases.generate import resolve_config

logger = logging.getLogger(__name__)


@dataclass
class VerifyResult:
    """Result of verifying a data directory."""

    target_dir: Path | None = None
    blocks: int = 0
    block_size: int = 0
    algorithm: str = ""
    from_manifest: bool = False
    ok: int = 0
    missing: list[int] = field(default_factory=list)
    corrupt: list[int] = field(default_factory=list)
    repaired: list[int] = field(default_factory=list)
    error: str | None = None

    @property
    def valid(self) -> bool:
        return self.error is None and not self.missing and not self.corrupt

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "valid": False}
        return {
            "valid": self.valid,
            "target_dir": str(self.target_dir),
            "blocks": self.blocks,
            "block_size": self.block_size,
            "algorithm": self.algorithm,
            "from_manifest": self.from_manifest,
            "ok": self.ok,
            "missing": self.missing,
            "corrupt": self.corrupt,
            "repaired": self.repaired,
        }


def verify_directory(
    target_dir: Path,
    repair: bool = False,
    config_path: Path | None = None,
    total_size: int | None = None,
    block_size: int | None = None,
    algorithm: str | None = None,
) -> VerifyResult:
    """Classify every expected block as ok, missing, or corrupt.

    Args:
        target_dir: Data directory to check.
        repair: Rewrite missing and corrupt blocks.
        config_path: Optional explicit path to cacheprime.yml.
        total_size: Layout override, used only without a manifest.
        block_size: Layout override, used only without a manifest.
        algorithm: Layout override, used only without a manifest.

    Returns:
        VerifyResult. Repaired blocks are listed in ``repaired`` and no
        longer counted as missing/corrupt.
    """
    result = VerifyResult(target_dir=target_dir)

    if not target_dir.is_dir():
        result.error = f"Data directory not found: {target_dir}"
        return result

    manifest = load_manifest(target_dir)
    try:
        if manifest is not None:
            request = build_request(
                target_dir, manifest.total_size, manifest.block_size, manifest.algorithm
            )
            result.from_manifest = True
        else:
            config = resolve_config(config_path, total_size, block_size, algorithm)
            request = build_request(
                target_dir, config.total_size, config.block_size, config.algorithm
            )
    except (ConfigError, GenerationError) as e:
        result.error = str(e)
        return result

    result.blocks = request.block_count
    result.block_size = request.block_size
    result.algorithm = request.algorithm

    for index in range(request.block_count):
        path = target_dir / block_filename(index)

        if not path.exists():
            bucket = result.missing
        elif not block_matches(path, index, request.block_size, request.algorithm):
            bucket = result.corrupt
        else:
            result.ok += 1
            continue

        if not repair:
            bucket.append(index)
            continue

        try:
            write_block(path, index, request.block_size, request.algorithm)
        except OSError as e:
            logger.error("Cannot repair block %d in %s: %s", index, target_dir, e)
            result.error = f"Filesystem error while repairing block {index}: {e}"
            bucket.append(index)
            return result
        logger.info("Repaired block %d in %s", index, target_dir)
        result.repaired.append(index)

    return result
