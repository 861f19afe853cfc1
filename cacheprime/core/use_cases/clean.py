"""
Clean use case — remove generated blocks and the manifest.

Only files that match the block naming scheme (plus the manifest) are
touched. Anything else in the directory, and the directory itself,
stays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cacheprime.core.persistence.manifest_file import manifest_path
from cacheprime.core.services.blocks import list_block_files

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    """Result of cleaning a data directory."""

    removed: list[str] = field(default_factory=list)
    bytes_freed: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"removed": self.removed, "bytes_freed": self.bytes_freed}


def clean_directory(target_dir: Path) -> CleanResult:
    """Delete every block file and the manifest in target_dir."""
    result = CleanResult()

    if not target_dir.is_dir():
        result.error = f"Data directory not found: {target_dir}"
        return result

    targets = list_block_files(target_dir)
    manifest = manifest_path(target_dir)
    if manifest.is_file():
        targets.append(manifest)

    for path in targets:
        try:
            size = path.stat().st_size
            path.unlink()
        except OSError as e:
            logger.error("Cannot remove %s: %s", path, e)
            result.error = f"Cannot remove {path.name}: {e}"
            return result
        result.removed.append(path.name)
        result.bytes_freed += size

    logger.info("Removed %d file(s) from %s", len(result.removed), target_dir)
    return result
