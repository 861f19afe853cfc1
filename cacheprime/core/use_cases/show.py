"""
Show use case — summarize what a data directory currently holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cacheprime.core.models.generation import Manifest
from cacheprime.core.persistence.manifest_file import load_manifest
from cacheprime.core.services.blocks import list_block_files


@dataclass
class ShowResult:
    """Snapshot of a data directory."""

    target_dir: Path | None = None
    manifest: Manifest | None = None
    block_files: int = 0
    bytes_on_disk: int = 0
    error: str | None = None

    @property
    def complete(self) -> bool:
        return self.manifest is not None and self.block_files >= self.manifest.blocks

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "target_dir": str(self.target_dir),
            "manifest": self.manifest.model_dump(mode="json") if self.manifest else None,
            "block_files": self.block_files,
            "bytes_on_disk": self.bytes_on_disk,
            "complete": self.complete,
        }


def show_directory(target_dir: Path) -> ShowResult:
    """Read the manifest and count block files in target_dir."""
    result = ShowResult(target_dir=target_dir)

    if not target_dir.is_dir():
        result.error = f"Data directory not found: {target_dir}"
        return result

    result.manifest = load_manifest(target_dir)

    files = list_block_files(target_dir)
    result.block_files = len(files)
    result.bytes_on_disk = sum(p.stat().st_size for p in files)
    return result
