"""
Manifest persistence — atomic read/write for the run manifest.

The manifest lives next to the blocks as cache_metadata.json. Writes
are atomic (write to temp file, then rename) so a reader never sees a
half-written manifest.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from cacheprime.core.models.generation import Manifest

logger = logging.getLogger(__name__)

MANIFEST_FILE = "cache_metadata.json"


def manifest_path(target_dir: Path) -> Path:
    """Location of the manifest for a data directory."""
    return target_dir / MANIFEST_FILE


def load_manifest(target_dir: Path) -> Manifest | None:
    """Load the manifest of a data directory.

    Returns:
        The Manifest, or None if it is missing or unreadable.
    """
    path = manifest_path(target_dir)
    if not path.is_file():
        logger.debug("No manifest at %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        manifest = Manifest.model_validate(data)
        logger.debug("Loaded manifest from %s (created=%s)", path, manifest.created)
        return manifest
    except json.JSONDecodeError as e:
        logger.warning("Corrupt manifest %s: %s — ignoring", path, e)
    except UnicodeDecodeError as e:
        logger.warning("Manifest %s is not UTF-8: %s — ignoring", path, e)
    except ValidationError as e:
        logger.warning("Invalid manifest %s: %s — ignoring", path, e)
    except OSError as e:
        logger.warning("Cannot read manifest %s: %s — ignoring", path, e)
    return None


def save_manifest(manifest: Manifest, target_dir: Path) -> Path:
    """Save the manifest into target_dir (atomic write).

    Returns:
        Path of the written manifest.
    """
    path = manifest_path(target_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = manifest.model_dump(mode="json")
    content = json.dumps(data, indent=4, ensure_ascii=False) + "\n"

    # Atomic write: temp file in same directory, then rename
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".manifest_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            # mkstemp creates 0600; match what a plain open() would give
            tmp.chmod(_default_file_mode())
            tmp.replace(path)
            logger.debug("Manifest saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save manifest to %s: %s", path, e)
        raise

    return path


def _default_file_mode() -> int:
    """Permission bits a newly created regular file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
