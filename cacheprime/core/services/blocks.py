"""
Block synthesis — deterministic filler content, one file per index.

A block's content is the raw digest of its decimal index, repeated
until the block is full (the last repetition is cut short when the
block size is not a multiple of the digest length). The same index and
algorithm always produce the same bytes, on any machine.

Content is streamed in bounded chunks so multi-gigabyte blocks never
sit in memory.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterator
from pathlib import Path

from cacheprime.core.models.generation import DEFAULT_ALGORITHM

logger = logging.getLogger(__name__)

BLOCK_PREFIX = "cache_block_"
BLOCK_SUFFIX = ".dat"

# Upper bound on bytes held in memory per write/read call
DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024

_BLOCK_RE = re.compile(rf"^{re.escape(BLOCK_PREFIX)}(\d+){re.escape(BLOCK_SUFFIX)}$")


def block_filename(index: int) -> str:
    """File name for block ``index``."""
    return f"{BLOCK_PREFIX}{index}{BLOCK_SUFFIX}"


def block_index(filename: str) -> int | None:
    """Inverse of block_filename(); None for names that aren't blocks."""
    match = _BLOCK_RE.match(filename)
    return int(match.group(1)) if match else None


def block_digest(index: int, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """Seed digest for block ``index``."""
    return hashlib.new(algorithm, str(index).encode("ascii")).digest()


def iter_block_chunks(
    index: int,
    block_size: int,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[bytes]:
    """Yield the content of block ``index`` in chunks of at most chunk_size bytes.

    Chunk boundaries fall on digest boundaries, so every chunk starts
    at the beginning of a digest repetition.
    """
    digest = block_digest(index, algorithm)
    per_chunk = max(1, chunk_size // len(digest))
    chunk = digest * per_chunk

    remaining = block_size
    while remaining >= len(chunk):
        yield chunk
        remaining -= len(chunk)

    if remaining:
        repeats = -(-remaining // len(digest))  # ceil
        yield (digest * repeats)[:remaining]


def block_content(index: int, block_size: int, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """Full content of block ``index`` in memory. Use for small blocks only."""
    return b"".join(iter_block_chunks(index, block_size, algorithm))


def write_block(
    path: Path,
    index: int,
    block_size: int,
    algorithm: str = DEFAULT_ALGORITHM,
) -> int:
    """Write block ``index`` to ``path``, replacing any existing file.

    Returns:
        Number of bytes written.

    Raises:
        OSError: On any filesystem failure. A partially written file is
            left in place.
    """
    written = 0
    with path.open("wb") as f:
        for chunk in iter_block_chunks(index, block_size, algorithm):
            f.write(chunk)
            written += len(chunk)
    logger.debug("Wrote %s (%d bytes)", path, written)
    return written


def block_matches(
    path: Path,
    index: int,
    block_size: int,
    algorithm: str = DEFAULT_ALGORITHM,
) -> bool:
    """Check an existing block file against its expected content.

    Anything that cannot be read back as a regular file (missing,
    a directory, no permission) does not match.
    """
    try:
        if path.stat().st_size != block_size:
            return False
        with path.open("rb") as f:
            for expected in iter_block_chunks(index, block_size, algorithm):
                if f.read(len(expected)) != expected:
                    return False
    except OSError as e:
        logger.debug("Cannot read block %s: %s", path, e)
        return False
    return True


def list_block_files(target_dir: Path) -> list[Path]:
    """Existing block files in target_dir, ordered by index."""
    if not target_dir.is_dir():
        return []

    found: list[tuple[int, Path]] = []
    for entry in target_dir.iterdir():
        idx = block_index(entry.name)
        if idx is not None and entry.is_file():
            found.append((idx, entry))

    return [p for _, p in sorted(found)]
