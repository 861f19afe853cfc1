"""
Generation models — request, per-block outcome, and the run manifest.

The manifest is serialized to ``cache_metadata.json`` inside the data
directory. Its field names are part of the on-disk format consumed by
benchmark tooling, so they stay snake_case and short.
"""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

DEFAULT_ALGORITHM = "md5"


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


def validate_algorithm(name: str) -> str:
    """Normalize a hashlib algorithm name and reject variable-length digests."""
    name = name.strip().lower()
    if name not in hashlib.algorithms_available:
        raise ValueError(f"Unknown hash algorithm: {name!r}")
    if hashlib.new(name).digest_size <= 0:
        raise ValueError(f"Hash algorithm {name!r} has no fixed digest size")
    return name


class GenerationRequest(BaseModel):
    """What to generate and where."""

    target_dir: Path
    total_size: StrictInt
    block_size: StrictInt
    algorithm: str = DEFAULT_ALGORITHM

    @field_validator("total_size", "block_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive number of bytes")
        return value

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        return validate_algorithm(value)

    @model_validator(mode="after")
    def _evenly_divisible(self) -> GenerationRequest:
        if self.total_size % self.block_size != 0:
            raise ValueError(
                f"total_size ({self.total_size}) is not divisible "
                f"by block_size ({self.block_size})"
            )
        return self

    @property
    def block_count(self) -> int:
        return self.total_size // self.block_size


class BlockOutcome(BaseModel):
    """Result of processing one block index."""

    index: int
    filename: str
    status: Literal["generated", "skipped"]
    position: int  # 1-based
    total: int


class Manifest(BaseModel):
    """Summary of a generation run — serialized to cache_metadata.json."""

    blocks: int
    block_size: int
    total_size: int
    created: str = Field(default_factory=_now_iso)
    data_dir: str
    algorithm: str = DEFAULT_ALGORITHM
