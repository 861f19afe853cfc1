"""
Generator configuration — loaded from cacheprime.yml.

Every field has a default, so an empty file (or no file at all) yields
the stock layout: 100 GiB of data in 1 GiB blocks, md5-seeded.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from cacheprime.core.config.sizes import parse_size
from cacheprime.core.models.generation import DEFAULT_ALGORITHM, validate_algorithm

DEFAULT_TOTAL_SIZE = 100 * 1024**3
DEFAULT_BLOCK_SIZE = 1024**3


class GeneratorConfig(BaseModel):
    """Default generation parameters for the CLI."""

    total_size: int = DEFAULT_TOTAL_SIZE
    block_size: int = DEFAULT_BLOCK_SIZE
    algorithm: str = DEFAULT_ALGORITHM

    @field_validator("total_size", "block_size", mode="before")
    @classmethod
    def _parse_size(cls, value: object) -> int:
        if not isinstance(value, (int, str)):
            raise ValueError(f"expected a size, got {type(value).__name__}")
        size = parse_size(value)
        if size <= 0:
            raise ValueError("must be a positive number of bytes")
        return size

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        return validate_algorithm(value)
