"""
Domain models — Pydantic types for cacheprime.

All models are re-exported here for convenient access:

    from cacheprime.core.models import GenerationRequest, Manifest, GeneratorConfig
"""

from cacheprime.core.models.config import GeneratorConfig
from cacheprime.core.models.generation import (
    BlockOutcome,
    GenerationRequest,
    Manifest,
)

__all__ = [
    # generation.py
    "BlockOutcome",
    "GenerationRequest",
    # config.py
    "GeneratorConfig",
    "Manifest",
]
