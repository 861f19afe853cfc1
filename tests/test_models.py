"""
Tests for domain models — request validation and manifest defaults.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cacheprime.core.models import GenerationRequest, GeneratorConfig, Manifest


class TestGenerationRequest:
    def test_block_count(self, tmp_path: Path):
        request = GenerationRequest(target_dir=tmp_path, total_size=100, block_size=25)
        assert request.block_count == 4
        assert request.algorithm == "md5"

    def test_single_block(self, tmp_path: Path):
        request = GenerationRequest(target_dir=tmp_path, total_size=7, block_size=7)
        assert request.block_count == 1

    def test_uneven_division(self, tmp_path: Path):
        with pytest.raises(ValidationError, match="not divisible"):
            GenerationRequest(target_dir=tmp_path, total_size=100, block_size=30)

    def test_block_larger_than_total(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            GenerationRequest(target_dir=tmp_path, total_size=10, block_size=20)

    def test_algorithm_normalized(self, tmp_path: Path):
        request = GenerationRequest(
            target_dir=tmp_path, total_size=10, block_size=5, algorithm=" SHA256 "
        )
        assert request.algorithm == "sha256"


class TestManifest:
    def test_created_defaults_to_now(self):
        manifest = Manifest(blocks=1, block_size=1, total_size=1, data_dir="/tmp/x")
        assert manifest.created
        assert "T" in manifest.created

    def test_json_field_names(self):
        manifest = Manifest(blocks=2, block_size=8, total_size=16, data_dir="/data")
        assert list(manifest.model_dump()) == [
            "blocks",
            "block_size",
            "total_size",
            "created",
            "data_dir",
            "algorithm",
        ]


class TestGeneratorConfig:
    def test_human_sizes(self):
        config = GeneratorConfig(total_size="1GiB", block_size="64M")
        assert config.total_size == 1024**3
        assert config.block_size == 64 * 1024**2

    def test_rejects_zero(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(block_size=0)
