"""
Tests for CLI commands — generate, config check, blocks, and global options.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from cacheprime.core.persistence.manifest_file import MANIFEST_FILE
from cacheprime.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "cacheprime" in result.output
        assert "generate" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def test_generates_blocks(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["generate", str(data_dir), "--total-size", "3", "--block-size", "1"]
        )
        assert result.exit_code == 0, result.output
        assert f"Generating cache data files in {data_dir}" in result.output
        assert "Generated: cache_block_0.dat (1/3)" in result.output
        assert "Generated: cache_block_2.dat (3/3)" in result.output
        assert "Cache data generation complete!" in result.output
        assert f"Metadata saved to {data_dir / MANIFEST_FILE}" in result.output

        manifest = json.loads((data_dir / MANIFEST_FILE).read_text())
        assert manifest["blocks"] == 3

    def test_rerun_skips(self, data_dir: Path):
        runner = CliRunner()
        args = ["generate", str(data_dir), "-t", "2K", "-b", "1K"]
        runner.invoke(cli, args)
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Skipping existing: cache_block_0.dat" in result.output
        assert "Skipping existing: cache_block_1.dat" in result.output
        assert "Generated: cache_block" not in result.output

    def test_missing_directory_argument(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code != 0
        assert "Usage" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_uneven_division(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", str(data_dir), "-t", "10", "-b", "3"])
        assert result.exit_code == 1
        assert "not divisible" in result.output
        assert not data_dir.exists()
        assert "Generating cache data files" not in result.output

    def test_bad_size_option(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", str(data_dir), "-t", "huge"])
        assert result.exit_code == 2
        assert "Invalid size" in result.output

    def test_json_output(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["generate", str(data_dir), "-t", "64", "-b", "32", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["generated"] == 2
        assert data["manifest"]["block_size"] == 32

    def test_json_error(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["generate", str(data_dir), "-t", "10", "-b", "3", "--json"]
        )
        assert result.exit_code == 1
        assert "error" in json.loads(result.output)

    def test_uses_config_option(self, data_dir: Path, write_config):
        config = write_config("total_size: 48\nblock_size: 16\n", name="bench.yml")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate", str(data_dir)])
        assert result.exit_code == 0, result.output
        assert "(3/3)" in result.output


class TestConfigCheckCommand:
    def test_valid_config(self, write_config):
        config = write_config("total_size: 2GiB\nblock_size: 1GiB\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()
        assert "Blocks:     2" in result.output

    def test_invalid_config(self, write_config):
        config = write_config("total_size: 10\nblock_size: 3\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "not divisible" in result.output

    def test_json(self, write_config):
        config = write_config("total_size: 2K\nblock_size: 1K\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["config"]["block_size"] == 1024


class TestBlocksCommands:
    def _generate(self, data_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", str(data_dir), "-t", "300", "-b", "100"])
        assert result.exit_code == 0

    def test_verify_ok(self, data_dir: Path):
        self._generate(data_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "verify", str(data_dir)])
        assert result.exit_code == 0
        assert "All blocks verified" in result.output

    def test_verify_missing(self, data_dir: Path):
        self._generate(data_dir)
        (data_dir / "cache_block_1.dat").unlink()
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "verify", str(data_dir)])
        assert result.exit_code == 1
        assert "Missing:  1" in result.output

    def test_verify_repair(self, data_dir: Path):
        self._generate(data_dir)
        (data_dir / "cache_block_1.dat").write_bytes(b"oops")
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "verify", str(data_dir), "--repair", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["repaired"] == [1]

    def test_show(self, data_dir: Path):
        self._generate(data_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "show", str(data_dir)])
        assert result.exit_code == 0
        assert "Block files: 3" in result.output
        assert "complete" in result.output

    def test_show_json(self, data_dir: Path):
        self._generate(data_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "show", str(data_dir), "--json"])
        data = json.loads(result.output)
        assert data["block_files"] == 3
        assert data["complete"] is True

    def test_clean_with_yes(self, data_dir: Path):
        self._generate(data_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "clean", str(data_dir), "--yes"])
        assert result.exit_code == 0
        assert "Removed 4 file(s)" in result.output
        assert list(data_dir.iterdir()) == []

    def test_clean_aborted(self, data_dir: Path):
        self._generate(data_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "clean", str(data_dir)], input="n\n")
        assert result.exit_code == 1
        assert (data_dir / MANIFEST_FILE).exists()

    def test_missing_directory(self, data_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "show", str(data_dir)])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_show_ignores_undecodable_manifest(self, data_dir: Path):
        self._generate(data_dir)
        (data_dir / MANIFEST_FILE).write_bytes(b"\xff\xfe{bad")
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "show", str(data_dir)])
        assert result.exit_code == 0
        assert "No manifest" in result.output
        assert "Block files: 3" in result.output

    def test_verify_directory_in_place_of_block(self, data_dir: Path):
        self._generate(data_dir)
        block = data_dir / "cache_block_1.dat"
        block.unlink()
        block.mkdir()
        runner = CliRunner()
        result = runner.invoke(cli, ["blocks", "verify", str(data_dir)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Corrupt:  1" in result.output
