"""
cacheprime — CLI entrypoint.

Usage:
    cacheprime --help
    cacheprime generate /srv/bench/cache
    cacheprime blocks verify /srv/bench/cache
    cacheprime config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from cacheprime import __version__
from cacheprime.core.observability.logging_config import setup_logging
from cacheprime.ui.cli.common import size_option


@click.group()
@click.version_option(version=__version__, prog_name="cacheprime")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to cacheprime.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """cacheprime — deterministic filler data for benchmark cache priming."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("CACHEPRIME_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("CACHEPRIME_LOG_FILE"),
        log_file_level=os.environ.get("CACHEPRIME_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.argument("data_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--total-size", "-t", callback=size_option, help="Total bytes to generate (e.g. 100GiB).")
@click.option("--block-size", "-b", callback=size_option, help="Bytes per block file (e.g. 1GiB).")
@click.option("--algorithm", "-a", default=None, help="hashlib algorithm seeding block content.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    data_dir: Path,
    total_size: int | None,
    block_size: int | None,
    algorithm: str | None,
    as_json: bool,
) -> None:
    """Generate deterministic block files in DATA_DIR.

    Existing blocks are never rewritten; the manifest
    (cache_metadata.json) is refreshed on every run.

    Examples:

        cacheprime generate /srv/bench/cache

        cacheprime generate ./data --total-size 4GiB --block-size 256MiB
    """
    from cacheprime.core.models.generation import BlockOutcome
    from cacheprime.core.use_cases.generate import run_generate

    started = False

    def _progress(outcome: BlockOutcome) -> None:
        nonlocal started
        if not started:
            click.echo(f"Generating cache data files in {data_dir}...")
            started = True
        if outcome.status == "generated":
            click.echo(f"Generated: {outcome.filename} ({outcome.position}/{outcome.total})")
        else:
            click.echo(f"Skipping existing: {outcome.filename}")

    result = run_generate(
        data_dir,
        config_path=ctx.obj.get("config_path"),
        total_size=total_size,
        block_size=block_size,
        algorithm=algorithm,
        on_progress=None if as_json else _progress,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho("Cache data generation complete!", fg="green")
    if not ctx.obj.get("quiet", False):
        click.echo(f"   Generated: {result.generated}  Skipped: {result.skipped}")
    click.echo(f"Metadata saved to {result.manifest_path}")


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate cacheprime.yml configuration."""
    from cacheprime.core.config.sizes import format_size
    from cacheprime.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        cfg = result.config
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Total size: {format_size(cfg.total_size)} ({cfg.total_size} bytes)")
        click.echo(f"   Block size: {format_size(cfg.block_size)} ({cfg.block_size} bytes)")
        click.echo(f"   Blocks:     {cfg.total_size // cfg.block_size}")
        click.echo(f"   Algorithm:  {cfg.algorithm}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-command groups from cacheprime/ui/cli/ ───────────

from cacheprime.ui.cli.blocks import blocks

cli.add_command(blocks)


if __name__ == "__main__":
    cli()
