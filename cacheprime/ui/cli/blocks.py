"""
CLI commands for inspecting and maintaining a generated data directory.

Thin wrappers over ``cacheprime.core.use_cases``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from cacheprime.ui.cli.common import size_option


@click.group()
def blocks() -> None:
    """Blocks — verify, show, and clean generated data."""


@blocks.command()
@click.argument("data_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--repair", is_flag=True, help="Rewrite missing or corrupt blocks.")
@click.option("--total-size", "-t", callback=size_option, help="Expected total size (no manifest).")
@click.option("--block-size", "-b", callback=size_option, help="Expected block size (no manifest).")
@click.option("--algorithm", "-a", default=None, help="Expected algorithm (no manifest).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(
    ctx: click.Context,
    data_dir: Path,
    repair: bool,
    total_size: int | None,
    block_size: int | None,
    algorithm: str | None,
    as_json: bool,
) -> None:
    """Check every block in DATA_DIR against its deterministic content.

    The layout is read from cache_metadata.json when present; the
    size/algorithm options only apply to directories without one.
    """
    from cacheprime.core.use_cases.verify import verify_directory

    result = verify_directory(
        data_dir,
        repair=repair,
        config_path=ctx.obj.get("config_path"),
        total_size=total_size,
        block_size=block_size,
        algorithm=algorithm,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    source = "manifest" if result.from_manifest else "config"
    click.echo(
        f"🔍 {result.blocks} block(s) × {result.block_size} bytes "
        f"({result.algorithm}, layout from {source})"
    )
    click.echo(f"   OK:       {result.ok}")
    if result.repaired:
        click.secho(f"   Repaired: {len(result.repaired)}", fg="yellow")
    if result.missing:
        click.secho(f"   Missing:  {_fmt_indices(result.missing)}", fg="red")
    if result.corrupt:
        click.secho(f"   Corrupt:  {_fmt_indices(result.corrupt)}", fg="red")

    if result.valid:
        click.secho("✅ All blocks verified", fg="green", bold=True)
    else:
        click.secho("❌ Verification failed", fg="red", bold=True)
        sys.exit(1)


@blocks.command()
@click.argument("data_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def show(data_dir: Path, as_json: bool) -> None:
    """Show the manifest and block files of DATA_DIR."""
    from cacheprime.core.config.sizes import format_size
    from cacheprime.core.use_cases.show import show_directory

    result = show_directory(data_dir)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n📁 {data_dir}", fg="cyan", bold=True)
    click.echo(f"   Block files: {result.block_files} ({format_size(result.bytes_on_disk)})")

    manifest = result.manifest
    if manifest is None:
        click.secho("   No manifest (cache_metadata.json)", fg="yellow")
    else:
        click.echo(f"   Manifest:    {manifest.blocks} × {format_size(manifest.block_size)}")
        click.echo(f"   Total:       {format_size(manifest.total_size)}")
        click.echo(f"   Algorithm:   {manifest.algorithm}")
        click.echo(f"   Created:     {manifest.created}")
        if result.complete:
            click.secho("   Status:      complete", fg="green")
        else:
            click.secho("   Status:      incomplete", fg="yellow")
    click.echo()


@blocks.command()
@click.argument("data_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
def clean(data_dir: Path, yes: bool) -> None:
    """Delete block files and the manifest from DATA_DIR."""
    from cacheprime.core.config.sizes import format_size
    from cacheprime.core.use_cases.clean import clean_directory

    if not yes:
        click.confirm(f"Delete all generated blocks in {data_dir}?", abort=True)

    result = clean_directory(data_dir)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(
        f"🗑️  Removed {len(result.removed)} file(s), freed {format_size(result.bytes_freed)}",
        fg="green",
    )


def _fmt_indices(indices: list[int], limit: int = 10) -> str:
    """Render a list of block indices, truncated after ``limit`` entries."""
    shown = ", ".join(str(i) for i in indices[:limit])
    if len(indices) > limit:
        shown += f", … (+{len(indices) - limit} more)"
    return shown
