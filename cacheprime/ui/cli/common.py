"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import click

from cacheprime.core.config.sizes import parse_size


def size_option(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    """Click callback: parse a human-readable size ("1GiB", "512M", "4096")."""
    if value is None:
        return None
    try:
        size = parse_size(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    if size <= 0:
        raise click.BadParameter("must be a positive number of bytes")
    return size
