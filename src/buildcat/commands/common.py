"""Helpers shared by CLI commands."""

from datetime import datetime
from pathlib import Path

import typer

from ..config import CatalogConfig, load_config
from ..constants import CONFIG_FILENAME
from ..core import parse_timestamp
from ..errors import ConfigError
from ..output import OutputContext

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help=f"Path to config file (default: ./{CONFIG_FILENAME})",
)


def load_cli_config(ctx: OutputContext, config: Path | None) -> CatalogConfig:
    """Load configuration, exiting with status 1 on an invalid file."""
    config_path = config or Path.cwd() / CONFIG_FILENAME
    if config is not None and not config.exists():
        ctx.error(f"Config file not found: {config}")
        raise typer.Exit(1)
    try:
        return load_config(config_path)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None


def parse_as_of(ctx: OutputContext, value: str | None) -> datetime | None:
    """Parse an --as-of value, exiting with status 1 if it isn't ISO-8601."""
    if value is None:
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        ctx.error(f"Invalid --as-of timestamp: {value}")
        raise typer.Exit(1)
    return parsed
