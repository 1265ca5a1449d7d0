"""Init command implementation."""

from pathlib import Path

import typer

from ..config import write_config_template
from ..constants import CONFIG_FILENAME
from ..output import get_output_context


def init(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Directory to write the config into"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a buildcat.toml template with the default support policy."""
    ctx = get_output_context()

    config_path = path / CONFIG_FILENAME
    if config_path.exists() and not force:
        ctx.error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(1)

    path.mkdir(parents=True, exist_ok=True)
    written = write_config_template(path)
    ctx.success(f"Created config template: {written}", {"path": str(written)})
