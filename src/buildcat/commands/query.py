"""Query command implementation."""

from pathlib import Path

import typer
from pydantic import ValidationError

from ..constants import QUERY_DEFAULT_LIMIT
from ..core import query_catalog
from ..errors import RecordLoadError
from ..models import ArtifactsQuery, Platform, QueryResult, SupportStatus
from ..output import OutputContext, get_output_context
from ..services import load_catalog
from .common import CONFIG_OPTION, load_cli_config


def _print_result(ctx: OutputContext, result: QueryResult) -> None:
    for platform in result.platforms:
        entries = result.data.get(platform.value, {})
        stats = result.stats[platform.value]
        ctx.console.print(
            f"\n[bold]{platform.value}:[/bold] {stats.filtered} of {stats.total} artifacts"
        )
        for version, entry in entries.items():
            flags = [name for name in ("recommended", "critical") if entry.get(name)]
            line = f"  {version}  {entry['supportStatus']}"
            if "published_at" in entry:
                line += f"  published {entry['published_at']}"
            if "supportEnds" in entry:
                line += f"  support ends {entry['supportEnds']}"
            if flags:
                line += f"  [yellow]({', '.join(flags)})[/yellow]"
            ctx.console.print(line)

    page = result.pagination
    ctx.console.print(f"Page {page.current_page} of {max(page.total_pages, 1)}")


def query(
    catalog: Path = typer.Argument(..., help="Built catalog JSON file"),
    platform: Platform | None = typer.Option(None, "--platform", "-p", help="Only this platform"),
    status: SupportStatus | None = typer.Option(
        None, "--status", "-s", help="Only this support status"
    ),
    version_filter: str | None = typer.Option(
        None, "--version-filter", help="Look up one exact version"
    ),
    include_eol: bool = typer.Option(False, "--include-eol", help="Include end-of-life builds"),
    sort_by: str = typer.Option("version", "--sort-by", help="Sort by 'version' or 'date'"),
    order: str = typer.Option("desc", "--order", help="Sort order: 'asc' or 'desc'"),
    limit: int = typer.Option(QUERY_DEFAULT_LIMIT, "--limit", help="Page size (max 20)"),
    offset: int = typer.Option(0, "--offset", help="Entries to skip"),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Filter, sort and page a built catalog."""
    ctx = get_output_context()
    catalog_config = load_cli_config(ctx, config)

    try:
        artifacts_query = ArtifactsQuery(
            platform=platform,
            version=version_filter,
            status=status,
            include_eol=include_eol,
            sort_by=sort_by,
            sort_order=order,
            limit=limit,
            offset=offset,
        )
    except ValidationError as e:
        raise typer.BadParameter(
            "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        ) from None

    try:
        data = load_catalog(catalog)
    except RecordLoadError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    result = query_catalog(data, artifacts_query, catalog_config.policy)
    if ctx.json_mode:
        ctx.print_json(result.model_dump(mode="json"))
    else:
        _print_result(ctx, result)
