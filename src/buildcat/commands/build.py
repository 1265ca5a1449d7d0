"""Build command implementation."""

from pathlib import Path

import typer

from ..core import assemble_catalog
from ..errors import RecordLoadError
from ..models import BuildReport, Platform, format_timestamp
from ..output import OutputContext, get_output_context
from ..services import JsonFileRecordSource
from .common import CONFIG_OPTION, load_cli_config, parse_as_of


def _print_summary(ctx: OutputContext, report: BuildReport) -> None:
    ctx.console.print(f"\n[bold]Catalog as of:[/bold] {format_timestamp(report.as_of)}")
    for platform_report in (report.windows, report.linux):
        ctx.console.print(
            f"[bold]{platform_report.platform.value}:[/bold] "
            f"{platform_report.accepted} artifacts from {platform_report.total} records"
        )
        if platform_report.skipped:
            skipped = ", ".join(s.version for s in platform_report.skipped)
            ctx.console.print(f"  [yellow]Skipped:[/yellow] {skipped}")
        if platform_report.duplicates:
            duplicates = ", ".join(sorted(set(platform_report.duplicates)))
            ctx.console.print(f"  [yellow]Duplicates dropped:[/yellow] {duplicates}")
        if platform_report.unknown:
            ctx.console.print(f"  Undated: {', '.join(platform_report.unknown)}")


def build(
    windows: Path | None = typer.Option(
        None, "--windows", "-w", help="JSON file with Windows upstream records"
    ),
    linux: Path | None = typer.Option(
        None, "--linux", "-l", help="JSON file with Linux upstream records"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write catalog JSON here instead of stdout"
    ),
    as_of: str | None = typer.Option(
        None, "--as-of", help="Reference time for classification (ISO-8601, default: now)"
    ),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Build the artifact catalog from upstream record files."""
    ctx = get_output_context()
    catalog_config = load_cli_config(ctx, config)
    reference_time = parse_as_of(ctx, as_of)

    source = JsonFileRecordSource(windows=windows, linux=linux)
    try:
        windows_records = source.fetch_records(Platform.WINDOWS)
        linux_records = source.fetch_records(Platform.LINUX)
    except RecordLoadError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    result = assemble_catalog(
        windows_records,
        linux_records,
        catalog_config.policy,
        as_of=reference_time,
        base_url=catalog_config.urls.base_url,
    )

    if output is None:
        print(result.data.to_json())
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.data.to_json() + "\n")

    if ctx.json_mode:
        if output is not None:
            ctx.print_json(
                {"output": str(output), "report": result.report.model_dump(mode="json")}
            )
        return

    _print_summary(ctx, result.report)
    if output is not None:
        ctx.success(f"Wrote catalog to {output}")
