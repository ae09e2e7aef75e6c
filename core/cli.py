"""
Command-line interface for Marketplace Exports
"""
import asyncio
import json
from pathlib import Path

import click

from core.config import settings
from core.exceptions import RenderError, ReportExportError
from core.logging import get_logger, setup_logging
from report_exports.dispatcher import export_data, get_available_export_formats
from report_exports.models import ExportArtifact, ReportDataType
from report_exports.pdf_converter import is_pdf_available

logger = get_logger(__name__)

FORMAT_CHOICES = ["tabular", "interchange", "document", "csv", "json", "pdf"]


@click.group()
@click.version_option(version=settings.app_version)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL for this run",
)
def cli(log_level):
    """Marketplace Exports CLI - CSV, JSON and PDF report exports"""
    setup_logging(level=log_level)


@cli.command()
def formats():
    """List the supported export formats"""
    for entry in get_available_export_formats():
        click.echo(f"{entry['value']:<6} {entry['label']:<5} {entry['description']}")


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "export_format",
    required=True,
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    help="Output format",
)
@click.option(
    "--type",
    "data_type",
    default=ReportDataType.GENERIC.value,
    help="Business data type (revenue, orders, products, customers, spending, vendors, overview)",
)
@click.option("--role", default="user", help="Role of the requesting user, used in the filename")
@click.option(
    "--output-dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory the artifact is written to",
)
def export(payload_file: Path, export_format: str, data_type: str, role: str, output_dir: Path):
    """Export the JSON payload in PAYLOAD_FILE"""
    try:
        payload = json.loads(payload_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{payload_file} is not valid JSON: {e}")

    def show_progress(percent: int, message: str) -> None:
        click.echo(f"[{percent:>3}%] {message}")

    def save(artifact: ExportArtifact) -> None:
        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / artifact.filename
        target.write_bytes(artifact.content)
        click.echo(f"Saved {target} ({artifact.size} bytes)")

    try:
        asyncio.run(
            export_data(
                payload,
                export_format,
                data_type,
                role,
                on_progress=show_progress,
                deliver=save,
            )
        )
    except RenderError as e:
        raise click.ClickException(f"{e.message}. Please try again.")
    except ReportExportError as e:
        raise click.ClickException(e.message)


@cli.command()
def env_info():
    """Display environment information"""
    click.echo(f"{settings.app_name} v{settings.app_version}")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Report brand: {settings.report_brand}")
    click.echo(f"Currency: {settings.currency_code}")
    click.echo(f"PDF page: {settings.pdf_page_format}, margin {settings.pdf_margin}")
    click.echo(f"PDF rendering: {'available' if is_pdf_available() else 'unavailable (install playwright)'}")


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
