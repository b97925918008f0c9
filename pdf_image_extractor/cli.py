"""
Command-line interface for PDF image extractor.
"""

import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from pdf_image_extractor import __version__
from pdf_image_extractor.config import ExtractorOptions
from pdf_image_extractor.exceptions import (
    ConfigurationError,
    DocumentOpenError,
    ExtractionCancelledError,
    OutputDirectoryError,
)
from pdf_image_extractor.extractor import ImageExtractor
from pdf_image_extractor.pixels import PixelFormat
from pdf_image_extractor.utils import configure_logging, validate_pdf

console = Console(stderr=True)


@click.command(name="pdf-image-extractor")
@click.version_option(version=__version__)
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--dry-run',
    is_flag=True,
    default=False,
    help='Run the full pipeline but do not write any files'
)
@click.option(
    '--workers', '-w',
    default=None,
    help='Number of worker threads (default: CPU count + 4, at most 32)',
    type=click.IntRange(min=1)
)
@click.option(
    '--password',
    default=None,
    help='Password for encrypted PDFs',
    type=str
)
@click.option(
    '--pixel-format',
    default=None,
    help='Pixel layout of the decoded samples (default: RGB)',
    type=click.Choice([member.name for member in PixelFormat], case_sensitive=False)
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    default=False,
    help='Enable debug logging'
)
def cli(input_pdf, dry_run, workers, password, pixel_format, verbose):
    """
    Extract every embedded image of INPUT_PDF as PNG files.

    Images are written to a directory named after the input file (without
    its extension) in the current working directory. The directory must be
    empty or absent.

    Examples:

        pdf-image-extractor report.pdf

        pdf-image-extractor report.pdf --dry-run
    """
    configure_logging(verbose)

    is_valid, error_msg = validate_pdf(input_pdf)
    if not is_valid:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(error_msg)}")
        sys.exit(1)

    try:
        options = ExtractorOptions.from_env(
            max_workers=workers,
            pixel_format=pixel_format,
            dry_run=dry_run,
        )
        extractor = ImageExtractor(input_pdf, password=password, options=options)

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Writing images", total=None)

            def update_progress(current, total):
                progress.update(task, completed=current, total=total)

            report = extractor.extract(progress_callback=update_progress)

    except (ConfigurationError, DocumentOpenError, OutputDirectoryError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except ExtractionCancelledError as e:
        console.print(f"\n[bold yellow]✗ Cancelled:[/bold yellow] {escape(str(e))}")
        sys.exit(1)

    table = Table(title="Extraction Summary", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("File", os.path.basename(input_pdf))
    table.add_row("Pages", str(report.pages))
    table.add_row("Images processed", str(report.processed))
    table.add_row("Files written", "0 (dry run)" if report.dry_run else str(report.written))
    table.add_row("Failed images", str(report.failed))
    table.add_row("Page failures", str(report.page_failures))
    table.add_row("Output directory", os.path.abspath(report.output_dir))
    console.print(table)

    if report.failures:
        console.print("\n[bold yellow]Failures:[/bold yellow]")
        for failure in report.failures:
            console.print(f"  • {escape(str(failure))}")

    if not report.success:
        console.print("\n[bold red]✗ No images could be extracted[/bold red]")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
