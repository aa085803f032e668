"""
Command-line interface for PDF image reconstruction.
"""

import logging
import sys
from pathlib import Path

import click

from .exceptions import InputError
from .extractor import PDFImageExtractor
from .models import ExtractionConfig


@click.command()
@click.version_option(version="1.0.0")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir", "-o",
    default="extracted_images",
    help="Output directory for reconstructed images",
    type=click.Path(file_okay=False),
)
@click.option(
    "--strategy", "-s",
    "strategies",
    multiple=True,
    type=click.Choice(["structural", "rendered"]),
    help="Extraction strategy (repeatable, default: both)",
)
@click.option("--workers", default=4, show_default=True, help="Reconstruction threads", type=int)
@click.option(
    "--timeout", default=0.5, show_default=True,
    help="Seconds to wait for asynchronous pixel requests", type=float,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(input_pdf, output_dir, strategies, workers, timeout, verbose):
    """
    Extract and reconstruct the images embedded in INPUT_PDF.

    Examples:

        pdf-extract-images report.pdf

        pdf-extract-images report.pdf -o images -s structural --workers 8
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ExtractionConfig(
            output_dir=output_dir,
            strategies=list(strategies) or ["structural", "rendered"],
            max_workers=workers,
            async_timeout=timeout,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        result = PDFImageExtractor(config).extract_all_images(input_pdf, save=True)
    except InputError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    click.echo("=" * 60)
    click.echo("PDF IMAGE EXTRACTION COMPLETE")
    click.echo("=" * 60)
    click.echo(f"PDF: {result.pdf_path}")
    click.echo(f"Total pages: {result.total_pages}")
    click.echo(f"Images decoded: {result.decoded_count}")
    click.echo(f"Placeholders: {result.placeholder_count}")
    click.echo(f"Processing time: {result.extraction_time:.2f} seconds")
    click.echo(f"Output directory: {output_dir}")

    for path in result.saved_files[:5]:
        click.echo(f"  - {path}")
    if len(result.saved_files) > 5:
        click.echo(f"  ... and {len(result.saved_files) - 5} more")


if __name__ == "__main__":
    main()
