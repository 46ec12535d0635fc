"""
Command-line interface for pdfbinder.

``pdfbinder`` merges PDF files in the order given; ``pdfbinder-compress``
shrinks a single PDF with a preset or toward a target size.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdfbinder import __version__
from pdfbinder.compressor import compress_file
from pdfbinder.exceptions import PDFBinderError
from pdfbinder.merger import merge_files
from pdfbinder.types import COMPRESSION_PRESETS, CompressionProgress, CompressionStage
from pdfbinder.utils import ensure_path, format_file_size, is_pdf_name

console = Console()
err_console = Console(stderr=True)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

STAGE_LABELS = {
    CompressionStage.RENDERING: "Rendering pages",
    CompressionStage.BUILDING: "Building PDF",
    CompressionStage.COMPRESSING: "Compression attempt",
}


def _fail(message):
    err_console.print(f"[bold red]✗ Error:[/bold red] {escape(str(message))}")
    sys.exit(1)


def configure_logging(verbose):
    """Route ``pdfbinder`` log records to stderr through rich."""
    logger = logging.getLogger("pdfbinder")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


class ExitOneCommand(click.Command):
    """Command that reports usage errors on stderr and exits with status 1."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            _fail(exc.format_message())


@click.command(
    name="pdfbinder",
    cls=ExitOneCommand,
    context_settings={**CONTEXT_SETTINGS, "ignore_unknown_options": True},
)
@click.version_option(version=__version__)
@click.argument("inputs", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    help="Output file path (default: merged-<timestamp>.pdf next to the first input)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def merge_command(ctx, inputs, output, verbose):
    """
    Merge multiple PDFs into one.

    Examples:

        pdfbinder doc1.pdf doc2.pdf doc3.pdf

        pdfbinder doc1.pdf doc2.pdf -o combined.pdf
    """
    if not inputs:
        click.echo(ctx.get_help())
        sys.exit(1)

    configure_logging(verbose)

    for arg in inputs:
        if not is_pdf_name(arg):
            _fail(f"Invalid argument or non-PDF file: {arg}")

    if len(inputs) < 2:
        _fail("Please provide at least 2 PDF files to merge")

    for arg in inputs:
        if not ensure_path(arg).is_file():
            _fail(f"File not found: {arg}")

    console.print(f"\n[bold cyan]Merging {len(inputs)} PDF files...[/bold cyan]")

    try:
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Adding files", total=len(inputs))

            def update_progress(current, total):
                progress.update(task, completed=current, description=f"Adding file {current}/{total}")

            result_path = merge_files(inputs, output, progress_callback=update_progress)
    except (PDFBinderError, OSError) as e:
        _fail(f"Error merging PDFs: {e}")

    console.print("[bold green]✓ Successfully merged PDFs![/bold green]")
    click.echo(str(result_path))


@click.command(name="pdfbinder-compress", cls=ExitOneCommand, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    help="Output file path (default: <input>-compressed.pdf)",
)
@click.option(
    "--target-size", "-t",
    type=click.FloatRange(min=0, min_open=True),
    help="Target size in MB (default: 10 when no preset is given)",
)
@click.option(
    "--preset", "-p",
    type=click.Choice(list(COMPRESSION_PRESETS), case_sensitive=False),
    help="Use a fixed compression preset instead of a target size",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def compress_command(input_pdf, output, target_size, preset, verbose):
    """
    Shrink a PDF by re-rendering its pages as JPEG images.

    Examples:

        pdfbinder-compress report.pdf --target-size 5

        pdfbinder-compress report.pdf --preset high -o small.pdf
    """
    configure_logging(verbose)

    if target_size is not None and preset is not None:
        _fail("Use either --target-size or --preset, not both")

    source = ensure_path(input_pdf)
    destination = ensure_path(output) if output else source.with_name(f"{source.stem}-compressed.pdf")

    if preset is not None:
        preset = preset.lower()
        chosen = COMPRESSION_PRESETS[preset]
        console.print(f"\n[bold cyan]Compressing with preset:[/bold cyan] {chosen.label}")
    else:
        console.print(f"\n[bold cyan]Compressing toward[/bold cyan] {target_size or 10.0:g} MB")

    try:
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("{task.fields[size]}"),
            console=console,
        ) as progress:
            task = progress.add_task("Loading", total=None, size="")

            def update_progress(event: CompressionProgress):
                size = f"{event.current_size_mb:.2f} MB" if event.current_size_mb is not None else ""
                progress.update(
                    task,
                    description=STAGE_LABELS[event.stage],
                    completed=event.current,
                    total=event.total,
                    size=size,
                )

            result = compress_file(
                source,
                destination,
                target_size_mb=target_size,
                preset=preset,
                on_progress=update_progress,
            )
    except (PDFBinderError, ValueError, OSError) as e:
        _fail(f"Compression failed: {e}")

    table = Table(title="Compression Summary", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Original Size", format_file_size(result.original_size))
    table.add_row("Compressed Size", format_file_size(result.compressed_size))
    table.add_row("Saved", format_file_size(result.bytes_saved))
    console.print(table)
    click.echo(str(result.output_path))


if __name__ == "__main__":
    merge_command()
