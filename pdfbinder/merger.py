"""Merge functionality for :mod:`pdfbinder`."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable, Optional, Sequence

from pypdf import PdfWriter

from .exceptions import MergeError, ValidationError
from .types import MergeProgressCallback, PdfSource
from .utils import PathLike, ensure_path, format_file_size, generate_output_path, get_logger
from .validators import open_reader

LOGGER = get_logger("pdfbinder.merge")


def merge_pdfs(
    sources: Sequence[PdfSource],
    progress_callback: Optional[MergeProgressCallback] = None,
) -> bytes:
    """Merge *sources* in order and return the serialized document.

    Args:
        sources: Named PDF buffers. Every page of every source is copied
            into the result, preserving order.
        progress_callback: Called as ``(current, total)`` before each
            source is processed, with ``current`` starting at 1.

    Raises:
        MergeError: If any source cannot be read. The message names the
            offending file and no partial output is produced.
    """

    if not sources:
        raise MergeError("No input PDFs provided")

    writer = PdfWriter()
    total = len(sources)

    for index, source in enumerate(sources, start=1):
        if progress_callback is not None:
            progress_callback(index, total)

        LOGGER.debug("Processing input PDF %s", source.name)
        try:
            reader = open_reader(source.data)
            for page_index, page in enumerate(reader.pages):
                LOGGER.debug("Adding page %s from %s", page_index, source.name)
                writer.add_page(page)
        except Exception as exc:
            LOGGER.error("Error processing file %s: %s", source.name, exc)
            raise MergeError(
                f'Failed to process "{source.name}": {str(exc) or "Unknown error"}',
                file_name=source.name,
            ) from exc

    buffer = io.BytesIO()
    writer.write(buffer)
    merged = buffer.getvalue()
    if not merged:
        raise MergeError("Merge produced an empty file")

    LOGGER.info(
        "Merged %d PDFs (%d pages, %s)",
        total,
        len(writer.pages),
        format_file_size(len(merged)),
    )
    return merged


def merge_files(
    inputs: Iterable[PathLike],
    output: Optional[PathLike] = None,
    progress_callback: Optional[MergeProgressCallback] = None,
) -> Path:
    """Merge the PDF files at *inputs* into *output* and return its path.

    When *output* is omitted the result is written next to the first input
    as ``merged-<timestamp>.pdf``.

    Raises:
        ValidationError: If an input file does not exist.
        MergeError: If merging fails for any reason.
    """

    paths = [ensure_path(path) for path in inputs]
    if not paths:
        raise MergeError("No input PDFs provided")

    for path in paths:
        if not path.is_file():
            raise ValidationError(f"File not found: {path}")

    sources = [PdfSource.from_path(path) for path in paths]
    merged = merge_pdfs(sources, progress_callback)

    output_path = ensure_path(output) if output is not None else generate_output_path(paths[0])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        output_path.write_bytes(merged)
    except OSError as exc:
        LOGGER.error("Failed to write merged PDF to %s: %s", output_path, exc)
        raise MergeError(f"Failed to write merged PDF to {output_path}") from exc

    LOGGER.info("Merged %d PDFs into %s", len(paths), output_path)
    return output_path


__all__ = ["merge_pdfs", "merge_files"]
