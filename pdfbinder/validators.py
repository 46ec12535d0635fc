"""Validation utilities for candidate PDF inputs."""

from __future__ import annotations

import io
import uuid
from pathlib import Path

from pypdf import PdfReader

from .exceptions import ValidationError
from .types import PdfFile, PdfValidationResult
from .utils import PathLike, ensure_path, get_logger

LOGGER = get_logger("pdfbinder.validators")

PDF_MAGIC = b"%PDF"
MISSING_HEADER_MESSAGE = "Not a valid PDF file (missing PDF header)"


def has_pdf_header(data: bytes) -> bool:
    return data[:5].startswith(PDF_MAGIC)


def open_reader(data: bytes) -> PdfReader:
    """Open *data* with :mod:`pypdf`, decrypting with an empty password if needed."""

    reader = PdfReader(io.BytesIO(data))
    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF with empty password")
        reader.decrypt("")
    return reader


def validate_pdf_bytes(data: bytes) -> PdfValidationResult:
    """Check *data* for a PDF header and a readable page tree.

    Never raises: problems are reported through the returned
    :class:`PdfValidationResult`.
    """

    if not has_pdf_header(data):
        return PdfValidationResult(is_valid=False, page_count=None, error=MISSING_HEADER_MESSAGE)

    try:
        reader = open_reader(data)
        page_count = len(reader.pages)
    except Exception as exc:  # pypdf raises a wide range of errors on damaged input
        LOGGER.debug("PDF failed to parse: %s", exc)
        return PdfValidationResult(is_valid=False, page_count=None, error=str(exc) or "Unknown error")

    return PdfValidationResult(is_valid=True, page_count=page_count)


def get_page_count(data: bytes) -> int:
    """Return the number of pages in *data*.

    Raises:
        ValidationError: If the data cannot be read as a PDF.
    """

    try:
        return len(open_reader(data).pages)
    except Exception as exc:
        raise ValidationError(f"Unable to read PDF: {exc}") from exc


def load_pdf_file(path: PathLike) -> PdfFile:
    """Read *path* and build a :class:`PdfFile` entry describing it."""

    pdf_path = ensure_path(path)
    if not pdf_path.is_file():
        raise ValidationError(f"File not found: {path}")

    data = pdf_path.read_bytes()
    result = validate_pdf_bytes(data)
    if result.is_valid:
        LOGGER.info("Loaded %s (%d page(s))", pdf_path.name, result.page_count)
    else:
        LOGGER.warning("Loaded invalid PDF %s: %s", pdf_path.name, result.error)

    return PdfFile(
        id=f"{pdf_path.name}-{uuid.uuid4().hex}",
        name=pdf_path.name,
        data=data,
        display_name=_display_name(pdf_path),
        page_count=result.page_count,
        size=len(data),
        is_valid=result.is_valid,
        error=result.error,
    )


def _display_name(path: Path) -> str:
    name = path.name
    if name.lower().endswith(".pdf"):
        return name[:-4]
    return name


__all__ = [
    "has_pdf_header",
    "open_reader",
    "validate_pdf_bytes",
    "get_page_count",
    "load_pdf_file",
    "MISSING_HEADER_MESSAGE",
]
