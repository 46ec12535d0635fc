"""Utility helpers shared by pdfbinder modules."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

BYTES_PER_MB = 1024 * 1024


def get_logger(name: str) -> logging.Logger:
    """Return the library logger for *name* under the ``pdfbinder`` namespace."""

    if not name.startswith("pdfbinder"):
        name = f"pdfbinder.{name}"
    return logging.getLogger(name)


def ensure_path(path: PathLike) -> Path:
    """Return a :class:`~pathlib.Path` instance for *path*."""

    resolved = Path(path).expanduser()
    try:
        return resolved.resolve(strict=False)
    except OSError:  # pragma: no cover - platform specific
        return resolved


def bytes_to_mb(size_bytes: int) -> float:
    return size_bytes / BYTES_PER_MB


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "500 B", "1.5 KB", "12.3 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < BYTES_PER_MB:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{bytes_to_mb(size_bytes):.1f} MB"


def generate_output_path(first_input: PathLike, now: Optional[datetime] = None) -> Path:
    """Return ``merged-<timestamp>.pdf`` next to *first_input*."""

    timestamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    return ensure_path(first_input).parent / f"merged-{timestamp}.pdf"


def is_pdf_name(name: str) -> bool:
    return name.lower().endswith(".pdf")


__all__ = [
    "PathLike",
    "BYTES_PER_MB",
    "get_logger",
    "ensure_path",
    "bytes_to_mb",
    "format_file_size",
    "generate_output_path",
    "is_pdf_name",
]
