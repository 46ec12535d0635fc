"""Compression engine for :mod:`pdfbinder`.

Pages are rasterized, re-encoded as JPEG and rebuilt into an image-only PDF.
:func:`compress_to_target_size` repeats that pass with geometrically shrinking
parameters until the output fits a byte budget or the attempts run out.
"""

from __future__ import annotations

import dataclasses
import functools
import os
from pathlib import Path
from typing import List, Optional

from .backends.base import RenderBackend
from .backends.pdfium_backend import PdfiumBackend
from .exceptions import CompressionError, EmbedError, PDFBinderError, ValidationError
from .rasterizer import PageRasterizer
from .rebuilder import PageImage, build_pdf_from_images
from .types import (
    COMPRESSION_PRESETS,
    CompressionOptions,
    CompressionProgress,
    CompressionStage,
    ProgressCallback,
)
from .utils import BYTES_PER_MB, bytes_to_mb, ensure_path, format_file_size, get_logger

LOGGER = get_logger("pdfbinder.compress")

MAX_ATTEMPTS = 5
QUALITY_BACKOFF = 0.7
SCALE_BACKOFF = 0.85
MIN_QUALITY = 0.1
MIN_SCALE = 0.3

# (upper bound on target/current ratio, quality, scale)
_INITIAL_BANDS = (
    (0.1, 0.2, 0.4),
    (0.2, 0.3, 0.5),
    (0.3, 0.4, 0.6),
    (0.5, 0.5, 0.75),
)
_DEFAULT_BAND = (0.7, 0.9)


@dataclasses.dataclass(slots=True)
class CompressionResult:
    """Represents the outcome of compressing a file on disk."""

    input_path: Path
    output_path: Path
    original_size: int
    compressed_size: int

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def _notify(callback: Optional[ProgressCallback], progress: CompressionProgress) -> None:
    if callback is not None:
        callback(progress)


def compress_pdf(
    data: bytes,
    options: CompressionOptions,
    on_progress: Optional[ProgressCallback] = None,
    *,
    backend: Optional[RenderBackend] = None,
) -> bytes:
    """Rasterize every page of *data* and rebuild it as an image-only PDF.

    Emits one ``rendering`` event per page (1-based) followed by a single
    ``building`` event. Pages keep their input order.

    Raises:
        ValidationError: If *data* cannot be opened for rendering.
        CompressionError: If any page fails; the message names the 1-based
            page number and no partial output is returned.
    """

    backend = backend or PdfiumBackend()
    document = backend.open(data)
    try:
        rasterizer = PageRasterizer(document)
        total = rasterizer.page_count
        LOGGER.debug(
            "Compressing PDF with %d pages, quality: %s, scale: %s",
            total,
            options.quality,
            options.scale,
        )

        images: List[PageImage] = []
        for index in range(total):
            page_number = index + 1
            _notify(on_progress, CompressionProgress(CompressionStage.RENDERING, page_number, total))
            try:
                images.append(rasterizer.render_page(index, options.scale, options.quality))
            except PDFBinderError as exc:
                LOGGER.error("Error processing page %d: %s", page_number, exc)
                raise CompressionError(
                    f"Failed to process page {page_number}: {exc}", page_number=page_number
                ) from exc
    finally:
        document.close()

    _notify(on_progress, CompressionProgress(CompressionStage.BUILDING, total, total))
    try:
        result = build_pdf_from_images(images)
    except EmbedError as exc:
        if exc.page_number is None:
            raise CompressionError(f"Failed to build compressed PDF: {exc}") from exc
        LOGGER.error("Error embedding page %d: %s", exc.page_number, exc)
        raise CompressionError(
            f"Failed to process page {exc.page_number}: {exc}", page_number=exc.page_number
        ) from exc

    LOGGER.info("Compressed PDF saved, size: %.2f MB", bytes_to_mb(len(result)))
    return result


def select_initial_options(ratio: float) -> CompressionOptions:
    """Pick starting parameters from the needed ``target / current`` size ratio."""

    for upper_bound, quality, scale in _INITIAL_BANDS:
        if ratio < upper_bound:
            return CompressionOptions(quality=quality, scale=scale)
    quality, scale = _DEFAULT_BAND
    return CompressionOptions(quality=quality, scale=scale)


def next_options(options: CompressionOptions) -> CompressionOptions:
    """Back off both parameters geometrically, never below their floors."""

    return CompressionOptions(
        quality=max(options.quality * QUALITY_BACKOFF, MIN_QUALITY),
        scale=max(options.scale * SCALE_BACKOFF, MIN_SCALE),
    )


def _with_size(callback: ProgressCallback, size_mb: float, progress: CompressionProgress) -> None:
    callback(dataclasses.replace(progress, current_size_mb=size_mb))


def compress_to_target_size(
    data: bytes,
    target_size_mb: float,
    on_progress: Optional[ProgressCallback] = None,
    *,
    backend: Optional[RenderBackend] = None,
) -> bytes:
    """Compress *data* until it fits in *target_size_mb*, best effort.

    Input already within budget is returned unchanged. Otherwise up to
    :data:`MAX_ATTEMPTS` passes run; the first result within budget wins and,
    if none fits, the last attempt's output is returned.
    """

    if target_size_mb <= 0:
        raise ValueError(f"target size must be positive, got {target_size_mb}")

    target_bytes = target_size_mb * BYTES_PER_MB
    current_size = len(data)
    if current_size <= target_bytes:
        LOGGER.info(
            "Input (%s) already within target of %.2f MB",
            format_file_size(current_size),
            target_size_mb,
        )
        return data

    options = select_initial_options(target_bytes / current_size)
    result = data

    for attempt in range(1, MAX_ATTEMPTS + 1):
        LOGGER.debug(
            "Attempt %d/%d with quality %.3f, scale %.3f",
            attempt,
            MAX_ATTEMPTS,
            options.quality,
            options.scale,
        )
        forward = None
        if on_progress is not None:
            forward = functools.partial(_with_size, on_progress, bytes_to_mb(len(result)))

        result = compress_pdf(data, options, forward, backend=backend)
        result_size_mb = bytes_to_mb(len(result))
        _notify(
            on_progress,
            CompressionProgress(CompressionStage.COMPRESSING, attempt, MAX_ATTEMPTS, result_size_mb),
        )

        if len(result) <= target_bytes:
            LOGGER.info("Reached %.2f MB on attempt %d", result_size_mb, attempt)
            break

        options = next_options(options)
    else:
        LOGGER.warning(
            "Target of %.2f MB not reached after %d attempts; returning %.2f MB",
            target_size_mb,
            MAX_ATTEMPTS,
            bytes_to_mb(len(result)),
        )

    return result


def compress_with_preset(
    data: bytes,
    preset: str,
    on_progress: Optional[ProgressCallback] = None,
    *,
    backend: Optional[RenderBackend] = None,
) -> bytes:
    """Run a single pass with one of :data:`~pdfbinder.types.COMPRESSION_PRESETS`."""

    if preset not in COMPRESSION_PRESETS:
        raise ValueError(f"Unknown compression preset: {preset}")
    return compress_pdf(data, COMPRESSION_PRESETS[preset].options, on_progress, backend=backend)


def compress_file(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    *,
    target_size_mb: Optional[float] = None,
    preset: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    backend: Optional[RenderBackend] = None,
) -> CompressionResult:
    """Compress the PDF at *input_path* into *output_path*.

    Exactly one of *target_size_mb* or *preset* may be given; with neither,
    a 10 MB target is used.
    """

    if target_size_mb is not None and preset is not None:
        raise ValueError("Pass either target_size_mb or preset, not both")

    source = ensure_path(input_path)
    destination = ensure_path(output_path)
    if not source.is_file():
        raise ValidationError(f"File not found: {source}")

    data = source.read_bytes()
    if preset is not None:
        compressed = compress_with_preset(data, preset, on_progress, backend=backend)
    else:
        target = target_size_mb if target_size_mb is not None else 10.0
        compressed = compress_to_target_size(data, target, on_progress, backend=backend)

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(compressed)

    result = CompressionResult(
        input_path=source,
        output_path=destination,
        original_size=len(data),
        compressed_size=len(compressed),
    )
    LOGGER.info(
        "Compressed %s from %s to %s",
        source.name,
        format_file_size(result.original_size),
        format_file_size(result.compressed_size),
    )
    return result


__all__ = [
    "CompressionResult",
    "MAX_ATTEMPTS",
    "MIN_QUALITY",
    "MIN_SCALE",
    "compress_pdf",
    "compress_to_target_size",
    "compress_with_preset",
    "compress_file",
    "select_initial_options",
    "next_options",
]
