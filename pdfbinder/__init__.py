"""
pdfbinder - Merge PDF files and shrink the result toward a target size.

Quick Start:
    >>> from pdfbinder import PdfSource, merge_pdfs, compress_to_target_size
    >>> merged = merge_pdfs([PdfSource.from_path('a.pdf'), PdfSource.from_path('b.pdf')])
    >>> small = compress_to_target_size(merged, target_size_mb=5)

Pipelines:
    - merge_pdfs / merge_files: Concatenate documents page by page
    - compress_pdf: One rasterize-and-rebuild pass with fixed parameters
    - compress_to_target_size: Bounded search for parameters meeting a size budget
    - compress_with_preset: One pass with a named preset

Exceptions:
    - PDFBinderError: Base exception
    - ValidationError, RenderError, EmbedError, CompressionError, MergeError

For CLI usage, use the 'pdfbinder' and 'pdfbinder-compress' commands after
installation.
"""

__version__ = "1.0.0"

from pdfbinder.compressor import (
    CompressionResult,
    compress_file,
    compress_pdf,
    compress_to_target_size,
    compress_with_preset,
    select_initial_options,
)
from pdfbinder.exceptions import (
    CompressionError,
    EmbedError,
    InvalidTransitionError,
    MergeError,
    PDFBinderError,
    RenderError,
    ValidationError,
)
from pdfbinder.images import convert_image_to_pdf, is_image_file
from pdfbinder.merger import merge_files, merge_pdfs
from pdfbinder.rebuilder import PageImage, build_pdf_from_images
from pdfbinder.types import (
    COMPRESSION_PRESETS,
    CompressionOptions,
    CompressionPreset,
    CompressionProgress,
    CompressionStage,
    PdfFile,
    PdfSource,
    PdfValidationResult,
)
from pdfbinder.utils import format_file_size
from pdfbinder.validators import get_page_count, load_pdf_file, validate_pdf_bytes

__all__ = [
    "__version__",
    "merge_pdfs",
    "merge_files",
    "compress_pdf",
    "compress_to_target_size",
    "compress_with_preset",
    "compress_file",
    "select_initial_options",
    "build_pdf_from_images",
    "convert_image_to_pdf",
    "is_image_file",
    "validate_pdf_bytes",
    "get_page_count",
    "load_pdf_file",
    "format_file_size",
    "CompressionOptions",
    "CompressionPreset",
    "CompressionProgress",
    "CompressionResult",
    "CompressionStage",
    "COMPRESSION_PRESETS",
    "PageImage",
    "PdfFile",
    "PdfSource",
    "PdfValidationResult",
    "PDFBinderError",
    "ValidationError",
    "RenderError",
    "EmbedError",
    "CompressionError",
    "MergeError",
    "InvalidTransitionError",
]
