"""
Custom exceptions for pdfbinder.

All errors raised by the library derive from :class:`PDFBinderError` so
callers can catch the whole family at once.
"""

from __future__ import annotations

from typing import Optional


class PDFBinderError(Exception):
    """Base exception for all pdfbinder errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown pdfbinder error occurred."


class ValidationError(PDFBinderError):
    """Raised when an input file is missing, malformed or of an unsupported type."""

    @property
    def default_message(self) -> str:
        return "Invalid or unsupported input file."


class RenderError(PDFBinderError):
    """Raised when a page cannot be rasterized."""

    def __init__(self, message: str = "", page_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_index = page_index

    @property
    def default_message(self) -> str:
        return "Page could not be rendered."


class EmbedError(PDFBinderError):
    """Raised when an image cannot be embedded into a PDF page."""

    def __init__(self, message: str = "", page_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_number = page_number

    @property
    def default_message(self) -> str:
        return "Unrecognized image encoding (expected JPEG or PNG)."


class CompressionError(PDFBinderError):
    """Raised when a compression pass aborts on a page."""

    def __init__(self, message: str = "", page_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_number = page_number

    @property
    def default_message(self) -> str:
        return "Compression failed."


class MergeError(PDFBinderError):
    """Raised when one of the merge inputs cannot be processed."""

    def __init__(self, message: str = "", file_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.file_name = file_name

    @property
    def default_message(self) -> str:
        return "Merging PDFs failed."


class InvalidTransitionError(PDFBinderError):
    """Raised when a session state transition is not allowed from the current phase."""

    @property
    def default_message(self) -> str:
        return "Transition not allowed from the current phase."
