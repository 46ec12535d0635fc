"""Rasterize PDF pages into lossy-encoded page images."""

from __future__ import annotations

import io

from .backends.base import BackendDocument
from .exceptions import PDFBinderError, RenderError
from .rebuilder import PageImage
from .utils import get_logger

LOGGER = get_logger("pdfbinder.rasterizer")

# Native resolution is 96 pixels per inch; PDF user space is 72 points per inch.
NATIVE_PIXELS_PER_POINT = 96 / 72

MIN_JPEG_QUALITY = 1
MAX_JPEG_QUALITY = 95


def jpeg_quality(quality: float) -> int:
    """Map a ``(0, 1]`` quality factor onto Pillow's JPEG quality scale."""

    return max(MIN_JPEG_QUALITY, min(MAX_JPEG_QUALITY, round(quality * 100)))


class PageRasterizer:
    """Renders the pages of one document, strictly one page at a time."""

    def __init__(self, document: BackendDocument) -> None:
        self.document = document

    @property
    def page_count(self) -> int:
        return self.document.num_pages

    def render_page(self, index: int, scale: float, quality: float) -> PageImage:
        """Render page *index* at ``scale`` times native resolution as JPEG.

        Raises:
            ValueError: If *scale* or *quality* is out of range.
            RenderError: If the page cannot be rendered or encodes to nothing.
        """

        if scale <= 0:
            raise ValueError(f"scale must be > 0, got {scale}")
        if not 0 < quality <= 1:
            raise ValueError(f"quality must be in (0, 1], got {quality}")

        try:
            image = self.document.render_page(index, scale * NATIVE_PIXELS_PER_POINT)
        except PDFBinderError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render page: {exc}", page_index=index) from exc

        LOGGER.debug("Rendering page %d at %dx%d", index + 1, image.width, image.height)

        output = io.BytesIO()
        try:
            image.save(output, format="JPEG", quality=jpeg_quality(quality), optimize=True)
        except OSError as exc:
            raise RenderError(f"Failed to encode page image: {exc}", page_index=index) from exc

        data = output.getvalue()
        if not data:
            raise RenderError(f"Page {index + 1} rendered as empty image", page_index=index)

        LOGGER.debug("Page %d rendered, image size: %d bytes", index + 1, len(data))
        return PageImage(data=data, width=image.width, height=image.height, format="JPEG")


__all__ = ["PageRasterizer", "NATIVE_PIXELS_PER_POINT", "jpeg_quality"]
