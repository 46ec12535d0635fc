"""Rebuild a PDF out of full-page raster images."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import img2pdf
from PIL import Image, UnidentifiedImageError

from .exceptions import EmbedError
from .utils import get_logger

LOGGER = get_logger("pdfbinder.rebuilder")

# 96 dpi pixels to 72 dpi PDF points.
POINTS_PER_PIXEL = 0.75

SUPPORTED_FORMATS = ("JPEG", "PNG")

_SIGNATURES = {
    b"\xff\xd8\xff": "JPEG",
    b"\x89PNG\r\n\x1a\n": "PNG",
}


def detect_image_format(data: bytes) -> str | None:
    """Return ``"JPEG"`` or ``"PNG"`` for recognised signatures, else ``None``."""

    for signature, name in _SIGNATURES.items():
        if data.startswith(signature):
            return name
    return None


@dataclass(frozen=True)
class PageImage:
    """
    An encoded page image and its declared pixel dimensions.

    Attributes:
        data: Encoded image bytes
        width: Width in pixels
        height: Height in pixels
        format: ``"JPEG"`` or ``"PNG"``
    """
    data: bytes = field(repr=False)
    width: int
    height: int
    format: str

    @classmethod
    def from_bytes(cls, data: bytes) -> "PageImage":
        image_format = detect_image_format(data)
        if image_format is None:
            raise EmbedError("Unrecognized image encoding (expected JPEG or PNG)")
        try:
            with Image.open(io.BytesIO(data)) as image:
                width, height = image.size
        except (UnidentifiedImageError, OSError) as exc:
            raise EmbedError(f"Unreadable {image_format} image: {exc}") from exc
        return cls(data=data, width=width, height=height, format=image_format)

    @property
    def page_size(self) -> Tuple[float, float]:
        return self.width * POINTS_PER_PIXEL, self.height * POINTS_PER_PIXEL


def _page_layout(imgwidthpx, imgheightpx, ndpi):
    width = imgwidthpx * POINTS_PER_PIXEL
    height = imgheightpx * POINTS_PER_PIXEL
    return width, height, width, height


def _prepare(image: PageImage, position: int) -> bytes:
    if image.format not in SUPPORTED_FORMATS or detect_image_format(image.data) != image.format:
        raise EmbedError(
            f"Image {position} has unrecognized encoding {image.format!r} (expected JPEG or PNG)",
            page_number=position,
        )
    if image.format == "JPEG":
        return image.data

    # img2pdf refuses alpha channels; flatten transparent PNGs onto white.
    with Image.open(io.BytesIO(image.data)) as png:
        if png.mode not in ("RGBA", "LA") and not (png.mode == "P" and "transparency" in png.info):
            return image.data
        rgba = png.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, (255, 255, 255))
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        output = io.BytesIO()
        flattened.save(output, format="PNG")
        LOGGER.debug("Flattened alpha channel of image %d", position)
        return output.getvalue()


def build_pdf_from_images(images: Sequence[PageImage]) -> bytes:
    """Return a PDF with one page per image, each image filling its page.

    Page dimensions are the image's pixel dimensions times
    :data:`POINTS_PER_PIXEL`. Page order follows *images*.

    Raises:
        EmbedError: If *images* is empty or an image is neither JPEG nor PNG.
    """

    if not images:
        raise EmbedError("No page images to embed")

    streams = [_prepare(image, position) for position, image in enumerate(images, start=1)]
    try:
        document = img2pdf.convert(streams, layout_fun=_page_layout, allow_oversized=True)
    except (
        img2pdf.ImageOpenError,
        img2pdf.AlphaChannelError,
        img2pdf.PdfTooLargeError,
        ValueError,
    ) as exc:
        raise EmbedError(f"Failed to embed page images: {exc}") from exc

    LOGGER.debug("Built PDF with %d image page(s)", len(images))
    return document


__all__ = [
    "PageImage",
    "POINTS_PER_PIXEL",
    "SUPPORTED_FORMATS",
    "detect_image_format",
    "build_pdf_from_images",
]
