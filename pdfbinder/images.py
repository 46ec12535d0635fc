"""Convert standalone images into single-page PDFs."""

from __future__ import annotations

import io
import re

from PIL import Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

from .exceptions import EmbedError, ValidationError
from .rebuilder import PageImage, build_pdf_from_images, detect_image_format
from .types import PdfSource
from .utils import get_logger

LOGGER = get_logger("pdfbinder.images")

register_heif_opener()

IMAGE_EXTENSIONS = (".heic", ".heif", ".jpg", ".jpeg", ".png", ".webp")

_IMAGE_SUFFIX = re.compile(r"\.(heic|heif|jpg|jpeg|png|webp)$", re.IGNORECASE)


def is_image_file(name: str, mime_type: str = "") -> bool:
    """Return ``True`` if *name* or *mime_type* identifies an image."""

    lowered = name.lower()
    return lowered.endswith(IMAGE_EXTENSIONS) or mime_type.startswith("image/")


def _normalise(data: bytes) -> bytes:
    """Return *data* as JPEG or PNG, re-encoding other formats through Pillow."""

    if detect_image_format(data) is not None:
        return data

    try:
        with Image.open(io.BytesIO(data)) as image:
            has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
            output = io.BytesIO()
            if has_alpha:
                image.convert("RGBA").save(output, format="PNG")
            else:
                image.convert("RGB").save(output, format="JPEG", quality=95)
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError(f"Unsupported image format: {exc}") from exc
    return output.getvalue()


def pdf_name_for(file_name: str) -> str:
    return _IMAGE_SUFFIX.sub("", file_name) + ".pdf"


def convert_image_to_pdf(data: bytes, file_name: str) -> PdfSource:
    """Wrap the image in *data* into a one-page PDF sized from its pixels.

    HEIC/HEIF photos are decoded through the ``pillow_heif`` plugin and
    re-encoded as JPEG, like any other non-JPEG/PNG input.

    Raises:
        ValidationError: For data Pillow cannot decode.
    """

    try:
        page = PageImage.from_bytes(_normalise(data))
        document = build_pdf_from_images([page])
    except EmbedError as exc:
        raise ValidationError(f"Unable to convert {file_name}: {exc}") from exc

    LOGGER.info("Converted %s (%dx%d) to PDF", file_name, page.width, page.height)
    return PdfSource(name=pdf_name_for(file_name), data=document)


__all__ = [
    "IMAGE_EXTENSIONS",
    "is_image_file",
    "pdf_name_for",
    "convert_image_to_pdf",
]
