"""pypdfium2 backend implementation for page rendering."""

from __future__ import annotations

from dataclasses import dataclass

import pypdfium2 as pdfium
from PIL import Image

from ..exceptions import RenderError, ValidationError
from ..utils import get_logger
from .base import BackendDocument, RenderBackend

LOGGER = get_logger("pdfbinder.backends.pdfium")


@dataclass
class PdfiumDocument(BackendDocument):
    document: pdfium.PdfDocument

    def render_page(self, index: int, scale: float) -> Image.Image:
        page = self.document[index]
        try:
            bitmap = page.render(scale=scale)
            image = bitmap.to_pil()
        except pdfium.PdfiumError as exc:
            raise RenderError(f"Rendering surface unavailable: {exc}", page_index=index) from exc
        finally:
            page.close()

        if image.width == 0 or image.height == 0:
            raise RenderError("Page rendered with zero dimensions", page_index=index)
        return image.convert("RGB")

    def close(self) -> None:
        self.document.close()


class PdfiumBackend(RenderBackend):
    """Backend implementation that uses `pypdfium2` under the hood."""

    name = "pdfium"

    def open(self, data: bytes) -> PdfiumDocument:
        try:
            document = pdfium.PdfDocument(data)
        except pdfium.PdfiumError as exc:
            raise ValidationError(f"Unable to open PDF for rendering: {exc}") from exc

        LOGGER.debug("Opened PDF with %d page(s) for rendering", len(document))
        return PdfiumDocument(num_pages=len(document), document=document)
