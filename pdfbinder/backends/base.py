"""Backend protocol for page rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from PIL import Image


@dataclass
class BackendDocument:
    """Represents an opened PDF document that can rasterize its pages."""

    num_pages: int

    def render_page(self, index: int, scale: float) -> "Image.Image":
        """Render page *index* at *scale* pixels per PDF point."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "BackendDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class RenderBackend(Protocol):
    """Protocol defining backend operations for opening and rendering PDFs."""

    name: str

    def open(self, data: bytes) -> BackendDocument:
        """Open raw PDF bytes and return a backend document wrapper."""
