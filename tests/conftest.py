from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence

import pytest
from PIL import Image
from pypdf import PdfWriter

from pdfbinder.backends.base import BackendDocument


def make_pdf_bytes(page_sizes: Sequence[tuple[float, float]], title: str | None = None) -> bytes:
    writer = PdfWriter()
    for width, height in page_sizes:
        writer.add_blank_page(width=width, height=height)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def make_image_bytes(width: int, height: int, image_format: str = "JPEG", mode: str = "RGB") -> bytes:
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1, width: float = 72, height: float = 72) -> Path:
        path = tmp_path / filename
        path.write_bytes(make_pdf_bytes([(width, height)] * pages))
        return path

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., Path]) -> list[Path]:
    return [pdf_factory("one.pdf", pages=1), pdf_factory("two.pdf", pages=2)]


class FakeDocument(BackendDocument):
    def __init__(self, sizes: Sequence[tuple[int, int]], fail_on: int | None = None) -> None:
        super().__init__(num_pages=len(sizes))
        self.sizes = list(sizes)
        self.fail_on = fail_on
        self.rendered: list[tuple[int, float]] = []
        self.closed = False

    def render_page(self, index: int, scale: float) -> Image.Image:
        self.rendered.append((index, scale))
        if index == self.fail_on:
            raise RuntimeError("canvas unavailable")
        width, height = self.sizes[index]
        return Image.new("RGB", (width, height), (255, 255, 255))

    def close(self) -> None:
        self.closed = True


class FakeBackend:
    name = "fake"

    def __init__(self, sizes: Sequence[tuple[int, int]], fail_on: int | None = None) -> None:
        self.sizes = sizes
        self.fail_on = fail_on
        self.documents: list[FakeDocument] = []

    def open(self, data: bytes) -> FakeDocument:
        document = FakeDocument(self.sizes, fail_on=self.fail_on)
        self.documents.append(document)
        return document


@pytest.fixture()
def fake_backend_factory() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture()
def pdf_bytes_factory() -> Callable[..., bytes]:
    return make_pdf_bytes


@pytest.fixture()
def image_bytes_factory() -> Callable[..., bytes]:
    return make_image_bytes
