from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from pdfbinder.exceptions import ValidationError
from pdfbinder.validators import (
    MISSING_HEADER_MESSAGE,
    get_page_count,
    has_pdf_header,
    load_pdf_file,
    validate_pdf_bytes,
)


def test_validate_pdf_bytes_reports_page_count(pdf_bytes_factory: Callable[..., bytes]) -> None:
    result = validate_pdf_bytes(pdf_bytes_factory([(72, 72)] * 3))

    assert result.is_valid
    assert result.page_count == 3
    assert result.error is None


def test_validate_pdf_bytes_missing_header() -> None:
    result = validate_pdf_bytes(b"hello world, definitely not a pdf")

    assert result.is_valid is False
    assert result.page_count is None
    assert result.error == MISSING_HEADER_MESSAGE


def test_validate_pdf_bytes_damaged_body() -> None:
    result = validate_pdf_bytes(b"%PDF-1.4\nthis is not a real document body")

    assert result.is_valid is False
    assert result.page_count is None
    assert result.error


def test_has_pdf_header() -> None:
    assert has_pdf_header(b"%PDF-1.7\n...")
    assert not has_pdf_header(b"")
    assert not has_pdf_header(b"PK\x03\x04")


def test_get_page_count(pdf_bytes_factory: Callable[..., bytes]) -> None:
    assert get_page_count(pdf_bytes_factory([(72, 72)] * 2)) == 2


def test_get_page_count_rejects_garbage() -> None:
    with pytest.raises(ValidationError):
        get_page_count(b"garbage")


def test_load_pdf_file(pdf_factory: Callable[..., Path]) -> None:
    path = pdf_factory("Report.PDF", pages=4)

    first = load_pdf_file(path)
    second = load_pdf_file(path)

    assert first.is_valid
    assert first.page_count == 4
    assert first.display_name == "Report"
    assert first.name == "Report.PDF"
    assert first.size == path.stat().st_size
    assert first.id != second.id


def test_load_pdf_file_invalid_content(tmp_path: Path) -> None:
    path = tmp_path / "fake.pdf"
    path.write_text("not a pdf")

    entry = load_pdf_file(path)

    assert entry.is_valid is False
    assert entry.page_count is None
    assert entry.error == MISSING_HEADER_MESSAGE


def test_load_pdf_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        load_pdf_file(tmp_path / "missing.pdf")
