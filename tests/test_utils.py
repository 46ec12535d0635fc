from datetime import datetime

from pdfbinder.utils import format_file_size, generate_output_path, get_logger, is_pdf_name


def test_format_file_size() -> None:
    assert format_file_size(500) == "500 B"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(5 * 1024 * 1024 + 300 * 1024) == "5.3 MB"


def test_generate_output_path_uses_first_input_directory(tmp_path) -> None:
    first = tmp_path / "docs" / "a.pdf"
    path = generate_output_path(first, now=datetime(2024, 3, 5, 14, 7, 9))

    assert path == (tmp_path / "docs" / "merged-2024-03-05T14-07-09.pdf").resolve()


def test_get_logger_namespace() -> None:
    assert get_logger("merge").name == "pdfbinder.merge"
    assert get_logger("pdfbinder.compress").name == "pdfbinder.compress"


def test_is_pdf_name() -> None:
    assert is_pdf_name("report.PDF")
    assert not is_pdf_name("notes.txt")
