import pytest

from pdfbinder import state as session
from pdfbinder.exceptions import InvalidTransitionError
from pdfbinder.state import Phase, SessionState
from pdfbinder.types import CompressionProgress, CompressionStage, PdfFile


def _file(name: str, valid: bool = True) -> PdfFile:
    return PdfFile(
        id=f"{name}-id",
        name=f"{name}.pdf",
        data=b"%PDF-1.4",
        display_name=name,
        page_count=1 if valid else None,
        size=8,
        is_valid=valid,
        error=None if valid else "Not a valid PDF file (missing PDF header)",
    )


@pytest.fixture()
def loaded() -> SessionState:
    return session.add_files(SessionState(), [_file("a"), _file("b"), _file("c"), _file("bad", valid=False)])


def test_initial_state() -> None:
    state = SessionState()
    assert state.phase is Phase.IDLE
    assert state.output_name == "merged"
    assert not state.can_merge


def test_valid_and_invalid_partition(loaded: SessionState) -> None:
    assert [f.display_name for f in loaded.valid_files] == ["a", "b", "c"]
    assert [f.display_name for f in loaded.invalid_files] == ["bad"]
    assert loaded.can_merge


def test_file_list_edits(loaded: SessionState) -> None:
    state = session.move_file(loaded, "c-id", 0)
    assert [f.id for f in state.files][:3] == ["c-id", "a-id", "b-id"]

    state = session.rename_file(state, "a-id", "Alpha")
    assert state.files[1].display_name == "Alpha"

    state = session.remove_file(state, "bad-id")
    assert not state.invalid_files

    state = session.set_output_name(state, "report")
    assert state.output_name == "report"
    assert loaded.files[0].display_name == "a"


def test_move_unknown_file(loaded: SessionState) -> None:
    with pytest.raises(KeyError):
        session.move_file(loaded, "missing", 0)


def test_merge_lifecycle(loaded: SessionState) -> None:
    state = session.start_merge(loaded)
    assert state.phase is Phase.MERGING
    assert state.merge_progress == (0, 3)
    assert not state.can_merge

    state = session.update_merge_progress(state, 2, 3)
    assert state.merge_progress == (2, 3)

    state = session.merge_succeeded(state, b"%PDF-merged")
    assert state.phase is Phase.SUCCESS
    assert state.merged_data == b"%PDF-merged"


def test_merge_requires_two_valid_files() -> None:
    state = session.add_files(SessionState(), [_file("a"), _file("bad", valid=False)])
    with pytest.raises(InvalidTransitionError):
        session.start_merge(state)


def test_empty_merge_result_fails(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"")
    assert state.phase is Phase.IDLE
    assert state.last_error
    assert state.merged_data is None


def test_empty_compression_result_keeps_merged_document(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"%PDF-merged")
    state = session.compress_succeeded(session.start_compress(state), b"")

    assert state.phase is Phase.SUCCESS
    assert state.merged_data == b"%PDF-merged"
    assert state.last_error == "Compression produced an empty file"


def test_start_over_keeps_files(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"%PDF-merged")
    state = session.start_over(state)

    assert state.phase is Phase.IDLE
    assert state.merged_data is None
    assert state.files == loaded.files
    with pytest.raises(InvalidTransitionError):
        session.start_over(state)


def test_totals_cover_valid_files_only(loaded: SessionState) -> None:
    assert loaded.total_pages == 3
    assert loaded.total_size == 24


def test_compress_lifecycle(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"%PDF-merged")
    state = session.start_compress(state)
    assert state.phase is Phase.COMPRESSING

    progress = CompressionProgress(CompressionStage.RENDERING, 1, 3)
    state = session.update_compress_progress(state, progress)
    assert state.compress_progress == progress

    state = session.compress_succeeded(state, b"%PDF-small")
    assert state.phase is Phase.SUCCESS
    assert state.merged_data == b"%PDF-small"
    assert state.compress_progress is None


def test_compress_failure_keeps_merged_document(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"%PDF-merged")
    state = session.compress_failed(session.start_compress(state), "Failed to process page 2: boom")

    assert state.phase is Phase.SUCCESS
    assert state.merged_data == b"%PDF-merged"
    assert state.last_error == "Failed to process page 2: boom"


def test_illegal_transitions(loaded: SessionState) -> None:
    with pytest.raises(InvalidTransitionError):
        session.start_compress(loaded)
    with pytest.raises(InvalidTransitionError):
        session.merge_succeeded(loaded, b"%PDF")

    merging = session.start_merge(loaded)
    with pytest.raises(InvalidTransitionError):
        session.start_merge(merging)
    with pytest.raises(InvalidTransitionError):
        session.clear_all(merging)


def test_clear_all(loaded: SessionState) -> None:
    state = session.merge_succeeded(session.start_merge(loaded), b"%PDF-merged")
    assert session.clear_all(state) == SessionState()
