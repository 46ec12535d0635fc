"""Session state for an interactive merge-and-compress workflow.

:class:`SessionState` is immutable; every transition is a pure function that
returns a new state, so front ends hold exactly one value and replace it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from .exceptions import InvalidTransitionError
from .types import CompressionProgress, PdfFile

DEFAULT_OUTPUT_NAME = "merged"
MIN_MERGE_FILES = 2


class Phase(str, Enum):
    IDLE = "idle"
    MERGING = "merging"
    COMPRESSING = "compressing"
    SUCCESS = "success"


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of a working session.

    Attributes:
        files: File entries in merge order
        phase: Current pipeline phase
        output_name: Name the merged document is saved under
        merge_progress: ``(current, total)`` of the running merge
        merged_data: Last successfully merged (or compressed) document
        compress_progress: Latest compression progress event
        last_error: Message of the most recent failure
    """
    files: Tuple[PdfFile, ...] = ()
    phase: Phase = Phase.IDLE
    output_name: str = DEFAULT_OUTPUT_NAME
    merge_progress: Tuple[int, int] = (0, 0)
    merged_data: Optional[bytes] = field(default=None, repr=False)
    compress_progress: Optional[CompressionProgress] = None
    last_error: Optional[str] = None

    @property
    def valid_files(self) -> Tuple[PdfFile, ...]:
        return tuple(f for f in self.files if f.is_valid)

    @property
    def invalid_files(self) -> Tuple[PdfFile, ...]:
        return tuple(f for f in self.files if not f.is_valid)

    @property
    def total_pages(self) -> int:
        return sum(f.page_count or 0 for f in self.valid_files)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.valid_files)

    @property
    def can_merge(self) -> bool:
        return self.phase in (Phase.IDLE, Phase.SUCCESS) and len(self.valid_files) >= MIN_MERGE_FILES


def _require(state: SessionState, *phases: Phase) -> None:
    if state.phase not in phases:
        allowed = ", ".join(p.value for p in phases)
        raise InvalidTransitionError(
            f"Transition requires phase in ({allowed}), current phase is {state.phase.value}"
        )


def add_files(state: SessionState, files: Iterable[PdfFile]) -> SessionState:
    return replace(state, files=state.files + tuple(files))


def remove_file(state: SessionState, file_id: str) -> SessionState:
    return replace(state, files=tuple(f for f in state.files if f.id != file_id))


def rename_file(state: SessionState, file_id: str, display_name: str) -> SessionState:
    return replace(
        state,
        files=tuple(replace(f, display_name=display_name) if f.id == file_id else f for f in state.files),
    )


def move_file(state: SessionState, file_id: str, new_index: int) -> SessionState:
    """Move the entry *file_id* to *new_index*, shifting the others."""

    files = list(state.files)
    for old_index, entry in enumerate(files):
        if entry.id == file_id:
            break
    else:
        raise KeyError(file_id)

    files.insert(new_index, files.pop(old_index))
    return replace(state, files=tuple(files))


def set_output_name(state: SessionState, output_name: str) -> SessionState:
    return replace(state, output_name=output_name)


def clear_all(state: SessionState) -> SessionState:
    _require(state, Phase.IDLE, Phase.SUCCESS)
    return SessionState()


def start_over(state: SessionState) -> SessionState:
    """Drop the merged document and return to ``idle``, keeping the file list."""

    _require(state, Phase.SUCCESS)
    return replace(state, phase=Phase.IDLE, merged_data=None, compress_progress=None, last_error=None)


def start_merge(state: SessionState) -> SessionState:
    _require(state, Phase.IDLE, Phase.SUCCESS)
    total = len(state.valid_files)
    if total < MIN_MERGE_FILES:
        raise InvalidTransitionError(f"At least {MIN_MERGE_FILES} valid PDF files are required to merge")
    return replace(state, phase=Phase.MERGING, merge_progress=(0, total), last_error=None)


def update_merge_progress(state: SessionState, current: int, total: int) -> SessionState:
    _require(state, Phase.MERGING)
    return replace(state, merge_progress=(current, total))


def merge_succeeded(state: SessionState, merged_data: bytes) -> SessionState:
    _require(state, Phase.MERGING)
    if not merged_data:
        return merge_failed(state, "Merge produced an empty file")
    return replace(state, phase=Phase.SUCCESS, merged_data=merged_data, last_error=None)


def merge_failed(state: SessionState, error: str) -> SessionState:
    _require(state, Phase.MERGING)
    return replace(state, phase=Phase.IDLE, last_error=error)


def start_compress(state: SessionState) -> SessionState:
    _require(state, Phase.SUCCESS)
    if state.merged_data is None:
        raise InvalidTransitionError("No PDF data to compress")
    return replace(state, phase=Phase.COMPRESSING, compress_progress=None, last_error=None)


def update_compress_progress(state: SessionState, progress: CompressionProgress) -> SessionState:
    _require(state, Phase.COMPRESSING)
    return replace(state, compress_progress=progress)


def compress_succeeded(state: SessionState, compressed_data: bytes) -> SessionState:
    _require(state, Phase.COMPRESSING)
    if not compressed_data:
        return compress_failed(state, "Compression produced an empty file")
    return replace(state, phase=Phase.SUCCESS, merged_data=compressed_data, compress_progress=None)


def compress_failed(state: SessionState, error: str) -> SessionState:
    """Return to ``success`` keeping the previously merged document."""

    _require(state, Phase.COMPRESSING)
    return replace(state, phase=Phase.SUCCESS, compress_progress=None, last_error=error)


__all__ = [
    "Phase",
    "SessionState",
    "add_files",
    "remove_file",
    "rename_file",
    "move_file",
    "set_output_name",
    "clear_all",
    "start_over",
    "start_merge",
    "update_merge_progress",
    "merge_succeeded",
    "merge_failed",
    "start_compress",
    "update_compress_progress",
    "compress_succeeded",
    "compress_failed",
]
