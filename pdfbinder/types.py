"""
Type definitions and dataclasses for pdfbinder.

This module defines the data structures passed between the merge and
compression pipelines and their callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class CompressionOptions:
    """
    Parameters of a single compression pass.

    Attributes:
        quality: Lossy image fidelity in ``(0, 1]``
        scale: Rasterization resolution factor in ``(0, 2]``
    """
    quality: float
    scale: float

    def __post_init__(self) -> None:
        if not 0 < self.quality <= 1:
            raise ValueError(f"quality must be in (0, 1], got {self.quality}")
        if not 0 < self.scale <= 2:
            raise ValueError(f"scale must be in (0, 2], got {self.scale}")


class CompressionStage(str, Enum):
    """Pipeline stages reported through progress callbacks."""

    RENDERING = "rendering"
    COMPRESSING = "compressing"
    BUILDING = "building"


@dataclass(frozen=True)
class CompressionProgress:
    """
    Progress event emitted while compressing.

    Attributes:
        stage: Stage the pipeline is in
        current: Current page (rendering/building) or attempt (compressing)
        total: Page count or attempt ceiling
        current_size_mb: Most recently produced output size, when known
    """
    stage: CompressionStage
    current: int
    total: int
    current_size_mb: Optional[float] = None


ProgressCallback = Callable[[CompressionProgress], None]
MergeProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class PdfSource:
    """A raw document buffer together with the file name it came from."""

    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "PdfSource":
        pdf_path = Path(path)
        return cls(name=pdf_path.name, data=pdf_path.read_bytes())

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class PdfValidationResult:
    """Outcome of validating a candidate PDF buffer."""

    is_valid: bool
    page_count: Optional[int]
    error: Optional[str] = None


@dataclass(frozen=True)
class PdfFile:
    """
    A file entry in a working session.

    Attributes:
        id: Unique identifier of the entry
        name: Original file name
        data: Raw file contents
        display_name: Editable name shown to the user
        page_count: Number of pages, ``None`` when the file is invalid
        size: File size in bytes
        is_valid: Whether the file can take part in a merge
        error: Validation error message if the file is invalid
    """
    id: str
    name: str
    data: bytes = field(repr=False)
    display_name: str
    page_count: Optional[int]
    size: int
    is_valid: bool
    error: Optional[str] = None

    def to_source(self) -> PdfSource:
        return PdfSource(name=self.name, data=self.data)


@dataclass(frozen=True)
class CompressionPreset:
    """A named, fixed pair of compression parameters."""

    quality: float
    scale: float
    label: str

    @property
    def options(self) -> CompressionOptions:
        return CompressionOptions(quality=self.quality, scale=self.scale)


COMPRESSION_PRESETS: Dict[str, CompressionPreset] = {
    "extreme": CompressionPreset(0.3, 0.5, "Extreme (smallest)"),
    "high": CompressionPreset(0.5, 0.75, "High compression"),
    "medium": CompressionPreset(0.7, 1.0, "Medium (balanced)"),
    "low": CompressionPreset(0.85, 1.0, "Low (better quality)"),
    "minimal": CompressionPreset(0.95, 1.0, "Minimal (best quality)"),
}
