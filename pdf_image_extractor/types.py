"""
Type definitions and dataclasses for PDF Image Extractor.

This module defines the records that flow through the extraction pipeline.
Everything produced after raw-byte extraction is frozen and can be shared
between worker threads without further synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:  # pragma: no cover - import for annotations only
    from .pixels import PixelBuffer


@dataclass(frozen=True)
class PageHandle:
    """
    One entry of the document's page sequence.

    Attributes:
        page_number: Zero-based page index
        page: The resolved page object, or ``None`` if resolution failed
        error: The page-level resolution error, if any
    """
    page_number: int
    page: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.page is not None


@dataclass(frozen=True)
class ImageResource:
    """A named XObject whose resolved subtype is ``/Image``."""
    name: str
    stream: Any


@dataclass(frozen=True)
class RawImageRecord:
    """
    Decoded sample bytes for one image together with its identity.

    Attributes:
        page_number: Zero-based page index
        object_number: Zero-based index among the images on that page
        width: Declared image width in pixels
        height: Declared image height in pixels
        raw_bytes: Immutable decoded sample bytes
    """
    page_number: int
    object_number: int
    width: int
    height: int
    raw_bytes: bytes = field(repr=False)


@dataclass(frozen=True)
class ProcessedImageRecord:
    """A raw record reinterpreted as a dimensioned pixel grid."""
    page_number: int
    object_number: int
    pixel_buffer: "PixelBuffer" = field(repr=False)


@dataclass(frozen=True)
class ItemFailure:
    """
    A failure isolated to a single page or image.

    Attributes:
        page_number: Zero-based page index
        object_number: Image index on the page, ``None`` for page-level failures
        stage: Pipeline stage (``page``, ``locate``, ``extract``, ``build`` or ``write``)
        error: Human-readable error message
    """
    page_number: int
    object_number: Optional[int]
    stage: str
    error: str

    def __str__(self) -> str:
        target = f"page {self.page_number}"
        if self.object_number is not None:
            target = f"image {self.object_number} on {target}"
        return f"{self.stage} failed for {target}: {self.error}"


@dataclass
class PipelineResult:
    """
    Result of running the two-phase extraction pipeline.

    Attributes:
        processed: Processed records in page, then object, order
        failures: Failures collected from every stage
        pages: Number of pages visited
    """
    processed: List[ProcessedImageRecord] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)
    pages: int = 0


@dataclass
class ExtractionReport:
    """
    Result of a complete extraction run.

    Attributes:
        source_file: Path to the source PDF file
        output_dir: Directory the images were (or would be) written to
        dry_run: Whether filesystem writes were suppressed
        pages: Number of pages visited
        processed: Number of images that produced a pixel buffer
        written: Number of files written (always 0 for dry runs)
        files: Paths written, or that would have been written
        failures: Every isolated failure of the run
    """
    source_file: str
    output_dir: str
    dry_run: bool = False
    pages: int = 0
    processed: int = 0
    written: int = 0
    files: List[str] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        """Images that were located but not written."""
        return sum(1 for failure in self.failures if failure.object_number is not None)

    @property
    def page_failures(self) -> int:
        """Failures of a page or of a resource lookup, not tied to an image."""
        return sum(1 for failure in self.failures if failure.object_number is None)

    @property
    def succeeded(self) -> int:
        return len(self.files)

    @property
    def success(self) -> bool:
        """False only when something failed and no image made it through."""
        return self.succeeded > 0 or not self.failures

    def __str__(self) -> str:
        """String representation of the report."""
        return (
            "ExtractionReport(pages={pages}, processed={processed}, "
            "succeeded={succeeded}, failed={failed}, page_failures={page_failures}, "
            "dry_run={dry_run})"
        ).format(
            pages=self.pages,
            processed=self.processed,
            succeeded=self.succeeded,
            failed=self.failed,
            page_failures=self.page_failures,
            dry_run=self.dry_run,
        )
