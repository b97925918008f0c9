"""Two-phase parallel extraction pipeline.

The page phase locates and extracts images with one task per page; every
document access inside it serializes on the shared :class:`ResolverProxy`.
The buffer phase then validates every raw record in parallel without
touching the document. The phases never overlap.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from .config import ExtractorOptions
from .document import PDFDocumentAdapter
from .exceptions import (
    DimensionMismatchError,
    ExtractionCancelledError,
    ExtractionError,
)
from .locator import locate_images
from .pixels import build_processed_image
from .raw import extract_raw_image
from .types import ItemFailure, PipelineResult, ProcessedImageRecord, RawImageRecord
from .utils import time_block

LOGGER = logging.getLogger(__name__)

PageOutcome = Tuple[List[RawImageRecord], List[ItemFailure]]
BuildOutcome = Tuple[Optional[ProcessedImageRecord], Optional[ItemFailure]]


class ExtractionPipeline:
    """Fan work out across pages, then across images."""

    def __init__(
        self,
        document: PDFDocumentAdapter,
        options: Optional[ExtractorOptions] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.document = document
        self.options = options or ExtractorOptions()
        self.cancel_event = cancel_event

    def _check_cancelled(self, phase: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            LOGGER.warning("Cancelled before %s", phase)
            raise ExtractionCancelledError(f"Extraction cancelled before {phase}")

    # ------------------------------------------------------------------
    # Page phase
    # ------------------------------------------------------------------
    def _process_page(self, page_number: int) -> PageOutcome:
        records: List[RawImageRecord] = []
        failures: List[ItemFailure] = []
        try:
            handle = self.document.page(page_number)
            if handle.error is not None:
                failures.append(ItemFailure(page_number, None, "page", str(handle.error)))

            resolver = self.document.resolver
            for object_number, resource in locate_images(handle, resolver, failures):
                try:
                    records.append(
                        extract_raw_image(resource, resolver, page_number, object_number)
                    )
                except ExtractionError as exc:
                    LOGGER.error(
                        "Failed to extract image %d on page %d: %s",
                        object_number,
                        page_number,
                        exc,
                    )
                    failures.append(ItemFailure(page_number, object_number, "extract", str(exc)))
        except Exception as exc:
            LOGGER.exception("Page %d failed; skipping its images", page_number)
            return [], failures + [ItemFailure(page_number, None, "page", str(exc))]
        return records, failures

    def extract_pages(self) -> Tuple[List[RawImageRecord], List[ItemFailure]]:
        """Run the page phase and return raw records in page order."""

        records: List[RawImageRecord] = []
        failures: List[ItemFailure] = []
        with time_block(LOGGER, "page phase"):
            with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
                for page_records, page_failures in executor.map(
                    self._process_page, self.document.page_numbers()
                ):
                    records.extend(page_records)
                    failures.extend(page_failures)
        return records, failures

    # ------------------------------------------------------------------
    # Buffer phase
    # ------------------------------------------------------------------
    def _build(self, record: RawImageRecord) -> BuildOutcome:
        LOGGER.debug(
            "building pixel buffer for image %d on page %d",
            record.object_number,
            record.page_number,
        )
        try:
            return build_processed_image(record, self.options.pixel_format), None
        except DimensionMismatchError as exc:
            LOGGER.error("%s", exc)
            return None, ItemFailure(record.page_number, record.object_number, "build", str(exc))

    def build_buffers(
        self, records: List[RawImageRecord]
    ) -> Tuple[List[ProcessedImageRecord], List[ItemFailure]]:
        """Run the buffer phase over every raw record."""

        processed: List[ProcessedImageRecord] = []
        failures: List[ItemFailure] = []
        if not records:
            return processed, failures

        with time_block(LOGGER, "buffer phase"):
            with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
                for result, failure in executor.map(self._build, records):
                    if result is not None:
                        processed.append(result)
                    if failure is not None:
                        failures.append(failure)
        return processed, failures

    def run(self) -> PipelineResult:
        """Extract and validate every image of the document.

        Raises:
            ExtractionCancelledError: If ``cancel_event`` is set at a phase
                boundary.
        """

        self._check_cancelled("page phase")
        raw_records, failures = self.extract_pages()

        self._check_cancelled("buffer phase")
        processed, build_failures = self.build_buffers(raw_records)
        failures.extend(build_failures)

        return PipelineResult(
            processed=processed,
            failures=failures,
            pages=self.document.num_pages,
        )


__all__ = ["ExtractionPipeline"]
