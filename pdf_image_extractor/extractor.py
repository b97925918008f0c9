"""Image extraction built around :class:`PDFDocumentAdapter`."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from .backends.base import PDFBackend
from .config import ExtractorOptions
from .document import PDFDocumentAdapter
from .exceptions import ExtractionCancelledError, OutputError
from .pipeline import ExtractionPipeline
from .types import ExtractionReport, ItemFailure, PipelineResult
from .utils import default_output_dir, output_stem, prepare_output_dir
from .writer import OutputWriter

LOGGER = logging.getLogger(__name__)


class ImageExtractor:
    """High-level extraction of every embedded image of one PDF."""

    def __init__(
        self,
        input_path: Union[str, Path],
        *,
        output_dir: Optional[Union[str, Path]] = None,
        password: Optional[str] = None,
        options: Optional[ExtractorOptions] = None,
        backend: Optional[PDFBackend] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.input_path = str(input_path)
        self.stem = output_stem(input_path)
        self.output_dir = Path(output_dir) if output_dir is not None else default_output_dir(input_path)
        self.password = password
        self.options = options or ExtractorOptions()
        self.backend = backend
        self.cancel_event = cancel_event

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def open_document(self) -> PDFDocumentAdapter:
        return PDFDocumentAdapter(self.input_path, password=self.password, backend=self.backend)

    def run_pipeline(self, document: Optional[PDFDocumentAdapter] = None) -> PipelineResult:
        """Run both pipeline phases without writing, opening the document if needed."""
        if document is None:
            document = self.open_document()
        return ExtractionPipeline(document, self.options, cancel_event=self.cancel_event).run()

    def extract(
        self,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> ExtractionReport:
        """Run the whole extraction and write one PNG per decoded image.

        Raises:
            OutputDirectoryNotEmptyError: Before any document access, if the
                output directory already has entries.
            OutputDirectoryError: If the output directory cannot be created.
            DocumentOpenError: If the input cannot be opened. The output
                directory is left untouched.
            ExtractionCancelledError: If ``cancel_event`` is set.
        """

        prepare_output_dir(self.output_dir, create=False)
        document = self.open_document()
        if not self.dry_run:
            prepare_output_dir(self.output_dir)

        result = self.run_pipeline(document)
        LOGGER.debug("built %d pixel buffers", len(result.processed))

        report = ExtractionReport(
            source_file=self.input_path,
            output_dir=str(self.output_dir),
            dry_run=self.dry_run,
            pages=result.pages,
            processed=len(result.processed),
            failures=list(result.failures),
        )

        writer = OutputWriter(
            self.output_dir,
            self.stem,
            dry_run=self.dry_run,
            compress_level=self.options.compress_level,
        )
        total = len(result.processed)
        for index, record in enumerate(result.processed, start=1):
            if self._cancelled():
                LOGGER.warning("Cancelled after writing %d of %d images", report.written, total)
                raise ExtractionCancelledError(
                    f"Extraction cancelled after {report.written} of {total} images"
                )
            try:
                destination = writer.write(record)
            except OutputError as exc:
                LOGGER.error("%s", exc)
                report.failures.append(
                    ItemFailure(record.page_number, record.object_number, "write", str(exc))
                )
            else:
                report.files.append(str(destination))
                if not self.dry_run:
                    report.written += 1

            if progress_callback:
                progress_callback(index, total)

        if report.page_failures:
            LOGGER.warning("%d page-level failures", report.page_failures)
        LOGGER.info(
            "processed %d images (%d failed)", report.succeeded, report.failed
        )
        return report


def extract_images(
    input_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    dry_run: bool = False,
    password: Optional[str] = None,
    options: Optional[ExtractorOptions] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ExtractionReport:
    """Convenience wrapper around :meth:`ImageExtractor.extract`."""

    options = (options or ExtractorOptions()).with_dry_run(dry_run)
    extractor = ImageExtractor(
        input_path,
        output_dir=output_dir,
        password=password,
        options=options,
        cancel_event=cancel_event,
    )
    return extractor.extract()


__all__ = ["ImageExtractor", "extract_images"]
