"""
PDF Image Extractor - Extract embedded raster images from PDF files.

Every image XObject of every page is decoded to raw samples, validated
against its declared dimensions and written as a standalone PNG file named
``{stem}_{page}_{object}.png``. Pages are processed in parallel while all
access to the document goes through a single locked resolver.

Quick Start:
    >>> from pdf_image_extractor import ImageExtractor
    >>> report = ImageExtractor('report.pdf').extract()
    >>> report.files
    ['.../report/report_0_0.png']

Main Classes:
    - ImageExtractor: Opens a document and runs the whole extraction
    - ExtractionPipeline: The two-phase page / buffer pipeline
    - PixelBuffer: Zero-copy pixel grid over decoded samples

Data Classes:
    - RawImageRecord, ProcessedImageRecord: Per-image pipeline records
    - ExtractionReport: Result of a complete run

Exceptions:
    - ImageExtractorException: Base exception
    - DocumentOpenError, OutputDirectoryError: Fatal errors
    - ResolutionError, ExtractionError, DimensionMismatchError, OutputError:
      Errors scoped to a single image

For CLI usage, use the 'pdf-image-extractor' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF Image Extractor Contributors"
__license__ = "MIT"

# Core classes
from pdf_image_extractor.extractor import ImageExtractor, extract_images
from pdf_image_extractor.pipeline import ExtractionPipeline
from pdf_image_extractor.document import PDFDocumentAdapter
from pdf_image_extractor.resolver import ResolverProxy
from pdf_image_extractor.pixels import PixelBuffer, PixelFormat, build_pixel_buffer
from pdf_image_extractor.locator import locate_images
from pdf_image_extractor.raw import extract_raw_image
from pdf_image_extractor.writer import OutputWriter, output_path
from pdf_image_extractor.config import ExtractorOptions

# Data types
from pdf_image_extractor.types import (
    ExtractionReport,
    ImageResource,
    ItemFailure,
    PageHandle,
    PipelineResult,
    ProcessedImageRecord,
    RawImageRecord,
)

# Exceptions
from pdf_image_extractor.exceptions import (
    ImageExtractorException,
    DocumentOpenError,
    EncryptedDocumentError,
    OutputDirectoryError,
    OutputDirectoryNotEmptyError,
    ConfigurationError,
    ExtractionCancelledError,
    PageResolutionError,
    ResolutionError,
    ExtractionError,
    DimensionMismatchError,
    OutputError,
)

__all__ = [
    # Main classes
    "ImageExtractor",
    "extract_images",
    "ExtractionPipeline",
    "PDFDocumentAdapter",
    "ResolverProxy",
    "PixelBuffer",
    "PixelFormat",
    "build_pixel_buffer",
    "locate_images",
    "extract_raw_image",
    "OutputWriter",
    "output_path",
    "ExtractorOptions",
    # Data types
    "ExtractionReport",
    "ImageResource",
    "ItemFailure",
    "PageHandle",
    "PipelineResult",
    "ProcessedImageRecord",
    "RawImageRecord",
    # Exceptions
    "ImageExtractorException",
    "DocumentOpenError",
    "EncryptedDocumentError",
    "OutputDirectoryError",
    "OutputDirectoryNotEmptyError",
    "ConfigurationError",
    "ExtractionCancelledError",
    "PageResolutionError",
    "ResolutionError",
    "ExtractionError",
    "DimensionMismatchError",
    "OutputError",
    # Version info
    "__version__",
]
