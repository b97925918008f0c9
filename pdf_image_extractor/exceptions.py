"""
Custom exceptions for PDF Image Extractor.

This module defines all custom exceptions used throughout the library.
Fatal errors abort a run before any output is produced; the remaining
errors are scoped to a single page, reference or image and are recorded
as failures while the rest of the batch continues.
"""


class ImageExtractorException(Exception):
    """Base exception for all PDF Image Extractor errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown image extraction error occurred."


class DocumentOpenError(ImageExtractorException):
    """Raised when the input document is unreadable or malformed."""

    @property
    def default_message(self) -> str:
        return "Unable to open PDF document."


class EncryptedDocumentError(DocumentOpenError):
    """Raised when the document is encrypted and cannot be decrypted."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class OutputDirectoryError(ImageExtractorException):
    """Raised when the output directory cannot be prepared."""

    @property
    def default_message(self) -> str:
        return "Unable to prepare output directory."


class OutputDirectoryNotEmptyError(OutputDirectoryError):
    """Raised when the output directory already contains entries."""

    @property
    def default_message(self) -> str:
        return "Output directory exists and is not empty."


class ConfigurationError(ImageExtractorException):
    """Raised when an option or environment override is invalid."""

    @property
    def default_message(self) -> str:
        return "Invalid extractor configuration."


class ExtractionCancelledError(ImageExtractorException):
    """Raised when a run is cancelled between pipeline phases."""

    @property
    def default_message(self) -> str:
        return "Image extraction was cancelled."


class PageResolutionError(ImageExtractorException):
    """Raised when a page or its resource dictionary cannot be resolved."""

    def __init__(self, message: str = "", *, page_number: int = -1) -> None:
        super().__init__(message)
        self.page_number = page_number

    @property
    def default_message(self) -> str:
        return "Unable to resolve page."


class ResolutionError(ImageExtractorException):
    """Raised when a single object reference fails to resolve."""

    @property
    def default_message(self) -> str:
        return "Unable to resolve object reference."


class ExtractionError(ImageExtractorException):
    """Raised when an image dictionary or its sample data cannot be read."""

    @property
    def default_message(self) -> str:
        return "Unable to extract image samples."


class DimensionMismatchError(ImageExtractorException):
    """Raised when raw sample length does not match the declared dimensions."""

    def __init__(self, message: str = "", *, expected: int = 0, actual: int = 0) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    @property
    def default_message(self) -> str:
        return "Raw sample length does not match image dimensions."


class OutputError(ImageExtractorException):
    """Raised when an output file cannot be created or encoded."""

    @property
    def default_message(self) -> str:
        return "Unable to write output image."
