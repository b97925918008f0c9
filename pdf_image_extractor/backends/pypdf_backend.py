"""pypdf backend implementation for PDF Image Extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pypdf import PasswordType, PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import DocumentOpenError, EncryptedDocumentError
from .base import BackendDocument, PDFBackend


@dataclass
class PypdfDocument(BackendDocument):
    pdf_reader: PdfReader = field(repr=False, default=None)  # type: ignore[assignment]

    def get_page(self, index: int) -> object:
        return self.pdf_reader.pages[index]


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, pdf_path: str, password: str | None = None) -> PypdfDocument:
        path = Path(pdf_path)
        if not path.exists() or not path.is_file():
            raise DocumentOpenError(f"PDF file not found: {pdf_path}")

        try:
            reader = PdfReader(str(path))
        except PdfReadError as exc:
            raise DocumentOpenError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc
        except OSError as exc:
            raise DocumentOpenError(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc
        except Exception as exc:
            raise DocumentOpenError(f"Unexpected error reading PDF: {pdf_path}. Error: {exc}") from exc

        if reader.is_encrypted:
            self._decrypt(reader, password)

        try:
            num_pages = len(reader.pages)
        except Exception as exc:
            raise DocumentOpenError(f"Unable to read page tree: {pdf_path}. Error: {exc}") from exc

        return PypdfDocument(num_pages=num_pages, pdf_reader=reader)

    @staticmethod
    def _decrypt(reader: PdfReader, password: str | None) -> None:
        # Permission-only encryption opens with the empty user password.
        try:
            result = reader.decrypt(password or "")
        except Exception as exc:
            raise EncryptedDocumentError(f"Unable to decrypt PDF: {exc}") from exc

        if result == PasswordType.NOT_DECRYPTED:
            if password:
                raise EncryptedDocumentError("Failed to decrypt PDF with supplied password.")
            raise EncryptedDocumentError("PDF is encrypted. Supply a password to process this file.")
