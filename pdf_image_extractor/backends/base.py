"""Backend protocol for reading PDF documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    num_pages: int

    def get_page(self, index: int) -> object:
        raise NotImplementedError


class PDFBackend(Protocol):
    """Protocol defining backend operations for PDF reading."""

    def load(self, pdf_path: str, password: str | None = None) -> BackendDocument:
        """Load a PDF file and return a backend document wrapper."""
