"""Adapter around a backend-specific PDF document and its shared resolver."""

from __future__ import annotations

import logging
from typing import List, Optional

from .backends import BackendDocument, PypdfBackend
from .backends.base import PDFBackend
from .exceptions import PageResolutionError
from .resolver import ResolverProxy
from .types import PageHandle

LOGGER = logging.getLogger(__name__)


class PDFDocumentAdapter:
    """Opened document whose pages resolve lazily through one resolver.

    The adapter is created once per run and never mutated afterwards.
    Every page lookup goes through :attr:`resolver` so page resolution
    serializes with the image lookups running on other workers.
    """

    def __init__(
        self,
        pdf_path: str,
        password: Optional[str] = None,
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        loader: PDFBackend = backend or PypdfBackend()
        self._document: BackendDocument = loader.load(str(pdf_path), password=password)
        self.resolver = ResolverProxy()

    @property
    def num_pages(self) -> int:
        return self._document.num_pages

    def page(self, page_number: int) -> PageHandle:
        """Resolve one page, capturing failure instead of raising."""
        try:
            page = self.resolver.call(self._document.get_page, page_number)
        except Exception as exc:
            LOGGER.warning("Failed to resolve page %d: %s", page_number, exc)
            error = PageResolutionError(
                f"Failed to resolve page {page_number}: {exc}", page_number=page_number
            )
            return PageHandle(page_number=page_number, error=error)
        return PageHandle(page_number=page_number, page=page)

    def page_numbers(self) -> List[int]:
        return list(range(self.num_pages))


__all__ = ["PDFDocumentAdapter"]
