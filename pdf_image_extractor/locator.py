"""Locate the raster image XObjects attached to a page."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .exceptions import PageResolutionError, ResolutionError
from .resolver import ResolverProxy
from .types import ImageResource, ItemFailure, PageHandle

LOGGER = logging.getLogger(__name__)

IMAGE_SUBTYPE = "/Image"

LocatedImage = Tuple[int, ImageResource]


def _xobject_entries(page: Any, resolver: ResolverProxy) -> List[Tuple[str, Any]]:
    """Return the ``(name, reference)`` pairs of the page's ``/XObject`` dictionary."""

    try:
        resources = resolver.resolve(resolver.call(page.get, "/Resources"))
        if resources is None:
            return []
        xobjects = resolver.resolve(resolver.call(resources.get, "/XObject"))
        if xobjects is None:
            return []
        return resolver.call(lambda: list(xobjects.items()))
    except (ResolutionError, AttributeError, TypeError) as exc:
        raise PageResolutionError(f"Unable to read page resources: {exc}") from exc


def locate_images(
    handle: PageHandle,
    resolver: ResolverProxy,
    failures: Optional[List[ItemFailure]] = None,
) -> List[LocatedImage]:
    """Return the image resources of one page, numbered from zero.

    A page that failed to resolve, or whose resource dictionaries cannot
    be read, yields no images. A single XObject that fails to resolve is
    skipped and recorded in ``failures``; it does not receive an index.
    """

    images: List[LocatedImage] = []

    if handle.ok:
        try:
            entries = _xobject_entries(handle.page, resolver)
        except PageResolutionError as exc:
            LOGGER.warning("Skipping page %d: %s", handle.page_number, exc)
            if failures is not None:
                failures.append(ItemFailure(handle.page_number, None, "locate", str(exc)))
            entries = []

        for name, reference in entries:
            try:
                xobject = resolver.resolve(reference)
            except ResolutionError as exc:
                LOGGER.warning(
                    "Skipping XObject %s on page %d: %s", name, handle.page_number, exc
                )
                if failures is not None:
                    failures.append(ItemFailure(handle.page_number, None, "locate", str(exc)))
                continue

            subtype = xobject.get("/Subtype") if hasattr(xobject, "get") else None
            if subtype != IMAGE_SUBTYPE:
                continue
            images.append((len(images), ImageResource(name=str(name), stream=xobject)))

    LOGGER.info("%d images found on page %d", len(images), handle.page_number)
    return images


__all__ = ["locate_images", "LocatedImage", "IMAGE_SUBTYPE"]
