"""Read the declared size and decoded samples of an image XObject."""

from __future__ import annotations

import io
import logging
from typing import Any, List

from PIL import Image

from .exceptions import ExtractionError
from .resolver import ResolverProxy
from .types import ImageResource, RawImageRecord

LOGGER = logging.getLogger(__name__)

# pypdf leaves these codestreams encoded; Pillow turns them into samples.
CODESTREAM_FILTERS = frozenset({"/DCTDecode", "/JPXDecode"})


def _filters(stream: Any) -> List[str]:
    value = stream.get("/Filter")
    if value is None:
        return []
    if hasattr(value, "get_object"):
        value = value.get_object()
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def _dimension(stream: Any, key: str) -> int:
    value = stream.get(key)
    if hasattr(value, "get_object"):
        value = value.get_object()
    if value is None:
        raise ExtractionError(f"Image dictionary is missing {key}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ExtractionError(f"Image {key} is not an integer: {value!r}") from exc


def _decode_codestream(data: bytes) -> bytes:
    with Image.open(io.BytesIO(data)) as img:
        return img.tobytes()


def extract_raw_image(
    resource: ImageResource,
    resolver: ResolverProxy,
    page_number: int,
    object_number: int,
) -> RawImageRecord:
    """Return the decoded samples of ``resource`` tagged with its identity.

    Raises:
        ExtractionError: If the dictionary cannot be read or the samples
            cannot be decoded.
    """

    LOGGER.debug("getting data for image %d on page %d", object_number, page_number)
    stream = resource.stream

    try:
        width, height, filters = resolver.call(
            lambda: (_dimension(stream, "/Width"), _dimension(stream, "/Height"), _filters(stream))
        )
        data = resolver.call(stream.get_data)
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionError(
            f"Failed to decode image {object_number} ({resource.name}) on page {page_number}: {exc}"
        ) from exc

    if filters and filters[-1] in CODESTREAM_FILTERS:
        try:
            data = _decode_codestream(data)
        except Exception as exc:
            raise ExtractionError(
                f"Failed to decode {filters[-1]} image {object_number} on page {page_number}: {exc}"
            ) from exc

    LOGGER.debug("got data for image %d on page %d", object_number, page_number)
    return RawImageRecord(
        page_number=page_number,
        object_number=object_number,
        width=width,
        height=height,
        raw_bytes=bytes(data),
    )


__all__ = ["extract_raw_image", "CODESTREAM_FILTERS"]
