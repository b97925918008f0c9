"""Pixel buffers built over raw sample bytes without copying."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

from PIL import Image

from .exceptions import DimensionMismatchError
from .types import ProcessedImageRecord, RawImageRecord


class PixelFormat(Enum):
    """Supported pixel layouts, named after the matching Pillow mode."""

    L = ("L", 1)
    RGB = ("RGB", 3)
    RGBA = ("RGBA", 4)

    def __init__(self, mode: str, bytes_per_pixel: int) -> None:
        self.mode = mode
        self.bytes_per_pixel = bytes_per_pixel

    @classmethod
    def parse(cls, value: Union[str, "PixelFormat"]) -> "PixelFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            choices = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown pixel format: {value!r}. Expected one of {choices}.") from None


class PixelBuffer:
    """
    A width x height grid of pixels viewing an immutable byte buffer.

    Rows are stored top to bottom, each row tightly packed left to right,
    so ``stride == width * bytes_per_pixel``. The buffer is read-only and
    shares memory with the bytes it was built from.
    """

    __slots__ = ("_view", "width", "height", "pixel_format", "stride")

    def __init__(self, data: bytes, width: int, height: int, pixel_format: PixelFormat) -> None:
        self._view = memoryview(data).toreadonly()
        self.width = width
        self.height = height
        self.pixel_format = pixel_format
        self.stride = width * pixel_format.bytes_per_pixel

    @property
    def mode(self) -> str:
        return self.pixel_format.mode

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def data(self) -> memoryview:
        return self._view

    def __len__(self) -> int:
        return len(self._view)

    def row(self, y: int) -> memoryview:
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of range for height {self.height}")
        start = y * self.stride
        return self._view[start:start + self.stride]

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        if not 0 <= x < self.width:
            raise IndexError(f"Column {x} out of range for width {self.width}")
        bpp = self.pixel_format.bytes_per_pixel
        start = x * bpp
        return tuple(self.row(y)[start:start + bpp])

    def tobytes(self) -> bytes:
        return self._view.tobytes()

    def to_image(self) -> Image.Image:
        """Return a Pillow image over this buffer.

        Pillow maps the memory directly for ``L`` and ``RGBA``; ``RGB`` is
        unpacked into its internal four-byte layout.
        """
        mode = self.pixel_format.mode
        return Image.frombuffer(mode, self.size, self._view, "raw", mode, 0, 1)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}, {self.pixel_format.mode})"


def expected_length(width: int, height: int, pixel_format: PixelFormat) -> int:
    return width * height * pixel_format.bytes_per_pixel


def build_pixel_buffer(
    record: RawImageRecord,
    pixel_format: PixelFormat = PixelFormat.RGB,
) -> PixelBuffer:
    """Validate ``record`` and view its bytes as a pixel grid.

    Raises:
        DimensionMismatchError: If the dimensions are not positive or the
            byte count differs from ``width * height * bytes_per_pixel``.
    """

    if record.width <= 0 or record.height <= 0:
        raise DimensionMismatchError(
            f"Invalid dimensions {record.width}x{record.height} for image "
            f"{record.object_number} on page {record.page_number}",
            expected=0,
            actual=len(record.raw_bytes),
        )

    expected = expected_length(record.width, record.height, pixel_format)
    actual = len(record.raw_bytes)
    if actual != expected:
        raise DimensionMismatchError(
            f"Image {record.object_number} on page {record.page_number} declares "
            f"{record.width}x{record.height} {pixel_format.mode} ({expected} bytes) "
            f"but has {actual} bytes of samples",
            expected=expected,
            actual=actual,
        )

    return PixelBuffer(record.raw_bytes, record.width, record.height, pixel_format)


def build_processed_image(
    record: RawImageRecord,
    pixel_format: PixelFormat = PixelFormat.RGB,
) -> ProcessedImageRecord:
    return ProcessedImageRecord(
        page_number=record.page_number,
        object_number=record.object_number,
        pixel_buffer=build_pixel_buffer(record, pixel_format),
    )


__all__ = [
    "PixelFormat",
    "PixelBuffer",
    "build_pixel_buffer",
    "build_processed_image",
    "expected_length",
]
