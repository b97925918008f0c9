from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_image_extractor.backends import PypdfBackend  # noqa: E402


@dataclass
class ImageSpec:
    """Describes one XObject to embed in a generated test PDF."""

    width: int = 4
    height: int = 4
    data: Optional[bytes] = None
    subtype: str = "/Image"
    colorspace: str = "/DeviceRGB"
    filter: Optional[str] = None
    omit_width: bool = False

    def payload(self) -> bytes:
        if self.data is not None:
            return self.data
        return bytes(index % 256 for index in range(self.width * self.height * 3))


def rgb_bytes(width: int, height: int, seed: int = 0) -> bytes:
    return bytes((seed + index * 7) % 256 for index in range(width * height * 3))


def jpeg_bytes(width: int, height: int) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 90)).save(buffer, format="JPEG")
    return buffer.getvalue()


def _xobject(image: ImageSpec) -> DecodedStreamObject:
    stream = DecodedStreamObject()
    stream.set_data(image.payload())
    stream[NameObject("/Type")] = NameObject("/XObject")
    stream[NameObject("/Subtype")] = NameObject(image.subtype)
    if image.subtype == "/Form":
        stream[NameObject("/BBox")] = ArrayObject(
            [NumberObject(0), NumberObject(0), NumberObject(10), NumberObject(10)]
        )
        return stream

    if not image.omit_width:
        stream[NameObject("/Width")] = NumberObject(image.width)
    stream[NameObject("/Height")] = NumberObject(image.height)
    stream[NameObject("/ColorSpace")] = NameObject(image.colorspace)
    stream[NameObject("/BitsPerComponent")] = NumberObject(8)
    if image.filter is not None:
        stream[NameObject("/Filter")] = NameObject(image.filter)
    return stream


def write_pdf(path: Path, pages: Sequence[Iterable[ImageSpec]]) -> Path:
    writer = PdfWriter()
    for page_specs in pages:
        page = writer.add_blank_page(width=72, height=72)
        xobjects = DictionaryObject()
        for index, image in enumerate(page_specs):
            xobjects[NameObject(f"/Im{index}")] = writer._add_object(_xobject(image))
        if xobjects:
            page[NameObject("/Resources")] = DictionaryObject(
                {NameObject("/XObject"): xobjects}
            )
    with path.open("wb") as stream:
        writer.write(stream)
    return path


def encrypt_pdf(source: Path, target: Path, user_password: str, owner_password: str = "owner") -> Path:
    """Copy ``source`` to ``target`` with standard RC4 encryption."""
    reader = PdfReader(str(source))
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    writer.encrypt(user_password, owner_password)
    with target.open("wb") as stream:
        writer.write(stream)
    return target


PdfFactory = Callable[[str, Sequence[Iterable[ImageSpec]]], Path]


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> PdfFactory:
    def _create(filename: str, pages: Sequence[Iterable[ImageSpec]]) -> Path:
        source_dir = tmp_path / "input"
        source_dir.mkdir(exist_ok=True)
        return write_pdf(source_dir / filename, pages)

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: PdfFactory) -> Path:
    """Two pages: one 4x4 RGB image on page 0, nothing on page 1."""
    return pdf_factory("sample.pdf", [[ImageSpec(4, 4, rgb_bytes(4, 4))], []])


@pytest.fixture()
def numbered_pdf(pdf_factory: PdfFactory) -> Path:
    """Pages with 2 and 3 images, plus a form XObject that must be ignored."""
    return pdf_factory(
        "numbered.pdf",
        [
            [ImageSpec(2, 2, rgb_bytes(2, 2, 1)), ImageSpec(3, 1, rgb_bytes(3, 1, 2))],
            [
                ImageSpec(1, 1, rgb_bytes(1, 1, 3)),
                ImageSpec(subtype="/Form", data=b""),
                ImageSpec(2, 1, rgb_bytes(2, 1, 4)),
                ImageSpec(1, 2, rgb_bytes(1, 2, 5)),
            ],
        ],
    )


class FlakyBackend(PypdfBackend):
    """pypdf backend whose listed pages fail to resolve."""

    def __init__(self, failing_pages: Iterable[int]) -> None:
        self.failing_pages = set(failing_pages)

    def load(self, pdf_path: str, password: Optional[str] = None):
        document = super().load(pdf_path, password=password)
        original = document.get_page
        failing = self.failing_pages

        def get_page(index: int) -> object:
            if index in failing:
                raise PdfReadError(f"broken page {index}")
            return original(index)

        document.get_page = get_page  # type: ignore[method-assign]
        return document


@pytest.fixture()
def flaky_backend() -> Callable[[List[int]], FlakyBackend]:
    return FlakyBackend
