from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PIL import Image

from pdf_image_extractor.exceptions import OutputError
from pdf_image_extractor.pixels import build_processed_image
from pdf_image_extractor.types import RawImageRecord
from pdf_image_extractor.writer import OutputWriter, output_filename, output_path


def _processed(page: int = 0, obj: int = 0, width: int = 4, height: int = 4):
    data = bytes((index * 5) % 256 for index in range(width * height * 3))
    record = RawImageRecord(page, obj, width, height, data)
    return build_processed_image(record)


def test_output_path_is_deterministic(tmp_path: Path) -> None:
    assert output_filename("report", 2, 1) == "report_2_1.png"
    assert output_path(tmp_path, "report", 2, 1) == tmp_path / "report_2_1.png"


def test_write_round_trips_pixels(tmp_path: Path) -> None:
    processed = _processed(page=1, obj=3)
    writer = OutputWriter(tmp_path, "doc")

    destination = writer.write(processed)

    assert destination == tmp_path / "doc_1_3.png"
    with Image.open(destination) as image:
        assert image.format == "PNG"
        assert image.mode == "RGB"
        assert image.size == (4, 4)
        assert image.tobytes() == processed.pixel_buffer.tobytes()


def test_dry_run_writes_nothing(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="pdf_image_extractor")
    target = tmp_path / "out"
    writer = OutputWriter(target, "doc", dry_run=True)

    destination = writer.write(_processed())

    assert destination == target / "doc_0_0.png"
    assert not target.exists()
    assert caplog.messages == [f"would write image 0 on page 0 to {destination}"]


def test_existing_file_is_never_overwritten(tmp_path: Path) -> None:
    existing = tmp_path / "doc_0_0.png"
    existing.write_bytes(b"keep me")

    with pytest.raises(OutputError):
        OutputWriter(tmp_path, "doc").write(_processed())
    assert existing.read_bytes() == b"keep me"


def test_missing_directory_is_an_output_error(tmp_path: Path) -> None:
    with pytest.raises(OutputError):
        OutputWriter(tmp_path / "missing", "doc").write(_processed())


def test_encoder_failure_removes_partial_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_save(self, fp, *args, **kwargs):
        fp.write(b"\x89PNG partial")
        raise OSError("encoder exploded")

    monkeypatch.setattr(Image.Image, "save", broken_save)

    with pytest.raises(OutputError):
        OutputWriter(tmp_path, "doc").write(_processed())
    assert list(tmp_path.iterdir()) == []
