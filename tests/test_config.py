from __future__ import annotations

from pathlib import Path

import pytest

from pdf_image_extractor.config import (
    ENV_COMPRESS_LEVEL,
    ENV_PIXEL_FORMAT,
    ENV_WORKERS,
    ExtractorOptions,
    default_workers,
)
from pdf_image_extractor.exceptions import (
    ConfigurationError,
    OutputDirectoryError,
    OutputDirectoryNotEmptyError,
)
from pdf_image_extractor.pixels import PixelFormat
from pdf_image_extractor.utils import default_output_dir, output_stem, prepare_output_dir


def test_defaults() -> None:
    options = ExtractorOptions()

    assert options.max_workers == default_workers()
    assert options.pixel_format is PixelFormat.RGB
    assert options.compress_level == 1
    assert options.dry_run is False


def test_from_env_reads_overrides() -> None:
    env = {ENV_WORKERS: "3", ENV_PIXEL_FORMAT: "rgba", ENV_COMPRESS_LEVEL: "6"}

    options = ExtractorOptions.from_env(env)

    assert options.max_workers == 3
    assert options.pixel_format is PixelFormat.RGBA
    assert options.compress_level == 6


def test_explicit_values_win_over_env() -> None:
    env = {ENV_WORKERS: "3", ENV_PIXEL_FORMAT: "L"}

    options = ExtractorOptions.from_env(env, max_workers=9, pixel_format=None, dry_run=True)

    assert options.max_workers == 9
    assert options.pixel_format is PixelFormat.L
    assert options.dry_run is True


@pytest.mark.parametrize(
    "env",
    [
        {ENV_WORKERS: "many"},
        {ENV_PIXEL_FORMAT: "CMYK"},
        {ENV_COMPRESS_LEVEL: "12"},
    ],
)
def test_invalid_env_raises_configuration_error(env) -> None:
    with pytest.raises(ConfigurationError):
        ExtractorOptions.from_env(env)


def test_output_dir_is_named_after_stem(tmp_path: Path) -> None:
    assert output_stem("/data/report.v2.pdf") == "report.v2"
    assert default_output_dir("/data/report.pdf", tmp_path) == tmp_path / "report"


def test_prepare_output_dir_creates_missing_directory(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "report"

    assert prepare_output_dir(target) == target
    assert target.is_dir()


def test_prepare_output_dir_accepts_empty_directory(tmp_path: Path) -> None:
    assert prepare_output_dir(tmp_path) == tmp_path


def test_prepare_output_dir_rejects_non_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "leftover.png").write_bytes(b"")

    with pytest.raises(OutputDirectoryNotEmptyError):
        prepare_output_dir(tmp_path)


def test_prepare_output_dir_without_create_leaves_filesystem_alone(tmp_path: Path) -> None:
    target = tmp_path / "report"

    prepare_output_dir(target, create=False)

    assert not target.exists()


def test_prepare_output_dir_rejects_file_path(tmp_path: Path) -> None:
    target = tmp_path / "report"
    target.write_bytes(b"")

    with pytest.raises(OutputDirectoryError):
        prepare_output_dir(target)


def test_prepare_output_dir_wraps_mkdir_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")

    with pytest.raises(OutputDirectoryError) as excinfo:
        prepare_output_dir(blocker / "report")

    assert isinstance(excinfo.value.__cause__, OSError)
