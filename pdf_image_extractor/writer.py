"""Deterministic output naming and PNG encoding of processed images."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .config import DEFAULT_COMPRESS_LEVEL
from .exceptions import OutputError
from .types import ProcessedImageRecord

LOGGER = logging.getLogger(__name__)

OUTPUT_EXTENSION = ".png"


def output_filename(stem: str, page_number: int, object_number: int) -> str:
    return f"{stem}_{page_number}_{object_number}{OUTPUT_EXTENSION}"


def output_path(
    output_dir: Union[str, Path],
    stem: str,
    page_number: int,
    object_number: int,
) -> Path:
    """Return ``{output_dir}/{stem}_{page_number}_{object_number}.png``."""
    return Path(output_dir) / output_filename(stem, page_number, object_number)


class OutputWriter:
    """Encode processed images as PNG files inside one output directory."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        stem: str,
        *,
        dry_run: bool = False,
        compress_level: int = DEFAULT_COMPRESS_LEVEL,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.stem = stem
        self.dry_run = dry_run
        self.compress_level = compress_level

    def path_for(self, record: ProcessedImageRecord) -> Path:
        return output_path(self.output_dir, self.stem, record.page_number, record.object_number)

    def write(self, record: ProcessedImageRecord) -> Path:
        """Write ``record`` and return its path.

        In dry-run mode nothing touches the filesystem.

        Raises:
            OutputError: If the file already exists, cannot be created, or
                the encoder fails. A partially written file is removed.
        """

        destination = self.path_for(record)
        if self.dry_run:
            LOGGER.info(
                "would write image %d on page %d to %s",
                record.object_number,
                record.page_number,
                destination,
            )
            return destination

        try:
            handle = destination.open("xb")
        except FileExistsError as exc:
            raise OutputError(f"Refusing to overwrite existing file: {destination}") from exc
        except OSError as exc:
            raise OutputError(f"Cannot create {destination}: {exc}") from exc

        try:
            with handle:
                image = record.pixel_buffer.to_image()
                # Pillow's PNG encoder picks a row filter per scanline
                image.save(handle, format="PNG", compress_level=self.compress_level)
        except Exception as exc:
            destination.unlink(missing_ok=True)
            raise OutputError(f"Failed to encode {destination}: {exc}") from exc

        LOGGER.info(
            "writing image %d on page %d to %s",
            record.object_number,
            record.page_number,
            destination,
        )
        return destination


__all__ = ["OutputWriter", "output_path", "output_filename", "OUTPUT_EXTENSION"]
