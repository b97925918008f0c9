"""Utility helpers for PDF Image Extractor."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from .exceptions import OutputDirectoryError, OutputDirectoryNotEmptyError

PathLike = Union[str, os.PathLike]


def configure_logging(verbose: bool = False) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.debug("%s completed in %.2fs", message, elapsed)


def output_stem(input_path: PathLike) -> str:
    """Return the input file name with its extension stripped."""
    return Path(input_path).stem


def default_output_dir(input_path: PathLike, base_dir: Optional[PathLike] = None) -> Path:
    """Return ``{base_dir}/{stem}``, relative to the working directory by default."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return base / output_stem(input_path)


def prepare_output_dir(directory: PathLike, *, create: bool = True) -> Path:
    """Create ``directory`` if needed and require it to be empty.

    With ``create=False`` a missing directory is accepted as is, which keeps
    dry runs free of filesystem writes.

    Raises:
        OutputDirectoryNotEmptyError: If the directory already has entries.
        OutputDirectoryError: If the directory cannot be created.
    """

    path = Path(directory)
    if path.exists() and not path.is_dir():
        raise OutputDirectoryError(f"Output path {path} exists and is not a directory.")
    if create:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(f"Cannot create output directory {path}: {exc}") from exc
    elif not path.exists():
        return path
    try:
        has_entries = any(path.iterdir())
    except OSError as exc:
        raise OutputDirectoryError(f"Cannot list output directory {path}: {exc}") from exc
    if has_entries:
        raise OutputDirectoryNotEmptyError(
            f"Output directory {path} exists and is not empty. "
            "Remove its contents or choose another input name."
        )
    return path


def validate_pdf(pdf_path: PathLike) -> Tuple[bool, str]:
    """Perform lightweight validation of the input path before opening it."""

    path = str(pdf_path)
    if not os.path.exists(path):
        return False, f"File not found: {path}"

    if not os.path.isfile(path):
        return False, f"Path is not a file: {path}"

    if not os.access(path, os.R_OK):
        return False, f"Cannot read file (permission denied): {path}"

    return True, ""


__all__ = [
    "configure_logging",
    "time_block",
    "output_stem",
    "default_output_dir",
    "prepare_output_dir",
    "validate_pdf",
]
