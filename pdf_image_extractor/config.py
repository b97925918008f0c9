"""Runtime options for the extractor and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .pixels import PixelFormat

ENV_WORKERS = "PDF_IMAGE_EXTRACTOR_WORKERS"
ENV_PIXEL_FORMAT = "PDF_IMAGE_EXTRACTOR_PIXEL_FORMAT"
ENV_COMPRESS_LEVEL = "PDF_IMAGE_EXTRACTOR_COMPRESS_LEVEL"

# zlib level 1 trades output size for encode speed
DEFAULT_COMPRESS_LEVEL = 1


def default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass(frozen=True)
class ExtractorOptions:
    """Options controlling a single extraction run."""

    max_workers: int = 0
    pixel_format: PixelFormat = PixelFormat.RGB
    compress_level: int = DEFAULT_COMPRESS_LEVEL
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.max_workers <= 0:
            object.__setattr__(self, "max_workers", default_workers())
        if not isinstance(self.pixel_format, PixelFormat):
            object.__setattr__(
                self, "pixel_format", _parse_pixel_format("pixel_format", self.pixel_format)
            )
        if not 0 <= self.compress_level <= 9:
            raise ConfigurationError(
                f"Compress level must be between 0 and 9, got {self.compress_level}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ExtractorOptions":
        """Build options from ``PDF_IMAGE_EXTRACTOR_*`` variables.

        Keyword ``overrides`` whose value is not ``None`` win over the
        environment, which is how CLI flags are applied.
        """

        env = os.environ if environ is None else environ
        values = {}

        workers = env.get(ENV_WORKERS)
        if workers is not None and workers.strip():
            values["max_workers"] = _parse_int(ENV_WORKERS, workers)

        pixel_format = env.get(ENV_PIXEL_FORMAT)
        if pixel_format is not None and pixel_format.strip():
            values["pixel_format"] = _parse_pixel_format(ENV_PIXEL_FORMAT, pixel_format)

        level = env.get(ENV_COMPRESS_LEVEL)
        if level is not None and level.strip():
            values["compress_level"] = _parse_int(ENV_COMPRESS_LEVEL, level)

        for key, value in overrides.items():
            if value is None:
                continue
            if key == "pixel_format":
                value = _parse_pixel_format(key, value)
            values[key] = value

        return cls(**values)

    def with_dry_run(self, dry_run: bool) -> "ExtractorOptions":
        return replace(self, dry_run=dry_run)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_pixel_format(name: str, raw) -> PixelFormat:
    try:
        return PixelFormat.parse(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}: {exc}") from exc


__all__ = ["ExtractorOptions", "default_workers"]
