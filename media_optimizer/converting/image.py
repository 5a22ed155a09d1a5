#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Still-image conversion for the Media Optimizer.
Encodes each source to AVIF and, unless disabled, WebP with Pillow.
"""

import logging
import warnings
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from PIL import Image

from ..config import AVIF_EXT, WEBP_EXT, EncodeSettings, OptimizerConfig
from ..models.media_file import SourceFile
from ..models.result import ConversionResult
from ..utils.path import ensure_dir, remove_source
from .heic import ImageConversionError, heif_intermediate

logger = logging.getLogger(__name__)

# Suppress PIL warnings
warnings.filterwarnings("ignore", category=UserWarning,
                       message=".*Palette images with Transparency expressed in bytes.*")

# sharp-style effort runs 0 (fastest) to 9; libavif speed runs the other way
MAX_AVIF_EFFORT = 9


def encoder_options(fmt: str, settings: EncodeSettings) -> Dict[str, Any]:
    """Translate quality/effort into Pillow save() keyword arguments."""
    if fmt == "AVIF":
        return {"quality": settings.quality, "speed": MAX_AVIF_EFFORT - settings.effort}
    if fmt == "WEBP":
        return {"quality": settings.quality, "method": settings.effort}
    raise ValueError(f"Unsupported output format: {fmt}")


class ImageConverter:
    """Converts one image at a time into the configured output formats."""

    def __init__(self, config: OptimizerConfig):
        self.config = config

    def formats(self) -> List[Tuple[str, str, EncodeSettings]]:
        """(Pillow format, extension, settings) for each enabled output."""
        out = [("AVIF", AVIF_EXT, self.config.avif)]
        if self.config.webp is not None:
            out.append(("WEBP", WEBP_EXT, self.config.webp))
        return out

    def convert(self, source: SourceFile) -> ConversionResult:
        """Encode source into every enabled format, then drop the source on success."""
        result = ConversionResult(source.path)
        ensure_dir(self.config.output_dir)

        try:
            with self._readable(source) as readable:
                for fmt, ext, settings in self.formats():
                    target = source.output_path(self.config.output_dir, ext)
                    try:
                        self.encode(readable, target, fmt, settings)
                    except Exception as e:
                        logger.error("%s conversion failed for %s: %s", fmt, source.path, e)
                        result.errors.append(f"{fmt}: {e}")
                        continue
                    logger.info("%s written: %s -> %s", fmt, source.path, target)
                    result.outputs.append(target)
        except ImageConversionError as e:
            logger.error("%s", e)
            result.errors.append(str(e))

        if result.succeeded and self.config.delete_sources:
            result.source_deleted = remove_source(source.path)

        return result

    def encode(self, src: Path, target: Path, fmt: str, settings: EncodeSettings) -> Path:
        with Image.open(src) as img:
            img.load()
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA" if "A" in img.getbands() or "transparency" in img.info else "RGB")
            img.save(target, format=fmt, **encoder_options(fmt, settings))
        return target

    @contextmanager
    def _readable(self, source: SourceFile) -> Iterator[Path]:
        if source.is_heif:
            with heif_intermediate(source.path) as tmp:
                yield tmp
        else:
            with nullcontext(source.path) as p:
                yield p
