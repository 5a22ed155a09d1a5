#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HEIC/HEIF pre-conversion.

Pillow cannot decode HEIF containers on its own, so these inputs go through
a platform tool first (sips on macOS, libheif's heif-convert elsewhere) into a
temporary PNG that the main encoder can read.
"""

import logging
import os
import subprocess
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

INTERMEDIATE_SUFFIX = ".png"


class ImageConversionError(Exception):
    """Raised when a source cannot be turned into something Pillow can read."""


def pre_conversion_command(source: Path, target: Path, platform: Optional[str] = None) -> List[str]:
    platform = platform or sys.platform
    if platform == "darwin":
        return ["sips", "-s", "format", "png", str(source), "--out", str(target)]
    return ["heif-convert", str(source), str(target)]


@contextmanager
def heif_intermediate(source: Path) -> Iterator[Path]:
    """Yield a temporary PNG rendition of source, removed on every exit path."""
    fd, tmp_name = tempfile.mkstemp(prefix="media-optimizer-", suffix=INTERMEDIATE_SUFFIX)
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        cmd = pre_conversion_command(source, tmp_path)
        logger.debug("Pre-converting HEIF: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except (OSError, subprocess.CalledProcessError) as e:
            detail = e.stderr.strip() if isinstance(e, subprocess.CalledProcessError) and e.stderr else str(e)
            raise ImageConversionError(f"HEIF pre-conversion failed for {source}: {detail}") from e
        yield tmp_path
    finally:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            logger.warning("Temporary file already removed: %s", tmp_path)
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", tmp_path, e)
