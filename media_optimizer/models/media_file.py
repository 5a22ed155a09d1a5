#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data structures for source media files in the Media Optimizer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import HEIF_EXT, IMAGE_EXT, VIDEO_EXT


@dataclass(frozen=True)
class SourceFile:
    """A recognized media file under the watched directory."""
    path: Path

    @property
    def extension(self) -> str:
        return self.path.suffix.lower()

    @property
    def basename(self) -> str:
        """Stem used to name every output of this file."""
        return self.path.stem

    @property
    def kind(self) -> str:
        """Return 'image' or 'video'."""
        return 'video' if self.extension in VIDEO_EXT else 'image'

    @property
    def is_heif(self) -> bool:
        return self.extension in HEIF_EXT

    def output_path(self, output_dir: Path, ext: str) -> Path:
        return output_dir / f"{self.basename}{ext}"

    @classmethod
    def from_path(cls, path: Path) -> Optional['SourceFile']:
        """Wrap path if its extension is recognized, else return None."""
        ext = Path(path).suffix.lower()
        if ext in IMAGE_EXT or ext in VIDEO_EXT:
            return cls(Path(path))
        return None
