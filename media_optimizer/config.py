#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Media Optimizer.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set

# File type categories
HEIF_EXT: Set[str] = {".heic", ".heif"}
IMAGE_EXT: Set[str] = {".jpg", ".jpeg", ".png"} | HEIF_EXT
VIDEO_EXT: Set[str] = {".mov"}
SUPPORTED_EXT: Set[str] = IMAGE_EXT | VIDEO_EXT

# Output extensions
AVIF_EXT = ".avif"
WEBP_EXT = ".webp"
MP4_EXT = ".mp4"

# Directory names, relative to the repository root
ORIGIN_DIRNAME = "origin"
OUTPUT_DIRNAME = "images"

# Encoder defaults
AVIF_QUALITY = 65
AVIF_EFFORT = 6
WEBP_QUALITY = 75
WEBP_EFFORT = 6

VIDEO_CODEC = "libx264"
AUDIO_CODEC = "aac"
VIDEO_CRF = 23
VIDEO_PRESET = "medium"


@dataclass(frozen=True)
class EncodeSettings:
    """Quality/effort pair for a still-image format."""
    quality: int
    effort: int


@dataclass(frozen=True)
class VideoSettings:
    """Transcoding parameters handed to ffmpeg."""
    video_codec: str = VIDEO_CODEC
    audio_codec: str = AUDIO_CODEC
    crf: int = VIDEO_CRF
    preset: str = VIDEO_PRESET
    faststart: bool = True


@dataclass
class OptimizerConfig:
    """Explicit run configuration passed into every component."""
    origin_dir: Path
    output_dir: Path
    repo_root: Path = field(default_factory=Path.cwd)

    avif: EncodeSettings = field(default_factory=lambda: EncodeSettings(AVIF_QUALITY, AVIF_EFFORT))
    webp: Optional[EncodeSettings] = field(default_factory=lambda: EncodeSettings(WEBP_QUALITY, WEBP_EFFORT))
    video: VideoSettings = field(default_factory=VideoSettings)

    delete_sources: bool = True
    use_staged: bool = True

    def __post_init__(self):
        self.repo_root = Path(self.repo_root).resolve()
        self.origin_dir = self._anchor(self.origin_dir)
        self.output_dir = self._anchor(self.output_dir)

    def _anchor(self, p) -> Path:
        p = Path(p)
        if not p.is_absolute():
            p = self.repo_root / p
        return p.resolve()

    @classmethod
    def from_args(cls, args) -> 'OptimizerConfig':
        """Build a configuration from parsed CLI arguments."""
        return cls(
            origin_dir=Path(args.origin),
            output_dir=Path(args.output),
            repo_root=Path(args.repo_root),
            webp=None if args.no_webp else EncodeSettings(WEBP_QUALITY, WEBP_EFFORT),
            delete_sources=not args.keep_sources,
            use_staged=not args.scan_all,
        )
