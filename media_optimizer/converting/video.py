#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Video transcoding for the Media Optimizer (requires ffmpeg).

Every .mov source becomes an H.264/AAC .mp4 with its moov atom moved to the
front for progressive playback. Transcodes run one at a time; transcode()
blocks until the ffmpeg process exits.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import MP4_EXT, OptimizerConfig
from ..models.media_file import SourceFile
from ..models.result import ConversionResult
from ..utils.path import ensure_dir, remove_source

logger = logging.getLogger(__name__)


@dataclass
class TranscodeOutcome:
    """Response of a single transcode request."""
    ok: bool
    output: Path
    error: Optional[str] = None


class VideoTranscoder:
    """Runs ffmpeg with the configured H.264 settings."""

    def __init__(self, config: OptimizerConfig, ffmpeg_bin: str = "ffmpeg"):
        self.config = config
        self.ffmpeg_bin = ffmpeg_bin

    def build_command(self, source: Path, target: Path) -> List[str]:
        v = self.config.video
        cmd = [
            self.ffmpeg_bin, "-y", "-nostdin", "-loglevel", "error",
            "-i", str(source),
            "-c:v", v.video_codec,
            "-preset", v.preset,
            "-crf", str(v.crf),
            "-c:a", v.audio_codec,
        ]
        if v.faststart:
            cmd.extend(["-movflags", "+faststart"])
        cmd.append(str(target))
        return cmd

    def transcode(self, source: Path, target: Path) -> TranscodeOutcome:
        """Transcode source into target and wait for ffmpeg to finish."""
        cmd = self.build_command(source, target)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError:
            return TranscodeOutcome(False, target, f"{self.ffmpeg_bin} not found on PATH")
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            return TranscodeOutcome(False, target, detail)
        except OSError as e:
            return TranscodeOutcome(False, target, str(e))
        return TranscodeOutcome(True, target)

    def convert(self, source: SourceFile) -> ConversionResult:
        result = ConversionResult(source.path)
        ensure_dir(self.config.output_dir)
        target = source.output_path(self.config.output_dir, MP4_EXT)

        outcome = self.transcode(source.path, target)
        if not outcome.ok:
            logger.error("Video conversion failed for %s: %s", source.path, outcome.error)
            result.errors.append(outcome.error)
            # a partial mp4 would otherwise count as already optimized
            if target.exists():
                try:
                    target.unlink()
                except OSError as e:
                    logger.warning("Could not remove partial output %s: %s", target, e)
            return result

        logger.info("MP4 written: %s -> %s", source.path, target)
        result.outputs.append(target)
        if self.config.delete_sources:
            result.source_deleted = remove_source(source.path)
        return result
