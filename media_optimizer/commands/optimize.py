#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Optimize command.
Runs discovery, converts images and then videos, and stages the outputs.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from ..config import OptimizerConfig
from ..converting.image import ImageConverter
from ..converting.video import VideoTranscoder
from ..models.media_file import SourceFile
from ..models.result import RunSummary
from ..scanning.discovery import MediaDiscovery, partition
from ..vcs.git import GitIndex

logger = logging.getLogger(__name__)


class OptimizeCommand:
    """One pre-commit pass: discover, convert images then videos, stage outputs."""

    def __init__(self, config: OptimizerConfig,
                 git: Optional[GitIndex] = None,
                 image_converter: Optional[ImageConverter] = None,
                 video_transcoder: Optional[VideoTranscoder] = None):
        self.config = config
        self.git = git or GitIndex(config.repo_root)
        self.discovery = MediaDiscovery(config, self.git)
        self.image_converter = image_converter or ImageConverter(config)
        self.video_transcoder = video_transcoder or VideoTranscoder(config)

    def execute(self, show_progress: bool = True, quiet: bool = False) -> RunSummary:
        """Run one full optimization pass and return its summary."""
        summary = RunSummary()

        if not self.config.origin_dir.is_dir():
            logger.info("%s does not exist, nothing to optimize.", self.config.origin_dir)
            return summary

        sources = self.discovery.discover(announce=not quiet)
        summary.discovered = len(sources)
        if not sources:
            logger.info("No media files need optimizing.")
            return summary

        images, videos = partition(sources)
        self._convert_all(images, self.image_converter, "Images", summary, show_progress)
        self._convert_all(videos, self.video_transcoder, "Videos", summary, show_progress)

        if summary.converted:
            logger.info("Staging %d optimized file(s)...", len(summary.converted))
            for output in summary.converted:
                if self.git.stage(output):
                    summary.staged.append(output)
                else:
                    summary.unstaged.append(output)

        if not quiet:
            self._print_summary(summary)
        return summary

    def _convert_all(self, sources: List[SourceFile], converter, label: str,
                     summary: RunSummary, show_progress: bool):
        if not sources:
            return
        bar = tqdm(sources, desc=label, unit="file",
                   disable=not show_progress or not sys.stdout.isatty())
        for source in bar:
            logger.info("Processing: %s", _display_path(source.path, self.config.repo_root))
            summary.record(converter.convert(source))

    def _print_summary(self, summary: RunSummary):
        print()
        print("Media optimization finished.")
        print(f"  - Converted: {len(summary.converted):,} output file(s)")
        if summary.failed:
            print(f"  - Failed:    {len(summary.failed):,} source file(s)")
        if summary.deleted:
            print(f"  - Removed:   {len(summary.deleted):,} source file(s)")
        if summary.unstaged:
            print(f"  - Not staged: {len(summary.unstaged):,} output file(s)")


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
