#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File discovery logic for the Media Optimizer.
Decides which source files under the watched directory still need converting,
either from the git staging index or by walking the directory tree.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..config import AVIF_EXT, MP4_EXT, OptimizerConfig
from ..models.media_file import SourceFile
from ..utils.path import is_within
from ..utils.time import utc_now_str
from ..vcs.git import GitIndex

logger = logging.getLogger(__name__)


def walk_depth_first(root: Path) -> Iterator[Path]:
    """Lazily yield every file below root, depth first.

    An unreadable directory or entry is logged and contributes nothing; the
    walk carries on with its siblings. Symbolic links are never followed.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning("Could not read directory %s: %s", root, e)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file(follow_symlinks=False)
        except OSError as e:
            logger.warning("Could not inspect %s: %s", entry.path, e)
            continue
        if is_dir:
            yield from walk_depth_first(Path(entry.path))
        elif is_file:
            yield Path(entry.path)


def primary_output(source: SourceFile, config: OptimizerConfig) -> Path:
    """The output whose existence marks source as already optimized."""
    ext = MP4_EXT if source.kind == 'video' else AVIF_EXT
    return source.output_path(config.output_dir, ext)


def is_already_optimized(source: SourceFile, config: OptimizerConfig) -> bool:
    return primary_output(source, config).exists()


def partition(sources: List[SourceFile]) -> Tuple[List[SourceFile], List[SourceFile]]:
    """Split sources into (images, videos), keeping discovery order."""
    images = [s for s in sources if s.kind == 'image']
    videos = [s for s in sources if s.kind == 'video']
    return images, videos


class MediaDiscovery:
    """Finds the source files a run has to convert."""

    def __init__(self, config: OptimizerConfig, git: Optional[GitIndex] = None):
        self.config = config
        self.git = git or GitIndex(config.repo_root)

    def discover(self, announce: bool = True) -> List[SourceFile]:
        """Staged media under the watched directory, else a full scan."""
        if self.config.use_staged:
            staged = self.discover_staged()
            if staged:
                if announce:
                    print(f"[{utc_now_str()}] Found {len(staged)} staged media file(s)")
                return staged

        if announce:
            print(f"[{utc_now_str()}] Scanning {self.config.origin_dir} for media to optimize...")
        start_time = time.perf_counter()
        found = list(self.discover_unoptimized())
        if announce:
            self._print_discovery_summary(found, time.perf_counter() - start_time)
        return found

    def discover_staged(self) -> Optional[List[SourceFile]]:
        """Media files staged under the watched directory.

        Existing outputs are not consulted here: a staged source is always
        converted again. Returns None if the index could not be read.
        """
        paths = self.git.list_staged_paths()
        if paths is None:
            return None

        found = []
        for path in paths:
            if not is_within(path, self.config.origin_dir):
                continue
            source = SourceFile.from_path(path)
            if source is not None:
                found.append(source)
        return found

    def discover_unoptimized(self) -> Iterator[SourceFile]:
        """Walk the watched directory, skipping files that already have output."""
        for path in walk_depth_first(self.config.origin_dir):
            source = SourceFile.from_path(path)
            if source is None:
                continue
            if is_already_optimized(source, self.config):
                logger.debug("Already optimized, skipping: %s", path)
                continue
            yield source

    def _print_discovery_summary(self, found: List[SourceFile], elapsed: float):
        images, videos = partition(found)
        print(f"[{utc_now_str()}] Discovery complete: {len(found):,} file(s) to optimize "
              f"in {elapsed:.1f}s")
        if found:
            print(f"  - File types: {len(images):,} images, {len(videos):,} videos")
