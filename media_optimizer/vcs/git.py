#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Git index access for the Media Optimizer.

Both operations shell out to the git binary. Neither raises: a failure to
list staged paths returns None so discovery can fall back to a directory
walk, and a failure to stage returns False so the run can carry on.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class GitIndex:
    """Read and write the staging index of one repository."""

    def __init__(self, repo_root: Path, git_bin: str = "git"):
        self.repo_root = Path(repo_root)
        self.git_bin = git_bin

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.git_bin, *args],
            cwd=self.repo_root,
            capture_output=True,
            text=True,
            check=True,
        )

    def list_staged_paths(self) -> Optional[List[Path]]:
        """Return absolute paths currently staged for commit, or None on failure."""
        try:
            proc = self._run("diff", "--cached", "--name-only", "--relative", "-z", "--diff-filter=d")
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("Could not read staged files, falling back to a full scan: %s",
                           _describe(e))
            return None

        return [(self.repo_root / name).resolve()
                for name in proc.stdout.split("\0") if name]

    def stage(self, path: Path) -> bool:
        """git add a single path. Failures are logged as warnings."""
        try:
            self._run("add", "--", str(path))
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("Could not add %s to git: %s", path, _describe(e))
            return False
        logger.info("Staged: %s", path)
        return True


def _describe(e: Exception) -> str:
    if isinstance(e, subprocess.CalledProcessError) and e.stderr:
        return e.stderr.strip()
    return str(e)
