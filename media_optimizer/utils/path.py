#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the Media Optimizer.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary."""
    p.mkdir(parents=True, exist_ok=True)


def remove_source(p: Path) -> bool:
    """Delete a converted source file. Failures are logged, never raised."""
    try:
        p.unlink()
    except OSError as e:
        logger.warning("Could not delete source file %s: %s", p, e)
        return False
    logger.info("Deleted source file: %s", p)
    return True


def is_within(path: Path, root: Path) -> bool:
    """Return True if path lies somewhere below root."""
    return root in path.parents
