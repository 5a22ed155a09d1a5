"""Utility functions for the Media Optimizer."""

from .time import utc_now_str
from .path import ensure_dir, remove_source, is_within

__all__ = ['utc_now_str', 'ensure_dir', 'remove_source', 'is_within']
