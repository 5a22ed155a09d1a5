"""Discovery modules for the Media Optimizer."""

from .discovery import (
    MediaDiscovery, walk_depth_first, is_already_optimized, primary_output, partition
)

__all__ = [
    'MediaDiscovery',
    'walk_depth_first',
    'is_already_optimized',
    'primary_output',
    'partition',
]
