"""Version-control collaborators for the Media Optimizer."""

from .git import GitIndex

__all__ = ['GitIndex']
