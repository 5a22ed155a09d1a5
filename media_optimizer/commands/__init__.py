"""Command implementations for the Media Optimizer."""

from .optimize import OptimizeCommand

__all__ = ['OptimizeCommand']
