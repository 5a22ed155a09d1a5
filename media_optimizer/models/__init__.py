"""Data models for the Media Optimizer."""

from .media_file import SourceFile
from .result import ConversionResult, RunSummary

__all__ = ['SourceFile', 'ConversionResult', 'RunSummary']
