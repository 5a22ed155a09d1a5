"""Media Optimizer - pre-commit conversion of source media to web formats."""

__version__ = "1.0.0"
__author__ = "Media Tool Team"

# Import key classes for convenient top-level access
from .config import OptimizerConfig, EncodeSettings, VideoSettings
from .commands import OptimizeCommand
from .scanning import MediaDiscovery, walk_depth_first
from .converting import ImageConverter, VideoTranscoder
from .vcs import GitIndex
from .models import SourceFile, ConversionResult, RunSummary

__all__ = [
    # Configuration
    'OptimizerConfig',
    'EncodeSettings',
    'VideoSettings',

    # Core classes
    'OptimizeCommand',
    'MediaDiscovery',
    'ImageConverter',
    'VideoTranscoder',
    'GitIndex',

    # Data models
    'SourceFile',
    'ConversionResult',
    'RunSummary',

    # Utilities
    'walk_depth_first',

    # Package metadata
    '__version__',
    '__author__'
]
