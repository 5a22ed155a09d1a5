"""Image and video converters for the Media Optimizer."""

from .heic import ImageConversionError, heif_intermediate
from .image import ImageConverter
from .video import VideoTranscoder, TranscodeOutcome

__all__ = [
    'ImageConverter',
    'VideoTranscoder',
    'TranscodeOutcome',
    'ImageConversionError',
    'heif_intermediate',
]
