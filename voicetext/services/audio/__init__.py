"""
Audio module - Audio processing, conversion and capture utilities.
"""

from .converter import FFmpegConverter
from .processor import AudioProcessor

__all__ = ["AudioProcessor", "FFmpegConverter"]
