"""ffmpeg-based resampling to the whisper.cpp input format."""

import logging
from pathlib import Path

from voicetext.core.exceptions import ConversionFailedError
from voicetext.services.audio.processor import AudioProcessor
from voicetext.services.process import run_process

logger = logging.getLogger(__name__)


class FFmpegConverter:
    """Converts any ffmpeg-readable input into 16-bit PCM WAV.

    Args:
        ffmpeg_path: ffmpeg executable name or path.
        processor: Target format description (rate, width, channels).
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg", processor: AudioProcessor | None = None) -> None:
        self._ffmpeg_path = ffmpeg_path
        self.processor = processor or AudioProcessor()

    def build_args(self, input_path: Path, output_path: Path) -> list[str]:
        """Return the ffmpeg argument list for one conversion."""
        return [
            "-i",
            str(input_path),
            "-ar",
            str(self.processor.sample_rate),
            "-ac",
            str(self.processor.channels),
            "-c:a",
            f"pcm_s{self.processor.sample_width * 8}le",
            str(output_path),
            "-y",
        ]

    async def convert(self, input_path: Path, output_path: Path) -> None:
        """Transcode ``input_path`` into ``output_path``.

        Raises:
            ConversionFailedError: If ffmpeg cannot be launched or exits non-zero.
        """
        result = await run_process(self._ffmpeg_path, *self.build_args(input_path, output_path))
        if not result.success:
            logger.error("FFmpeg conversion failed: %s", result.stderr)
            raise ConversionFailedError()
