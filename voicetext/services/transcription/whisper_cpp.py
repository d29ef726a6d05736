"""whisper.cpp STT implementation.

Runs the offline pipeline for one upload: persist the bytes, resample
with ffmpeg, run the whisper.cpp CLI, read its text artifact. Every
temporary file is owned by a ``TempArtifacts`` scope and removed on all
exit paths. Each external tool gets exactly one attempt.
"""

import asyncio
import logging
import time
from pathlib import Path

from voicetext.core.config import Settings, get_settings
from voicetext.core.exceptions import ServiceUnavailableError, TranscriptionFailedError
from voicetext.core.models import ModelInfo, TranscriptionResult, TranscriptionStats
from voicetext.core.utils import format_bytes
from voicetext.services.audio.converter import FFmpegConverter
from voicetext.services.process import run_process
from voicetext.services.storage.temp_files import TempArtifacts
from voicetext.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class WhisperCppSTT(BaseSTT):
    """Speech-to-text provider shelling out to the whisper.cpp CLI.

    Args:
        settings: Optional Settings instance (defaults to get_settings()).
        converter: Optional converter (defaults to ffmpeg from settings).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        converter: FFmpegConverter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._converter = converter or FFmpegConverter(self._settings.ffmpeg_path)
        self._model_path = Path(self._settings.whisper_model_path)
        self._temp_dir = Path(self._settings.temp_dir)

    # -- availability --

    def candidate_paths(self) -> list[Path]:
        """Ordered engine locations: configured path first, then fallbacks."""
        candidates: list[Path] = []
        for raw in [self._settings.whisper_executable_path, *self._settings.whisper_fallback_paths]:
            if not raw:
                continue
            path = Path(raw).expanduser()
            if path not in candidates:
                candidates.append(path)
        return candidates

    def resolve_executable(self) -> Path | None:
        """Return the first candidate that exists as a file, or None."""
        for path in self.candidate_paths():
            if path.is_file():
                return path
        return None

    def is_available(self) -> bool:
        return self.resolve_executable() is not None

    # -- model descriptor --

    def get_model_info(self) -> ModelInfo:
        info = ModelInfo(model_path=str(self._model_path), model_name=self._model_path.name)
        if self._model_path.is_file():
            size = self._model_path.stat().st_size
            info.model_size_bytes = size
            info.model_size_formatted = format_bytes(size)
        return info

    # -- transcription --

    def build_args(self, wav_path: Path, output_prefix: Path, language: str) -> list[str]:
        """Return the whisper.cpp argument list for one run."""
        return [
            "-m",
            str(self._model_path),
            "-f",
            str(wav_path),
            "-l",
            language,
            "-otxt",
            "-of",
            str(output_prefix),
        ]

    @staticmethod
    def _read_output(text_path: Path, stdout: str) -> str:
        """Return the trimmed text artifact, or trimmed stdout when there is none."""
        if text_path.is_file():
            return text_path.read_text(encoding="utf-8").strip()
        return stdout.strip()

    async def transcribe(self, audio: bytes, language: str) -> TranscriptionResult:
        """Transcribe uploaded audio bytes.

        Raises:
            ServiceUnavailableError: If no engine executable is found. Raised
                before any temporary file is written.
            ConversionFailedError: If ffmpeg fails.
            TranscriptionFailedError: If whisper.cpp exits non-zero.
        """
        executable = self.resolve_executable()
        if executable is None:
            raise ServiceUnavailableError()

        started = time.perf_counter()
        stats = TranscriptionStats()

        with TempArtifacts(self._temp_dir) as artifacts:
            input_path = artifacts.new_path(".webm")
            wav_path = artifacts.new_path(".wav")
            text_path = artifacts.new_path(".txt")
            # whisper.cpp appends ".txt" to the -of prefix
            output_prefix = text_path.with_suffix("")

            await asyncio.to_thread(input_path.write_bytes, audio)
            stats.audio_file_size_bytes = len(audio)

            await self._converter.convert(input_path, wav_path)

            if wav_path.is_file():
                stats.audio_duration_seconds = self._converter.processor.estimate_duration(
                    wav_path.stat().st_size
                )

            result = await run_process(
                str(executable), *self.build_args(wav_path, output_prefix, language)
            )
            if not result.success:
                logger.error("Whisper transcription failed: %s", result.stderr)
                raise TranscriptionFailedError()

            stats.processing_time_ms = (time.perf_counter() - started) * 1000

            text = await asyncio.to_thread(self._read_output, text_path, result.stdout)

        logger.info(
            "Transcribed %d bytes (%.1fs audio) in %.0f ms",
            stats.audio_file_size_bytes,
            stats.audio_duration_seconds,
            stats.processing_time_ms,
        )
        return TranscriptionResult(text=text, stats=stats)
