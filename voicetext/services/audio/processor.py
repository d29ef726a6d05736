"""Audio processing utilities for PCM data.

Converts raw PCM bytes to numpy arrays, packs them into WAV containers,
estimates WAV durations from file size and provides silence detection.
"""

import io
import wave

import numpy as np

# Canonical RIFF/WAVE header written by ffmpeg and the ``wave`` module
WAV_HEADER_BYTES = 44


class AudioProcessor:
    """Handles PCM audio data conversion and analysis.

    The defaults describe the format whisper.cpp expects: 16 kHz,
    16-bit signed, mono.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        sample_width: int = 2,
        channels: int = 1,
    ) -> None:
        """Initialize the audio processor.

        Args:
            sample_rate: Audio sample rate in Hz (default: 16 kHz).
            sample_width: Bytes per sample (2 = 16-bit signed PCM).
            channels: Number of audio channels (1 = mono).
        """
        self.sample_rate = sample_rate
        self.sample_width = sample_width
        self.channels = channels

    @property
    def bytes_per_second(self) -> int:
        """PCM byte rate (32000 for 16 kHz 16-bit mono)."""
        return self.sample_rate * self.sample_width * self.channels

    def estimate_duration(self, wav_size: int, header_size: int = WAV_HEADER_BYTES) -> float:
        """Estimate the duration of a WAV file from its size in bytes.

        Args:
            wav_size: Total file size including the container header.
            header_size: Bytes to discount for the header.

        Returns:
            Duration in seconds, never negative.
        """
        return max(0.0, (wav_size - header_size) / self.bytes_per_second)

    def pcm_to_ndarray(self, pcm_data: bytes) -> np.ndarray:
        """Convert raw PCM bytes (16-bit signed) to float32 numpy array.

        Args:
            pcm_data: Raw PCM bytes (16-bit, mono).

        Returns:
            Float32 numpy array normalized to [-1.0, 1.0].

        Raises:
            ValueError: If data length is not aligned to sample frame size.
        """
        frame_size = self.sample_width * self.channels
        if len(pcm_data) % frame_size != 0:
            raise ValueError(
                f"PCM data length ({len(pcm_data)}) is not aligned to frame size ({frame_size})"
            )
        # Convert 16-bit signed integers to float32 in [-1.0, 1.0] range
        return np.frombuffer(pcm_data, dtype=np.int16).astype(np.float32) / 32768.0

    def to_wav_bytes(self, pcm_data: bytes) -> bytes:
        """Wrap raw PCM bytes in an in-memory WAV container.

        Raises:
            ValueError: If pcm_data is empty.
        """
        if not pcm_data:
            raise ValueError("Cannot encode empty PCM data to WAV")
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data)
        return buffer.getvalue()

    def is_silent(self, audio: np.ndarray, threshold: float = 0.01) -> bool:
        """Check if an audio segment is silence based on RMS energy.

        Args:
            audio: Float32 numpy array of audio samples.
            threshold: RMS energy below this value is considered silence.

        Returns:
            True if the audio is silence.
        """
        if len(audio) == 0:
            return True
        rms = np.sqrt(np.mean(audio**2))
        return float(rms) < threshold
