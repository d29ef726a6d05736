"""Microphone capture.

``MicrophoneStream`` reads the default input device on a background
thread and hands out fixed-duration PCM chunks. ``MicrophoneRecorder``
collects those chunks into a WAV recording for the offline path; the
local live recognizer consumes them directly.
"""

import importlib.util
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

from voicetext.core.config import get_settings
from voicetext.core.exceptions import DeviceUnavailableError, PermissionDeniedError
from voicetext.services.audio.processor import AudioProcessor

logger = logging.getLogger(__name__)


def microphone_supported() -> bool:
    """True when the PyAudio backend (``capture`` extra) is installed."""
    return importlib.util.find_spec("pyaudio") is not None


class AudioRecorder(ABC):
    """Record-then-return audio source used by the offline client."""

    filename = "recording.webm"
    content_type = "audio/webm"

    @abstractmethod
    def start(self) -> None:
        """Acquire the input device and begin buffering.

        Raises:
            PermissionDeniedError: If access to the microphone is refused.
            DeviceUnavailableError: If there is no input device.
        """

    @abstractmethod
    def stop(self) -> bytes:
        """Finalize the recording, release the device, return encoded audio.

        Returns empty bytes when nothing was captured.
        """


class MicrophoneStream:
    """Default input device as a stream of 16-bit PCM chunks.

    Args:
        on_chunk: Called from the reader thread with each chunk.
        chunk_seconds: Duration of one chunk (the flush interval).
        processor: PCM format description (rate, width, channels).
        on_error: Called from the reader thread if reading fails.
    """

    def __init__(
        self,
        on_chunk: Callable[[bytes], None],
        chunk_seconds: float | None = None,
        processor: AudioProcessor | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self._on_chunk = on_chunk
        self._on_error = on_error
        self.processor = processor or AudioProcessor()
        seconds = get_settings().recorder_flush_interval if chunk_seconds is None else chunk_seconds
        self._frames_per_chunk = max(1, int(self.processor.sample_rate * seconds))
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._pyaudio = None
        self._stream = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self) -> None:
        """Open the default input device and start the reader thread."""
        import pyaudio  # optional "capture" extra; only hosts with a microphone need it

        pa = pyaudio.PyAudio()
        try:
            pa.get_default_input_device_info()
        except OSError as exc:
            pa.terminate()
            raise DeviceUnavailableError() from exc
        try:
            stream = pa.open(
                format=pa.get_format_from_width(self.processor.sample_width),
                channels=self.processor.channels,
                rate=self.processor.sample_rate,
                input=True,
                frames_per_buffer=self._frames_per_chunk,
            )
        except OSError as exc:
            pa.terminate()
            raise PermissionDeniedError() from exc

        self._pyaudio = pa
        self._stream = stream
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._read_loop, name="MicrophoneStream", daemon=True)
        self._thread.start()
        logger.info("Microphone opened (%d Hz)", self.processor.sample_rate)

    def close(self) -> None:
        """Stop the reader thread and release the device."""
        if self._stream is None:
            return
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        try:
            self._stream.stop_stream()
            self._stream.close()
        finally:
            self._pyaudio.terminate()
            self._stream = None
            self._pyaudio = None
        logger.info("Microphone released")

    def _read_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                data = self._stream.read(self._frames_per_chunk, exception_on_overflow=False)
            except OSError as exc:
                logger.error("Microphone read failed: %s", exc)
                if self._on_error is not None:
                    self._on_error(exc)
                return
            if data:
                self._on_chunk(data)


class MicrophoneRecorder(AudioRecorder):
    """Buffers microphone chunks and returns them as one WAV file."""

    filename = "recording.wav"
    content_type = "audio/wav"

    def __init__(self, chunk_seconds: float | None = None) -> None:
        self._chunks: list[bytes] = []
        self._lock = threading.Lock()
        self._stream = MicrophoneStream(self._collect, chunk_seconds=chunk_seconds)

    def _collect(self, chunk: bytes) -> None:
        with self._lock:
            self._chunks.append(chunk)

    def start(self) -> None:
        with self._lock:
            self._chunks = []
        self._stream.open()

    def stop(self) -> bytes:
        self._stream.close()
        with self._lock:
            pcm = b"".join(self._chunks)
            self._chunks = []
        if not pcm:
            return b""
        return self._stream.processor.to_wav_bytes(pcm)
