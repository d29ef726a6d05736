"""Local continuous recognizer using faster-whisper.

Implements ``RecognitionCapability`` on top of the microphone stream so
Live mode works on hosts without a platform speech service. Audio arrives
in flush-interval chunks; every chunk with speech extends the current
utterance and re-transcribes it as an interim hypothesis. A silent chunk
after speech, or an utterance reaching ``max_utterance_seconds``, turns
it into a final hypothesis.

The WhisperModel is loaded lazily and cached at module level to avoid
repeated initialization overhead.
"""

import logging
import queue
import threading
import time

from faster_whisper import WhisperModel

from voicetext.core.config import get_settings
from voicetext.core.exceptions import DeviceUnavailableError, PermissionDeniedError
from voicetext.services.audio.capture import MicrophoneStream
from voicetext.services.audio.processor import AudioProcessor
from voicetext.services.transcription.base import (
    RecognitionCapability,
    RecognitionEvent,
    RecognitionHypothesis,
    RecognitionStartError,
)

logger = logging.getLogger(__name__)

_model_cache: WhisperModel | None = None

# Queue markers
_STOP = object()
_STREAM_FAILED = object()


class WhisperStreamRecognizer(RecognitionCapability):
    """Continuous recognizer over the default microphone.

    Args:
        model_size: faster-whisper model size (defaults to settings.stream_model).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        stream_factory: Builds the PCM source; receives ``on_chunk``,
            ``chunk_seconds`` and ``on_error`` keyword arguments.
        max_utterance_seconds: Force a final hypothesis after this much speech.
        no_speech_timeout: Seconds of silence that end the session.
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        stream_factory=MicrophoneStream,
        max_utterance_seconds: float = 10.0,
        no_speech_timeout: float = 8.0,
    ) -> None:
        super().__init__()
        settings = get_settings()
        self._model_size = model_size or settings.stream_model
        self._device = device
        self._compute_type = compute_type
        self._chunk_seconds = settings.recorder_flush_interval
        self._stream_factory = stream_factory
        self._max_utterance_seconds = max_utterance_seconds
        self._no_speech_timeout = no_speech_timeout
        self._processor = AudioProcessor()

        self._lock = threading.Lock()
        self._running = False
        self._queue: queue.Queue = queue.Queue()
        self._stream = None
        self._worker: threading.Thread | None = None

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel, loading it on first use."""
        global _model_cache  # noqa: PLW0603
        if _model_cache is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            _model_cache = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
        return _model_cache

    @property
    def is_running(self) -> bool:
        return self._running

    # -- RecognitionCapability --

    def start(self) -> None:
        with self._lock:
            if self._running:
                raise RecognitionStartError("Recognition already started")
            self._running = True

        self._queue = queue.Queue()
        stream = self._stream_factory(
            on_chunk=self._queue.put,
            chunk_seconds=self._chunk_seconds,
            on_error=lambda _exc: self._queue.put(_STREAM_FAILED),
        )
        try:
            stream.open()
        except DeviceUnavailableError:
            self._fail_start("audio-capture")
            return
        except PermissionDeniedError:
            self._fail_start("not-allowed")
            return

        self._stream = stream
        self._worker = threading.Thread(target=self._run, name="WhisperStreamRecognizer", daemon=True)
        self._worker.start()
        self._emit(self.on_start)

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
        self._queue.put(_STOP)

    # -- worker --

    def _fail_start(self, code: str) -> None:
        with self._lock:
            self._running = False
        self._emit(self.on_error, code)
        self._emit(self.on_end)

    def _transcribe(self, pcm: bytes, language: str) -> str:
        audio = self._processor.pcm_to_ndarray(pcm)
        segments_iter, _info = self._get_model().transcribe(
            audio, language=language, beam_size=1, vad_filter=False
        )
        # Materialize the generator in this thread (CTranslate2 is not thread-safe)
        return " ".join(seg.text.strip() for seg in segments_iter if seg.text.strip())

    def _run(self) -> None:
        language = self.language.split("-")[0] or None
        results: list[RecognitionHypothesis] = []
        utterance = bytearray()
        last_speech = time.monotonic()
        error: str | None = None

        def finalize() -> bool:
            text = self._transcribe(bytes(utterance), language)
            utterance.clear()
            if not text:
                return False
            results.append(RecognitionHypothesis(text, is_final=True))
            self._emit(self.on_result, RecognitionEvent(len(results) - 1, list(results)))
            return True

        try:
            while True:
                item = self._queue.get()
                if item is _STOP:
                    if utterance:
                        finalize()
                    break
                if item is _STREAM_FAILED:
                    error = "audio-capture"
                    break

                silent = self._processor.is_silent(self._processor.pcm_to_ndarray(item))
                now = time.monotonic()
                if silent and not utterance:
                    if now - last_speech >= self._no_speech_timeout:
                        if not results:
                            error = "no-speech"
                        break
                    continue

                if not silent:
                    last_speech = now
                utterance.extend(item)
                duration = len(utterance) / self._processor.bytes_per_second

                if silent or duration >= self._max_utterance_seconds:
                    if finalize() and not self.continuous:
                        break
                    continue

                text = self._transcribe(bytes(utterance), language)
                if text:
                    interim = RecognitionHypothesis(text, is_final=False)
                    self._emit(self.on_result, RecognitionEvent(len(results), [*results, interim]))
        except Exception:
            logger.exception("Live transcription failed")
            error = "transcription-failed"
        finally:
            self._shutdown()

        if error is not None:
            self._emit(self.on_error, error)
        self._emit(self.on_end)

    def _shutdown(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()
        with self._lock:
            self._running = False
