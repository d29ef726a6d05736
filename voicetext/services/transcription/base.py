"""
Abstract base classes for Speech-to-Text providers.

``BaseSTT`` is the offline (record, upload, transcribe) interface the HTTP
layer talks to. ``RecognitionCapability`` is the continuous, event-driven
interface the live capture path drives: the host calls ``start``/``stop``
and the capability reports back through its ``on_*`` callbacks.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from voicetext.core.models import ModelInfo, TranscriptionResult


class BaseSTT(ABC):
    """Interface that every offline STT provider must implement."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the engine can be invoked on this host."""

    @abstractmethod
    def get_model_info(self) -> ModelInfo:
        """Describe the model file the engine would load."""

    @abstractmethod
    async def transcribe(self, audio: bytes, language: str) -> TranscriptionResult:
        """Transcribe one uploaded recording.

        Args:
            audio: Encoded audio bytes as uploaded (webm, ogg, wav, ...).
            language: ISO 639-1 language code passed to the engine.

        Returns:
            TranscriptionResult with trimmed text and processing stats.
        """


@dataclass(frozen=True)
class RecognitionHypothesis:
    """Best transcript for one recognition result slot."""

    transcript: str
    is_final: bool = False


@dataclass(frozen=True)
class RecognitionEvent:
    """All result slots of the session; slots before ``result_index`` are unchanged."""

    result_index: int
    results: Sequence[RecognitionHypothesis]


class RecognitionStartError(RuntimeError):
    """Raised by ``start()`` when a recognition session is already running."""


class RecognitionCapability(ABC):
    """Continuous speech recognizer driven through callbacks.

    Callbacks may be invoked from a worker thread. Every session that
    reached ``on_start`` finishes with exactly one ``on_end``; an
    ``on_error`` is always followed by ``on_end``.

    Attributes:
        language: BCP 47 tag of the spoken language (e.g. ``"en-US"``).
        continuous: Keep listening after the first final result.
    """

    def __init__(self) -> None:
        self.language = "en-US"
        self.continuous = True
        self.on_start: Callable[[], None] | None = None
        self.on_end: Callable[[], None] | None = None
        self.on_result: Callable[[RecognitionEvent], None] | None = None
        self.on_error: Callable[[str], None] | None = None

    @abstractmethod
    def start(self) -> None:
        """Begin a recognition session.

        Raises:
            RecognitionStartError: If a session is already running.
        """

    @abstractmethod
    def stop(self) -> None:
        """End the current session; pending audio is finalized first."""

    def _emit(self, handler: Callable | None, *args) -> None:
        if handler is not None:
            handler(*args)
