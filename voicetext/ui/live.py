"""
Live capture: drives a continuous recognizer and feeds the transcript.

States: idle -> listening -> (idle | stopped-error)

In continuous mode a session that ends on its own (not stopped by the
user, not failed) is restarted after a short delay. Finalized hypotheses
are normalized once and appended; the interim fragment is regenerated
and re-normalized on every result event.
"""

import logging
import threading
from enum import StrEnum

from voicetext.core.config import get_settings
from voicetext.core.exceptions import UnsupportedCapabilityError
from voicetext.services.terms import normalize_terms
from voicetext.services.transcription.base import (
    RecognitionCapability,
    RecognitionEvent,
    RecognitionStartError,
)
from voicetext.ui.options import SessionOptions
from voicetext.ui.transcript import TranscriptBuffer

logger = logging.getLogger(__name__)


class LiveState(StrEnum):
    """Possible states of the live adapter."""

    idle = "idle"
    listening = "listening"
    stopped_error = "stopped-error"


ERROR_MESSAGES = {
    "no-speech": "No speech detected. Try again.",
    "audio-capture": "No microphone found.",
    "not-allowed": "Microphone permission denied.",
    "network": "Network error occurred.",
}


def describe_error(code: str) -> str:
    """One-line status message for a recognizer error code."""
    return f"Error: {ERROR_MESSAGES.get(code, code)}"


class LiveRecognitionAdapter:
    """Binds a ``RecognitionCapability`` to a transcript.

    Args:
        capability: The recognizer, or None when the host has none.
        transcript: Buffer receiving normalized fragments.
        options: Session options (language, continuous, tech terms).
        restart_delay: Seconds before a continuous-mode restart.
    """

    def __init__(
        self,
        capability: RecognitionCapability | None,
        transcript: TranscriptBuffer,
        options: SessionOptions,
        restart_delay: float | None = None,
    ) -> None:
        self._capability = capability
        self._transcript = transcript
        self._options = options
        self._restart_delay = (
            get_settings().live_restart_delay if restart_delay is None else restart_delay
        )
        self._lock = threading.RLock()
        self._manually_stopped = False
        self._restart_timer: threading.Timer | None = None

        self.state = LiveState.idle
        self.status = "Ready"
        self.last_error: str | None = None

        if capability is None:
            self.status = "Speech recognition not supported on this host."
        else:
            capability.on_start = self._handle_start
            capability.on_end = self._handle_end
            capability.on_result = self._handle_result
            capability.on_error = self._handle_error

    @property
    def supported(self) -> bool:
        return self._capability is not None

    @property
    def can_start(self) -> bool:
        return self.supported and self.state is not LiveState.listening

    # -- commands --

    def start(self) -> None:
        """Start listening with the current session options.

        Raises:
            UnsupportedCapabilityError: If no recognizer is available.
        """
        if self._capability is None:
            raise UnsupportedCapabilityError()
        with self._lock:
            if self.state is LiveState.listening:
                logger.warning("Live recognition already listening")
                return
            self._manually_stopped = False
            self._cancel_restart()
            self._capability.language = self._options.language
            self._capability.continuous = self._options.continuous
        try:
            self._capability.start()
        except RecognitionStartError as exc:
            logger.error("Failed to start recognition: %s", exc)
            with self._lock:
                self.state = LiveState.stopped_error
                self.status = "Failed to start. Please try again."

    def stop(self) -> None:
        """User-initiated stop; suppresses the continuous-mode restart."""
        if self._capability is None:
            return
        with self._lock:
            if self._cancel_restart():
                # Between two sessions of a continuous run: nothing to stop
                self._manually_stopped = False
                self._transcript.set_interim("")
                self.state = LiveState.idle
                self.status = "Stopped"
                return
            self._manually_stopped = True
            listening = self.state is LiveState.listening
        if listening:
            self._capability.stop()

    # -- capability callbacks --

    def _handle_start(self) -> None:
        with self._lock:
            self.state = LiveState.listening
            self.status = "Listening..."
            self.last_error = None

    def _handle_end(self) -> None:
        with self._lock:
            restart = (
                not self._manually_stopped
                and self._options.continuous
                and self.state is not LiveState.stopped_error
            )
            self._manually_stopped = False
            if restart:
                logger.debug("Recognition session ended; restarting in %.2fs", self._restart_delay)
                self._restart_timer = threading.Timer(self._restart_delay, self._restart)
                self._restart_timer.daemon = True
                self._restart_timer.start()
                return
            self._transcript.set_interim("")
            if self.state is not LiveState.stopped_error:
                self.state = LiveState.idle
                self.status = "Stopped"

    def _handle_result(self, event: RecognitionEvent) -> None:
        enabled = self._options.tech_terms_enabled
        interim_parts: list[str] = []
        with self._lock:
            for hypothesis in event.results[event.result_index :]:
                if hypothesis.is_final:
                    self._transcript.append_final(
                        normalize_terms(hypothesis.transcript, enabled=enabled)
                    )
                else:
                    interim_parts.append(hypothesis.transcript)
            self._transcript.set_interim(normalize_terms("".join(interim_parts), enabled=enabled))

    def _handle_error(self, code: str) -> None:
        logger.error("Speech recognition error: %s", code)
        with self._lock:
            self.state = LiveState.stopped_error
            self.last_error = code
            self.status = describe_error(code)

    # -- restart --

    def _restart(self) -> None:
        with self._lock:
            if self._restart_timer is None or self._manually_stopped:
                return  # cancelled while the timer was firing
            self._restart_timer = None
        try:
            self._capability.start()
        except RecognitionStartError:
            # Lost the race against a session that is already running
            logger.debug("Recognition restart skipped: session already running")

    def _cancel_restart(self) -> bool:
        """Cancel a scheduled restart. Returns True if one was pending."""
        if self._restart_timer is None:
            return False
        self._restart_timer.cancel()
        self._restart_timer = None
        return True
