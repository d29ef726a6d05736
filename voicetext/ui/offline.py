"""
Offline capture: record locally, upload once, append the server's text.

States: idle -> recording -> processing -> idle

Every outcome (success, server error, unreachable server) ends in idle
with a one-line status, so the start control is always re-enabled. There
is no automatic retry.
"""

import logging
from collections.abc import Callable
from enum import StrEnum

from voicetext.core.exceptions import DeviceUnavailableError, PermissionDeniedError
from voicetext.services.audio.capture import AudioRecorder, MicrophoneRecorder
from voicetext.services.terms import normalize_terms
from voicetext.ui.api_client import APIClient, APIError, NetworkError
from voicetext.ui.options import SessionOptions
from voicetext.ui.transcript import TranscriptBuffer

logger = logging.getLogger(__name__)


class OfflineState(StrEnum):
    """Possible states of the offline client."""

    idle = "idle"
    recording = "recording"
    processing = "processing"


class OfflineTranscriptionClient:
    """Records audio and submits it to ``POST /api/transcribe``.

    Args:
        api_client: HTTP client for the backend.
        transcript: Buffer receiving the normalized result.
        options: Session options (language, tech terms).
        recorder_factory: Builds a fresh recorder per recording.
    """

    def __init__(
        self,
        api_client: APIClient,
        transcript: TranscriptBuffer,
        options: SessionOptions,
        recorder_factory: Callable[[], AudioRecorder] = MicrophoneRecorder,
    ) -> None:
        self._api = api_client
        self._transcript = transcript
        self._options = options
        self._recorder_factory = recorder_factory
        self._recorder: AudioRecorder | None = None

        self.state = OfflineState.idle
        self.status = "Ready"
        self.last_stats: dict | None = None

    @property
    def can_start(self) -> bool:
        return self.state is OfflineState.idle

    def start(self) -> None:
        """Acquire the microphone and begin recording.

        Raises:
            PermissionDeniedError: If microphone access is refused.
            DeviceUnavailableError: If no microphone is present.
        """
        if not self.can_start:
            logger.warning("Offline capture already %s", self.state)
            return
        recorder = self._recorder_factory()
        try:
            recorder.start()
        except PermissionDeniedError:
            self.status = "Microphone access denied"
            raise
        except DeviceUnavailableError:
            self.status = "No microphone found"
            raise
        self._recorder = recorder
        self.state = OfflineState.recording
        self.status = "Recording for Whisper..."

    def stop(self) -> dict | None:
        """Finish recording, release the device and submit captured audio.

        Returns:
            The server response, or None if nothing was captured or the
            request failed.
        """
        if self.state is not OfflineState.recording or self._recorder is None:
            return None
        recorder, self._recorder = self._recorder, None
        try:
            audio = recorder.stop()
        except OSError as exc:
            logger.error("Failed to finalize recording: %s", exc)
            self.state = OfflineState.idle
            self.status = "Recording failed"
            return None
        if not audio:
            self.state = OfflineState.idle
            self.status = "No audio captured"
            return None
        return self.submit(audio, filename=recorder.filename, content_type=recorder.content_type)

    def submit(
        self,
        audio: bytes,
        filename: str = "recording.webm",
        content_type: str = "audio/webm",
    ) -> dict | None:
        """Upload one recording and append the normalized text.

        Returns:
            The server response, or None if the request failed.
        """
        self.state = OfflineState.processing
        self.status = "Processing with Whisper..."
        try:
            result = self._api.transcribe(
                audio,
                language=self._options.offline_language,
                filename=filename,
                content_type=content_type,
            )
        except NetworkError as exc:
            logger.error("Transcription request failed: %s", exc.message)
            self.status = "Failed to connect to server"
            return None
        except APIError as exc:
            logger.error("Server rejected transcription: %s", exc.message)
            self.status = f"Server error: {exc.message}"
            return None
        finally:
            self.state = OfflineState.idle

        text = result.get("text", "")
        if text:
            self._transcript.append_final(
                normalize_terms(text, enabled=self._options.tech_terms_enabled)
            )
        self.last_stats = result.get("stats")
        self.status = "Transcription complete"
        return result
