"""
Capture session: one transcript fed by exactly one active capture path.

The active path is an explicit ``CaptureMode`` chosen by the user.
Switching modes stops whatever the previous path was doing.
"""

import logging
from collections.abc import Callable

from voicetext.services.audio.capture import AudioRecorder, MicrophoneRecorder
from voicetext.services.transcription.base import RecognitionCapability
from voicetext.ui.api_client import APIClient
from voicetext.ui.live import LiveRecognitionAdapter, LiveState
from voicetext.ui.offline import OfflineState, OfflineTranscriptionClient
from voicetext.ui.options import CaptureMode, SessionOptions
from voicetext.ui.transcript import TranscriptBuffer

logger = logging.getLogger(__name__)


class CaptureSession:
    """Owns the transcript, the options and both capture paths.

    Args:
        api_client: Backend client used by offline capture.
        capability: Live recognizer, or None if the host has none.
        options: Session options; defaults from settings.
        recorder_factory: Recorder builder for offline capture.
    """

    def __init__(
        self,
        api_client: APIClient,
        capability: RecognitionCapability | None = None,
        options: SessionOptions | None = None,
        recorder_factory: Callable[[], AudioRecorder] = MicrophoneRecorder,
    ) -> None:
        self.options = options or SessionOptions.from_settings()
        self.transcript = TranscriptBuffer()
        self.mode = CaptureMode.live
        self.live = LiveRecognitionAdapter(capability, self.transcript, self.options)
        self.offline = OfflineTranscriptionClient(
            api_client, self.transcript, self.options, recorder_factory=recorder_factory
        )

    @property
    def is_capturing(self) -> bool:
        if self.mode is CaptureMode.live:
            return self.live.state is LiveState.listening
        return self.offline.state is not OfflineState.idle

    @property
    def status(self) -> str:
        return self.live.status if self.mode is CaptureMode.live else self.offline.status

    def switch_mode(self, mode: CaptureMode) -> None:
        """Select the capture path; a running capture is stopped first."""
        mode = CaptureMode(mode)
        if mode is self.mode:
            return
        logger.info("Switching capture mode: %s -> %s", self.mode, mode)
        self.stop()
        self.mode = mode

    def start(self, edited_text: str | None = None) -> None:
        """Start the active path.

        Args:
            edited_text: Current contents of the editable transcript box.
                When given, it replaces the history so new fragments
                append to what the user sees.
        """
        if edited_text is not None:
            self.transcript.load(edited_text)
        if self.mode is CaptureMode.live:
            self.live.start()
        else:
            self.offline.start()

    def stop(self) -> dict | None:
        """Stop the active path. Offline returns the server response, if any."""
        if self.mode is CaptureMode.live:
            self.live.stop()
            return None
        return self.offline.stop()

    def submit_recording(
        self,
        audio: bytes,
        filename: str = "recording.webm",
        content_type: str = "audio/webm",
        edited_text: str | None = None,
    ) -> dict | None:
        """Upload audio recorded outside the session (e.g. by the browser).

        The transcript is re-seeded from ``edited_text`` first, as ``start`` does.
        """
        if edited_text is not None:
            self.transcript.load(edited_text)
        return self.offline.submit(audio, filename=filename, content_type=content_type)

    def clear(self) -> None:
        self.transcript.clear()
