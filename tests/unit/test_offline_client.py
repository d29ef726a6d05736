"""Tests for the offline (record, upload, append) client.

The recorder and the API client are replaced with fakes so that each
state transition and status message can be checked without a device
or a running backend.
"""

from unittest.mock import MagicMock

import pytest

from voicetext.core.exceptions import DeviceUnavailableError, PermissionDeniedError
from voicetext.services.audio.capture import AudioRecorder
from voicetext.ui.api_client import APIError, NetworkError
from voicetext.ui.offline import OfflineState, OfflineTranscriptionClient
from voicetext.ui.options import SessionOptions
from voicetext.ui.transcript import TranscriptBuffer

SERVER_RESULT = {
    "text": "deploy with docker and kubernetes",
    "stats": {"processingTimeMs": 850.0, "audioFileSizeBytes": 32044, "audioDurationSeconds": 1.0},
}


class FakeRecorder(AudioRecorder):
    """Recorder returning canned bytes, or raising on start."""

    filename = "recording.wav"
    content_type = "audio/wav"

    def __init__(self, audio: bytes = b"RIFF....WAVE", error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.started = False
        self.stopped = False

    def start(self) -> None:
        if self.error is not None:
            raise self.error
        self.started = True

    def stop(self) -> bytes:
        self.stopped = True
        return self.audio


@pytest.fixture
def api():
    mock = MagicMock()
    mock.transcribe.return_value = SERVER_RESULT
    return mock


@pytest.fixture
def transcript():
    return TranscriptBuffer()


@pytest.fixture
def options():
    return SessionOptions(language="en-US")


def _client(api, transcript, options, recorder: FakeRecorder | None = None):
    recorder = recorder or FakeRecorder()
    client = OfflineTranscriptionClient(api, transcript, options, recorder_factory=lambda: recorder)
    return client, recorder


class TestRecording:
    """Start and stop of the local recording."""

    def test_start_enters_recording(self, api, transcript, options):
        client, recorder = _client(api, transcript, options)
        client.start()
        assert recorder.started is True
        assert client.state is OfflineState.recording
        assert client.status == "Recording for Whisper..."
        assert client.can_start is False

    def test_permission_denied(self, api, transcript, options):
        client, _ = _client(api, transcript, options, FakeRecorder(error=PermissionDeniedError()))
        with pytest.raises(PermissionDeniedError):
            client.start()
        assert client.state is OfflineState.idle
        assert client.status == "Microphone access denied"

    def test_no_device(self, api, transcript, options):
        client, _ = _client(api, transcript, options, FakeRecorder(error=DeviceUnavailableError()))
        with pytest.raises(DeviceUnavailableError):
            client.start()
        assert client.state is OfflineState.idle
        assert client.status == "No microphone found"

    def test_stop_without_start(self, api, transcript, options):
        client, _ = _client(api, transcript, options)
        assert client.stop() is None
        api.transcribe.assert_not_called()

    def test_empty_recording_is_not_uploaded(self, api, transcript, options):
        client, recorder = _client(api, transcript, options, FakeRecorder(audio=b""))
        client.start()
        assert client.stop() is None
        assert recorder.stopped is True
        assert client.state is OfflineState.idle
        assert client.status == "No audio captured"
        api.transcribe.assert_not_called()


class TestSubmit:
    """Upload outcomes."""

    def test_success_appends_normalized_text(self, api, transcript, options):
        client, _ = _client(api, transcript, options)
        client.start()

        result = client.stop()

        assert result == SERVER_RESULT
        api.transcribe.assert_called_once_with(
            b"RIFF....WAVE", language="en", filename="recording.wav", content_type="audio/wav"
        )
        assert transcript.segments == ["deploy with Docker and Kubernetes"]
        assert client.last_stats == SERVER_RESULT["stats"]
        assert client.state is OfflineState.idle
        assert client.status == "Transcription complete"

    def test_normalization_disabled(self, api, transcript, options):
        options.tech_terms_enabled = False
        client, _ = _client(api, transcript, options)
        client.submit(b"audio")
        assert transcript.segments == ["deploy with docker and kubernetes"]

    def test_empty_text_not_appended(self, api, transcript, options):
        api.transcribe.return_value = {"text": "", "stats": {}}
        client, _ = _client(api, transcript, options)
        client.submit(b"audio")
        assert transcript.segments == []
        assert client.status == "Transcription complete"

    def test_submit_defaults_to_webm(self, api, transcript, options):
        client, _ = _client(api, transcript, options)
        client.submit(b"\x1a\x45\xdf\xa3")
        kwargs = api.transcribe.call_args.kwargs
        assert kwargs["filename"] == "recording.webm"
        assert kwargs["content_type"] == "audio/webm"

    def test_server_error(self, api, transcript, options):
        api.transcribe.side_effect = APIError(
            "Whisper is not available on this server.", category="http", status_code=503
        )
        client, _ = _client(api, transcript, options)

        assert client.submit(b"audio") is None

        assert client.state is OfflineState.idle
        assert client.status == "Server error: Whisper is not available on this server."
        assert transcript.segments == []

    def test_network_error(self, api, transcript, options):
        api.transcribe.side_effect = NetworkError("refused", category="connection")
        client, _ = _client(api, transcript, options)

        assert client.submit(b"audio") is None

        assert client.state is OfflineState.idle
        assert client.status == "Failed to connect to server"
        assert client.can_start is True

    def test_processing_state_during_upload(self, api, transcript, options):
        client, _ = _client(api, transcript, options)
        seen = []
        api.transcribe.side_effect = lambda *a, **kw: seen.append(client.state) or SERVER_RESULT
        client.submit(b"audio")
        assert seen == [OfflineState.processing]


class TestRecorderFailure:
    """A recorder that fails to finalize still returns the client to idle."""

    class BrokenRecorder(FakeRecorder):
        def stop(self) -> bytes:
            raise OSError("Stream not open")

    def test_stop_failure_re_enables_start(self, api, transcript, options):
        client, _ = _client(api, transcript, options, self.BrokenRecorder())
        client.start()

        assert client.stop() is None

        assert client.can_start is True
        assert client.state is OfflineState.idle
        assert client.status == "Recording failed"
        api.transcribe.assert_not_called()

    def test_can_record_again_after_failure(self, api, transcript, options):
        recorders = iter([self.BrokenRecorder(), FakeRecorder()])
        client = OfflineTranscriptionClient(
            api, transcript, options, recorder_factory=lambda: next(recorders)
        )
        client.start()
        client.stop()

        client.start()
        assert client.stop() == SERVER_RESULT
        assert client.status == "Transcription complete"
