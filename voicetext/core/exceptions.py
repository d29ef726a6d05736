"""
Voice-to-text exception hierarchy.

All application-specific exceptions inherit from VoiceTextError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class VoiceTextError(Exception):
    """Base exception for all voice-to-text errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICETEXT_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class BadRequestError(VoiceTextError):
    """Raised when the client sends a malformed or empty upload."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(detail=detail, code="BAD_REQUEST", status_code=400)


class ServiceUnavailableError(VoiceTextError):
    """Raised when the whisper.cpp executable cannot be located."""

    def __init__(
        self,
        detail: str = (
            "Whisper is not available on this server. "
            "Please use Live mode or install whisper.cpp."
        ),
    ) -> None:
        super().__init__(detail=detail, code="SERVICE_UNAVAILABLE", status_code=503)


class ConversionFailedError(VoiceTextError):
    """Raised when ffmpeg exits non-zero."""

    def __init__(
        self,
        detail: str = "Failed to convert audio format. Make sure ffmpeg is installed.",
    ) -> None:
        super().__init__(detail=detail, code="CONVERSION_FAILED", status_code=500)


class TranscriptionFailedError(VoiceTextError):
    """Raised when the whisper.cpp engine exits non-zero."""

    def __init__(
        self, detail: str = "Whisper transcription failed. Check server logs."
    ) -> None:
        super().__init__(detail=detail, code="TRANSCRIPTION_FAILED", status_code=500)


class PermissionDeniedError(VoiceTextError):
    """Raised when microphone access is refused."""

    def __init__(self, detail: str = "Microphone permission denied") -> None:
        super().__init__(detail=detail, code="PERMISSION_DENIED", status_code=403)


class DeviceUnavailableError(VoiceTextError):
    """Raised when no audio input device is present."""

    def __init__(self, detail: str = "No microphone found") -> None:
        super().__init__(detail=detail, code="DEVICE_UNAVAILABLE", status_code=503)


class UnsupportedCapabilityError(VoiceTextError):
    """Raised when live recognition is requested on a host without a recognizer."""

    def __init__(
        self, detail: str = "Speech recognition is not supported on this platform"
    ) -> None:
        super().__init__(detail=detail, code="UNSUPPORTED_CAPABILITY", status_code=501)
