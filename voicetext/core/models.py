"""
Pydantic v2 request / response models used across the API layer.

Wire format is camelCase (``processingTimeMs``); Python attributes stay
snake_case and either spelling is accepted on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranscriptionStats(_CamelModel):
    """Timing and size figures for one offline transcription."""

    processing_time_ms: float = 0.0
    audio_file_size_bytes: int = 0
    audio_duration_seconds: float = 0.0


class TranscriptionResult(_CamelModel):
    """POST /api/transcribe response."""

    text: str = ""
    stats: TranscriptionStats = Field(default_factory=TranscriptionStats)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class WhisperStatusResponse(_CamelModel):
    """GET /api/whisper/status response."""

    available: bool


class ModelInfo(_CamelModel):
    """GET /api/whisper/model response. Missing model files report zero size."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = ""
    model_size_bytes: int = 0
    model_size_formatted: str = ""
    model_path: str = ""


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API."""

    detail: str
    code: str
    timestamp: str
