"""Shared pytest fixtures for the voice-to-text test suite.

Provides isolated settings pointing at a temporary directory tree, a
fake engine executable, a mocked STT provider and PCM audio samples.
"""

import math
import struct
from unittest.mock import AsyncMock

import pytest

from voicetext.core.config import Settings
from voicetext.core.models import ModelInfo, TranscriptionResult, TranscriptionStats

# ---------------------------------------------------------------------------
# Settings / engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path):
    """Settings whose engine, model and scratch paths live under tmp_path.

    No executable exists at the engine path until ``fake_engine`` is used,
    and the fallback list is empty so the host's real installs are ignored.
    """
    return Settings(
        whisper_executable_path=str(tmp_path / "bin" / "whisper-cli"),
        whisper_fallback_paths=[],
        whisper_model_path=str(tmp_path / "models" / "ggml-base.en.bin"),
        ffmpeg_path="ffmpeg",
        temp_dir=str(tmp_path / "work"),
    )


@pytest.fixture
def fake_engine(settings):
    """Create an (inert) engine file at the configured executable path."""
    from pathlib import Path

    path = Path(settings.whisper_executable_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for API tests.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface that reports
        itself available and returns a short transcription.
    """
    from voicetext.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.is_available.return_value = True
    stt.get_model_info.return_value = ModelInfo(
        model_name="ggml-base.en.bin",
        model_size_bytes=1536,
        model_size_formatted="1.5 KB",
        model_path="models/ggml-base.en.bin",
    )
    stt.transcribe.return_value = TranscriptionResult(
        text="hello world",
        stats=TranscriptionStats(
            processing_time_ms=12.5,
            audio_file_size_bytes=2048,
            audio_duration_seconds=1.0,
        ),
    )
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(sample_rate):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


@pytest.fixture
def silent_pcm_bytes():
    """Generate 1 second of silence as PCM audio (16kHz, 16-bit, mono)."""
    return b"\x00\x00" * 16000
