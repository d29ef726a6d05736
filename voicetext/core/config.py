"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Voice-to-text settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        whisper_executable_path: Explicit whisper.cpp binary, probed first.
        whisper_fallback_paths: Conventional install locations probed in order.
        whisper_model_path: ggml model file handed to whisper.cpp.
        ffmpeg_path: Transcoder executable (resolved through PATH).
        temp_dir: Scratch directory for per-request audio artifacts.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- whisper.cpp engine ---
    whisper_executable_path: str = "/usr/local/bin/whisper"
    whisper_fallback_paths: list[str] = [
        "/usr/local/bin/whisper",
        "/opt/homebrew/bin/whisper",
        "./whisper.cpp/build/bin/whisper-cli",
        "~/whisper.cpp/build/bin/whisper-cli",
        "./whisper.cpp/main",
    ]
    whisper_model_path: str = "models/ggml-base.en.bin"

    # --- Audio conversion ---
    ffmpeg_path: str = "ffmpeg"
    temp_dir: str = str(Path(tempfile.gettempdir()) / "voice-to-text")
    default_language: str = "en"

    # --- Capture (client side) ---
    tech_terms_enabled: bool = True  # Initial per-session normalization flag
    live_restart_delay: float = 0.1  # Seconds before continuous-mode restart
    recorder_flush_interval: float = 1.0  # Microphone chunk size in seconds
    stream_model: str = "base"  # faster-whisper model for local live recognition
    api_base_url: str = "http://localhost:8000"

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
