"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from functools import lru_cache

from .base import BaseSTT

__all__ = ["BaseSTT", "create_stt", "get_stt"]


def create_stt(provider: str = "whisper.cpp", **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("whisper.cpp" / "local")
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider in ("whisper.cpp", "local"):
        from .whisper_cpp import WhisperCppSTT
        return WhisperCppSTT(**kwargs)
    else:
        raise ValueError(f"Unknown STT provider: {provider}")


@lru_cache
def get_stt() -> BaseSTT:
    """Return the process-wide STT instance used by the API routes."""
    return create_stt()
