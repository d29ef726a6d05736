"""
Engine introspection endpoints.

Read-only probes used by the UI to decide whether Offline mode can be
offered and to show which model the server would load.
"""

from fastapi import APIRouter

from voicetext.core.models import ModelInfo, WhisperStatusResponse
from voicetext.services.transcription import get_stt

router = APIRouter(prefix="/api/whisper", tags=["whisper"])


@router.get("/status", response_model=WhisperStatusResponse)
async def whisper_status():
    """Report whether a whisper.cpp executable was found."""
    return WhisperStatusResponse(available=get_stt().is_available())


@router.get("/model", response_model=ModelInfo)
async def whisper_model():
    """Describe the configured model file (zero size when missing)."""
    return get_stt().get_model_info()
