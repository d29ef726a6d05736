"""
Offline transcription endpoint.

``POST /api/transcribe`` accepts a multipart upload, validates it, checks
that the engine is installed and delegates the rest to the STT provider.
Nothing is written to disk and no subprocess is started until the upload
has passed validation and the engine has been found.
"""

import logging

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from voicetext.core.config import get_settings
from voicetext.core.exceptions import BadRequestError, ServiceUnavailableError
from voicetext.core.models import ErrorResponse, TranscriptionResult
from voicetext.services.transcription import get_stt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcription"])


@router.post(
    "/transcribe",
    response_model=TranscriptionResult,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def transcribe(request: Request):
    """Transcribe an uploaded recording with whisper.cpp.

    Form fields: ``audio`` (file, required) and ``language``
    (ISO 639-1 code, defaults to the configured language).
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        raise BadRequestError("Expected multipart form data")

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException, ValueError) as exc:
        raise BadRequestError("Malformed multipart form data") from exc

    try:
        audio = form.get("audio")
        language = form.get("language")
        if not isinstance(language, str) or not language.strip():
            language = get_settings().default_language

        if not isinstance(audio, UploadFile):
            raise BadRequestError("No audio file provided")
        data = await audio.read()
    finally:
        await form.close()

    if not data:
        raise BadRequestError("No audio file provided")

    stt = get_stt()
    if not stt.is_available():
        raise ServiceUnavailableError()

    logger.info("Transcribing upload: %d bytes, language=%s", len(data), language)
    return await stt.transcribe(data, language.strip())
