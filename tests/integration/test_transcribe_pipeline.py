"""End-to-end tests for ``POST /api/transcribe``.

Runs the real request handling, temp-file lifecycle and subprocess calls
against scripted stand-ins for ffmpeg and whisper.cpp.
"""

from pathlib import Path

from voicetext.services.terms import normalize_terms


def _work_files(settings) -> list[Path]:
    work = Path(settings.temp_dir)
    return list(work.iterdir()) if work.exists() else []


async def test_upload_is_transcribed(async_client, pipeline_settings):
    resp = await async_client.post(
        "/api/transcribe",
        files={"audio": ("recording.webm", b"\x1a\x45\xdf\xa3" * 256, "audio/webm")},
        data={"language": "en"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["text"] == "[en] i write type script with use state"
    stats = body["stats"]
    assert stats["audioFileSizeBytes"] == 1024
    assert stats["audioDurationSeconds"] == 2.0
    assert stats["processingTimeMs"] > 0
    assert _work_files(pipeline_settings) == []


async def test_language_reaches_engine(async_client):
    resp = await async_client.post(
        "/api/transcribe",
        files={"audio": ("recording.webm", b"audio", "audio/webm")},
        data={"language": "ko"},
    )
    assert resp.json()["text"].startswith("[ko]")


async def test_client_side_normalization_of_server_text(async_client):
    """The server returns raw text; normalization is applied by the client."""
    resp = await async_client.post(
        "/api/transcribe", files={"audio": ("recording.webm", b"audio", "audio/webm")}
    )
    assert normalize_terms(resp.json()["text"]) == "[en] i write TypeScript with useState"


async def test_conversion_failure_cleans_up(async_client, pipeline_settings):
    resp = await async_client.post(
        "/api/transcribe",
        files={"audio": ("recording.webm", b"BAD not audio", "audio/webm")},
    )

    assert resp.status_code == 500
    assert resp.json()["code"] == "CONVERSION_FAILED"
    assert _work_files(pipeline_settings) == []


async def test_engine_missing(async_client, pipeline_settings):
    Path(pipeline_settings.whisper_executable_path).unlink()

    status = await async_client.get("/api/whisper/status")
    resp = await async_client.post(
        "/api/transcribe", files={"audio": ("recording.webm", b"audio", "audio/webm")}
    )

    assert status.json() == {"available": False}
    assert resp.status_code == 503
    assert not Path(pipeline_settings.temp_dir).exists()


async def test_model_descriptor(async_client, pipeline_settings):
    model = Path(pipeline_settings.whisper_model_path)
    model.parent.mkdir(parents=True)
    model.write_bytes(b"\x00" * 2048)

    resp = await async_client.get("/api/whisper/model")

    assert resp.json() == {
        "modelName": "ggml-base.en.bin",
        "modelSizeBytes": 2048,
        "modelSizeFormatted": "2 KB",
        "modelPath": str(model),
    }
