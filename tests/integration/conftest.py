"""Integration test fixtures for voice-to-text.

Provides an async HTTP client wired to a real ``WhisperCppSTT`` whose
ffmpeg and whisper.cpp executables are small Python scripts. The
scripts honour the same command-line contract as the real tools, so
the whole upload, convert, recognize, cleanup pipeline runs end to end.
"""

import sys
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from voicetext.api.app import create_app
from voicetext.services.transcription.whisper_cpp import WhisperCppSTT

FAKE_FFMPEG = """
import sys
args = sys.argv[1:]
source = args[args.index("-i") + 1]
with open(source, "rb") as fh:
    data = fh.read()
if data.startswith(b"BAD"):
    sys.stderr.write("Invalid data found when processing input\\n")
    sys.exit(1)
with open(args[-2], "wb") as fh:
    fh.write(b"\\x00" * (44 + 32000 * 2))
"""

FAKE_WHISPER = """
import sys
args = sys.argv[1:]
with open(args[args.index("-f") + 1], "rb") as fh:
    size = len(fh.read())
if size < 44:
    sys.exit(3)
language = args[args.index("-l") + 1]
prefix = args[args.index("-of") + 1]
with open(prefix + ".txt", "w", encoding="utf-8") as fh:
    fh.write("  [" + language + "] i write type script with use state  \\n")
"""


def _write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(0o755)
    return path


@pytest.fixture
def pipeline_settings(settings, tmp_path):
    """Settings pointing at the scripted ffmpeg and whisper.cpp."""
    settings.ffmpeg_path = str(_write_script(tmp_path / "bin" / "ffmpeg", FAKE_FFMPEG))
    _write_script(Path(settings.whisper_executable_path), FAKE_WHISPER)
    return settings


@pytest.fixture
def pipeline_stt(pipeline_settings):
    return WhisperCppSTT(pipeline_settings)


@pytest.fixture
async def async_client(pipeline_stt):
    """AsyncClient whose routes use the scripted pipeline."""
    transport = ASGITransport(app=create_app())
    with (
        patch("voicetext.api.routes.transcribe.get_stt", return_value=pipeline_stt),
        patch("voicetext.api.routes.whisper.get_stt", return_value=pipeline_stt),
    ):
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
