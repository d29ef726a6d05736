"""
Voice-to-text Streamlit UI: main entry point.

Run with: ``streamlit run voicetext/ui/app.py``

Live mode drives the local streaming recognizer on this machine's
microphone; Offline mode records in the browser and uploads the clip to
the backend's whisper.cpp pipeline.
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from voicetext.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (voicetext/ui/),
# which removes the project root needed for absolute imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from voicetext.core.config import get_settings  # noqa: E402
from voicetext.core.exceptions import VoiceTextError  # noqa: E402
from voicetext.services.audio.capture import microphone_supported  # noqa: E402
from voicetext.ui.api_client import APIClient, APIError  # noqa: E402
from voicetext.ui.options import CaptureMode  # noqa: E402
from voicetext.ui.session import CaptureSession  # noqa: E402

st.set_page_config(page_title="Voice to Text", page_icon="\U0001f399️", layout="wide")

_LANGUAGES = {
    "en-US": "English (US)",
    "en-GB": "English (UK)",
    "de-DE": "Deutsch",
    "es-ES": "Español",
    "fr-FR": "Français",
    "ja-JP": "日本語",
    "ko-KR": "한국어",
    "zh-CN": "中文",
}


@st.cache_resource
def get_api_client(base_url: str) -> APIClient:
    """Return a cached APIClient, keyed by base_url."""
    return APIClient(base_url=base_url)


def _build_session(client: APIClient) -> CaptureSession:
    capability = None
    if microphone_supported():
        from voicetext.services.transcription.stream import WhisperStreamRecognizer

        capability = WhisperStreamRecognizer()
    return CaptureSession(client, capability=capability)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
if "api_base_url" not in st.session_state:
    st.session_state.api_base_url = get_settings().api_base_url

with st.sidebar:
    st.title("\U0001f399️ Voice to Text")
    st.session_state.api_base_url = st.text_input(
        "Backend API URL", value=st.session_state.api_base_url
    )
    client = get_api_client(st.session_state.api_base_url)

    conn_ok, conn_msg = client.check_connection()
    if conn_ok:
        st.success(f"Backend: {conn_msg}")
        try:
            if client.whisper_status()["available"]:
                model = client.model_info()
                st.info(
                    f"Whisper model: **{model['modelName']}** "
                    f"({model['modelSizeFormatted'] or 'not found'})"
                )
            else:
                st.warning("Whisper is not installed on the server. Offline mode is unavailable.")
        except APIError as exc:
            st.error(f"Whisper status: {exc.message}")
    else:
        st.error(f"Backend: {conn_msg}")

if "capture_session" not in st.session_state:
    st.session_state.capture_session = _build_session(client)
session: CaptureSession = st.session_state.capture_session

# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------
mode_labels = {CaptureMode.live: "Live", CaptureMode.offline: "Offline (Whisper)"}
mode = st.radio(
    "Mode",
    list(mode_labels),
    index=list(mode_labels).index(session.mode),
    format_func=mode_labels.get,
    horizontal=True,
)
session.switch_mode(mode)

col_lang, col_cont, col_terms = st.columns(3)
with col_lang:
    codes = list(_LANGUAGES)
    idx = codes.index(session.options.language) if session.options.language in codes else 0
    session.options.language = st.selectbox(
        "Language", codes, index=idx, format_func=_LANGUAGES.get
    )
with col_cont:
    session.options.continuous = st.checkbox("Continuous", value=session.options.continuous)
with col_terms:
    session.options.tech_terms_enabled = st.checkbox(
        "Fix technical terms", value=session.options.tech_terms_enabled
    )

if session.mode is CaptureMode.live:
    start_col, stop_col = st.columns(2)
    with start_col:
        if st.button("Start", disabled=not session.live.can_start, use_container_width=True):
            try:
                session.start(edited_text=st.session_state.get("edited_transcript"))
            except VoiceTextError as exc:
                st.error(exc.detail)
            st.rerun()
    with stop_col:
        if st.button("Stop", disabled=not session.is_capturing, use_container_width=True):
            session.stop()
            st.rerun()
else:
    audio = st.audio_input("Record audio")
    if audio is not None and st.session_state.get("_submitted_audio") != audio.file_id:
        st.session_state._submitted_audio = audio.file_id
        with st.spinner("Processing with Whisper..."):
            session.submit_recording(
                audio.getvalue(),
                filename=audio.name or "recording.wav",
                content_type=audio.type or "audio/wav",
                edited_text=st.session_state.get("edited_transcript"),
            )


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------
@st.fragment(run_every=1.0 if session.is_capturing else None)
def _render_transcript() -> None:
    st.caption(session.status)
    # Editable while idle; the next Start or upload continues from the edited text
    st.session_state.edited_transcript = st.text_area(
        "Transcript",
        value=session.transcript.text,
        height=300,
        disabled=session.is_capturing,
    )
    if st.session_state.edited_transcript.strip():
        st.code(st.session_state.edited_transcript, language=None)
    st.caption(
        f"{session.transcript.word_count} words · {session.transcript.char_count} characters"
    )
    stats = session.offline.last_stats
    if session.mode is CaptureMode.offline and stats:
        st.caption(
            f"Processed {stats['audioDurationSeconds']:.1f}s of audio "
            f"({stats['audioFileSizeBytes']} bytes) in {stats['processingTimeMs']:.0f} ms"
        )


_render_transcript()

if st.button("Clear"):
    session.clear()
    st.session_state.edited_transcript = ""
    st.rerun()
