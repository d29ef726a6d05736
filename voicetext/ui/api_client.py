"""
Synchronous HTTP client for the voice-to-text backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

# whisper.cpp on CPU can take a while for long recordings
TRANSCRIBE_TIMEOUT = 300.0


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown", status_code: int | None = None) -> None:
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)


class NetworkError(APIError):
    """The request never produced an HTTP response (refused, timed out, dropped)."""


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON dicts or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the voice-to-text FastAPI backend.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=30.0)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/transcribe").
            **kwargs: Passed through to httpx (files, data, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            NetworkError: On connection, timeout, or transport errors.
            APIError: On non-success HTTP status.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise NetworkError(
                "Backend server is not running. "
                "Start it with: `python -m voicetext.api`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise NetworkError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("detail", exc.response.text)
            except ValueError:
                detail = exc.response.text or str(exc)
            raise APIError(
                str(detail), category="http", status_code=exc.response.status_code
            ) from None
        except httpx.HTTPError as exc:
            raise NetworkError(f"Network error: {exc}", category="network") from None

    def _request_json(self, method: str, path: str, **kwargs) -> dict:
        """Like ``_request`` but returns the decoded JSON body.

        Raises:
            APIError: If a successful response does not carry JSON.
        """
        resp = self._request(method, path, **kwargs)
        try:
            return resp.json()
        except ValueError:
            raise APIError(
                "Invalid response from server", category="http", status_code=resp.status_code
            ) from None

    def close(self) -> None:
        self._client.close()

    # -- health --

    def health_check(self) -> dict:
        return self._request_json("get", "/health")

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcription --

    def transcribe(
        self,
        audio: bytes,
        language: str = "en",
        filename: str = "recording.webm",
        content_type: str = "audio/webm",
    ) -> dict:
        """Upload one recording and return ``{text, stats}``."""
        return self._request_json(
            "post",
            "/api/transcribe",
            files={"audio": (filename, audio, content_type)},
            data={"language": language},
            timeout=TRANSCRIBE_TIMEOUT,
        )

    # -- engine --

    def whisper_status(self) -> dict:
        return self._request_json("get", "/api/whisper/status")

    def model_info(self) -> dict:
        return self._request_json("get", "/api/whisper/model")
