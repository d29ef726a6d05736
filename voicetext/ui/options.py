"""Per-session capture options."""

from dataclasses import dataclass
from enum import StrEnum

from voicetext.core.config import get_settings


class CaptureMode(StrEnum):
    """Which capture path feeds the transcript."""

    live = "live"
    offline = "offline"


@dataclass
class SessionOptions:
    """User-controlled switches for one capture session.

    ``tech_terms_enabled`` is read on every fragment, so toggling it only
    affects text that arrives afterwards.
    """

    language: str = "en-US"
    continuous: bool = True
    tech_terms_enabled: bool = True

    @classmethod
    def from_settings(cls) -> "SessionOptions":
        return cls(tech_terms_enabled=get_settings().tech_terms_enabled)

    @property
    def offline_language(self) -> str:
        """Language code for whisper.cpp: the tag without its region (``en-US`` -> ``en``)."""
        return self.language.split("-")[0]
