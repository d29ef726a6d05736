"""Transcript buffer shared by both capture paths."""


class TranscriptBuffer:
    """Confirmed segments plus the single interim fragment being recognized.

    Fragments are stored exactly as given; normalization happens before
    they arrive, so already-rendered history is never rewritten.
    """

    def __init__(self) -> None:
        self._segments: list[str] = []
        self._seed = ""
        self.interim = ""

    @property
    def segments(self) -> list[str]:
        return list(self._segments)

    def load(self, text: str) -> None:
        """Replace the history with user-edited text before a new capture."""
        self._segments.clear()
        self._seed = f"{text.rstrip()} " if text.strip() else ""
        self.interim = ""

    def append_final(self, text: str) -> None:
        self._segments.append(text)

    def set_interim(self, text: str) -> None:
        self.interim = text

    def clear(self) -> None:
        self._segments.clear()
        self._seed = ""
        self.interim = ""

    @property
    def final_text(self) -> str:
        return self._seed + "".join(f"{segment} " for segment in self._segments)

    @property
    def text(self) -> str:
        """Display text: finalized history followed by the interim fragment."""
        return self.final_text + self.interim

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def char_count(self) -> int:
        return len(self.text.strip())
