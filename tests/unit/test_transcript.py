"""Tests for TranscriptBuffer and SessionOptions."""

from voicetext.ui.options import CaptureMode, SessionOptions
from voicetext.ui.transcript import TranscriptBuffer


class TestTranscriptBuffer:
    """Final segments, the interim fragment and the counters."""

    def test_empty(self):
        buf = TranscriptBuffer()
        assert buf.text == ""
        assert buf.word_count == 0
        assert buf.char_count == 0

    def test_finals_joined_with_trailing_space(self):
        buf = TranscriptBuffer()
        buf.append_final("hello world")
        buf.append_final("again")
        assert buf.final_text == "hello world again "
        assert buf.segments == ["hello world", "again"]

    def test_interim_follows_finals(self):
        buf = TranscriptBuffer()
        buf.append_final("first")
        buf.set_interim("in progress")
        assert buf.text == "first in progress"

    def test_interim_replaced_not_accumulated(self):
        buf = TranscriptBuffer()
        buf.set_interim("hel")
        buf.set_interim("hello")
        assert buf.text == "hello"

    def test_counts(self):
        buf = TranscriptBuffer()
        buf.append_final("one two")
        buf.set_interim("three")
        assert buf.word_count == 3
        assert buf.char_count == len("one two three")

    def test_trailing_space_not_counted(self):
        buf = TranscriptBuffer()
        buf.append_final("abc")
        assert buf.char_count == 3

    def test_load_seeds_history(self):
        buf = TranscriptBuffer()
        buf.append_final("old")
        buf.load("edited text  ")
        buf.append_final("new")
        assert buf.text == "edited text new "
        assert buf.segments == ["new"]

    def test_load_blank_clears(self):
        buf = TranscriptBuffer()
        buf.load("   ")
        assert buf.text == ""

    def test_clear(self):
        buf = TranscriptBuffer()
        buf.load("seed")
        buf.append_final("x")
        buf.set_interim("y")
        buf.clear()
        assert buf.text == ""
        assert buf.segments == []

    def test_segments_copy_is_detached(self):
        buf = TranscriptBuffer()
        buf.append_final("a")
        buf.segments.append("b")
        assert buf.segments == ["a"]


class TestSessionOptions:
    """Defaults and language derivation."""

    def test_defaults(self):
        options = SessionOptions()
        assert options.language == "en-US"
        assert options.continuous is True
        assert options.tech_terms_enabled is True

    def test_offline_language_drops_region(self):
        assert SessionOptions(language="de-DE").offline_language == "de"
        assert SessionOptions(language="ja").offline_language == "ja"

    def test_capture_mode_values(self):
        assert CaptureMode("live") is CaptureMode.live
        assert str(CaptureMode.offline) == "offline"
