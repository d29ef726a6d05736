"""
Storage module - Scratch file handling for transcription requests.
"""

from voicetext.services.storage.temp_files import TempArtifacts

__all__ = ["TempArtifacts"]
