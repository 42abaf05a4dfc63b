"""Transcription layer - note-level detection from audio.

This layer converts a mono sample buffer into discrete note events:
- NoteSegmenter: per-frame pitch stream -> notes
- MonophonicTranscriber: the full frame -> pitch -> note pipeline
"""

from .base import ProgressSink, Transcriber
from .segmenter import NoteSegmenter, rms_to_velocity
from .monophonic import MonophonicTranscriber, transcribe

__all__ = [
    "ProgressSink",
    "Transcriber",
    "NoteSegmenter",
    "rms_to_velocity",
    "MonophonicTranscriber",
    "transcribe",
]
