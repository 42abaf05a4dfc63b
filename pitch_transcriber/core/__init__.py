"""Core types and constants for Pitch Transcriber."""

from .note import Note
from .score import MusicScore
from .config import TranscriptionConfig
from .errors import ConfigurationError, TranscriptionCancelled, TranscriptionError
from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP_SIZE,
    DEFAULT_MIN_NOTE_DURATION,
    DEFAULT_VELOCITY,
    DEFAULT_TEMPO,
)

__all__ = [
    "Note",
    "MusicScore",
    "TranscriptionConfig",
    "TranscriptionError",
    "ConfigurationError",
    "TranscriptionCancelled",
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_HOP_SIZE",
    "DEFAULT_MIN_NOTE_DURATION",
    "DEFAULT_VELOCITY",
    "DEFAULT_TEMPO",
]
