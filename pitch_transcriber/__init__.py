"""Pitch Transcriber - monophonic audio to note events.

Architecture Layers:
    1. core/          - Note, MusicScore, configuration, errors
    2. input/         - Audio loading and framing
    3. analysis/      - Frame-level pitch estimation (YIN) and quantization
    4. transcription/ - Note segmentation and the transcription pipeline
    5. output/        - Export (MIDI, MusicXML, JSON)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    Note,
    MusicScore,
    TranscriptionConfig,
    TranscriptionError,
    ConfigurationError,
    TranscriptionCancelled,
)

# Input layer
from .input import AudioLoader, FrameSource

# Analysis layer
from .analysis import (
    PitchObservation,
    QuantizedObservation,
    YinPitchEstimator,
    frequency_to_midi,
    midi_to_frequency,
)

# Transcription layer
from .transcription import MonophonicTranscriber, NoteSegmenter, transcribe

# Output layer
from .output import MIDIExporter, MusicXMLExporter

__all__ = [
    # Core
    "Note",
    "MusicScore",
    "TranscriptionConfig",
    "TranscriptionError",
    "ConfigurationError",
    "TranscriptionCancelled",
    # Input
    "AudioLoader",
    "FrameSource",
    # Analysis
    "PitchObservation",
    "QuantizedObservation",
    "YinPitchEstimator",
    "frequency_to_midi",
    "midi_to_frequency",
    # Transcription
    "MonophonicTranscriber",
    "NoteSegmenter",
    "transcribe",
    # Output
    "MIDIExporter",
    "MusicXMLExporter",
]
