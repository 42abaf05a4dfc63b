"""Analysis layer - frame-level pitch estimation and quantization."""

from .pitch import PitchObservation, YinPitchEstimator
from .quantize import (
    QuantizedObservation,
    frequency_to_midi,
    frequencies_to_midi,
    midi_to_frequency,
    quantize,
)

__all__ = [
    "PitchObservation",
    "YinPitchEstimator",
    "QuantizedObservation",
    "frequency_to_midi",
    "frequencies_to_midi",
    "midi_to_frequency",
    "quantize",
]
