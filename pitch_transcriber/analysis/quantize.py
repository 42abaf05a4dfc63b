"""Pitch quantization onto the 12-tone equal-tempered grid (A4 = 440 Hz)."""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.constants import A4_FREQUENCY, A4_MIDI, MIDI_MAX, MIDI_MIN
from .pitch import PitchObservation


@dataclass(frozen=True)
class QuantizedObservation:
    """Per-frame MIDI pitch; ``pitch is None`` means unvoiced."""

    timestamp: float
    pitch: Optional[int]
    rms: float = 0.0

    @property
    def voiced(self) -> bool:
        return self.pitch is not None


def frequency_to_midi(frequency: Optional[float]) -> Optional[int]:
    """Convert frequency (Hz) to the nearest MIDI pitch, clamped to [0, 127].

    Returns None for unvoiced input (None, non-positive or non-finite).
    """
    if frequency is None or not math.isfinite(frequency) or frequency <= 0:
        return None
    midi = int(round(A4_MIDI + 12 * math.log2(frequency / A4_FREQUENCY)))
    return max(MIDI_MIN, min(MIDI_MAX, midi))


def midi_to_frequency(pitch: int) -> float:
    """Convert MIDI pitch to frequency (Hz)."""
    return A4_FREQUENCY * (2 ** ((pitch - A4_MIDI) / 12.0))


def frequencies_to_midi(f0: np.ndarray) -> np.ndarray:
    """Vectorized frequency_to_midi; unvoiced entries become NaN."""
    f0 = np.asarray(f0, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        midi = A4_MIDI + 12 * np.log2(f0 / A4_FREQUENCY)
        midi = np.where(np.isfinite(midi) & (f0 > 0), np.round(midi), np.nan)
    return np.clip(midi, MIDI_MIN, MIDI_MAX)


def quantize(observation: PitchObservation) -> QuantizedObservation:
    """Map a pitch observation onto the MIDI grid, keeping its timestamp."""
    return QuantizedObservation(
        timestamp=observation.timestamp,
        pitch=frequency_to_midi(observation.frequency),
        rms=observation.rms,
    )
