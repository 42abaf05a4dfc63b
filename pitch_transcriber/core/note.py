"""Note data class - the fundamental unit of musical transcription."""

from dataclasses import dataclass
from typing import Any, Dict

from .constants import A4_FREQUENCY, A4_MIDI, PITCH_NAMES


@dataclass(frozen=True)
class Note:
    """Represents a transcribed note event."""

    pitch: int  # MIDI pitch (0-127)
    onset: float  # Start time in seconds
    duration: float  # Duration in seconds
    velocity: int = 64  # MIDI velocity (0-127)

    @property
    def offset(self) -> float:
        """End time in seconds."""
        return self.onset + self.duration

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        octave = (self.pitch // 12) - 1
        name = PITCH_NAMES[self.pitch % 12]
        return f"{name}{octave}"

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.pitch % 12

    @property
    def frequency(self) -> float:
        """Equal-tempered frequency of the pitch in Hz."""
        return A4_FREQUENCY * (2 ** ((self.pitch - A4_MIDI) / 12.0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pitch": self.pitch,
            "start_time": self.onset,
            "duration": self.duration,
            "velocity": self.velocity,
        }
