"""Configuration for the transcription engine."""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .constants import (
    DEFAULT_FMAX,
    DEFAULT_FMIN,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP_SIZE,
    DEFAULT_KEY_SIGNATURE,
    DEFAULT_MIN_NOTE_DURATION,
    DEFAULT_SILENCE_RMS,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    DEFAULT_VELOCITY,
    DEFAULT_YIN_THRESHOLD,
    MIDI_MAX,
    MIDI_MIN,
)
from .errors import ConfigurationError

VELOCITY_MODES = ("fixed", "rms")


@dataclass(frozen=True)
class TranscriptionConfig:
    """Configuration for a transcription run.

    Attributes:
        frame_size: Analysis frame length in samples (default: 2048)
        hop_size: Samples between frame starts, <= frame_size (default: 2048)
        fmin: Lowest detectable fundamental in Hz (default: 50)
        fmax: Highest detectable fundamental in Hz (default: 2000)
        yin_threshold: YIN absolute threshold; frames whose normalized
            difference never dips below it are unvoiced (default: 0.20)
        silence_rms: Frames below this RMS are unvoiced (default: 1e-4)
        min_note_duration: Notes must last strictly longer than this, in
            seconds (default: 0.1)
        default_velocity: Velocity of emitted notes in "fixed" mode (default: 90)
        velocity_mode: "fixed" or "rms" (default: "fixed")
        merge_glitches: Re-open a note interrupted only by dropped
            fragments (default: True)
        tempo: Score tempo in BPM (default: 120)
        time_signature: Score time signature (default: (4, 4))
        key_signature: Score key signature (default: "C")
    """

    frame_size: int = DEFAULT_FRAME_SIZE
    hop_size: int = DEFAULT_HOP_SIZE
    fmin: float = DEFAULT_FMIN
    fmax: float = DEFAULT_FMAX
    yin_threshold: float = DEFAULT_YIN_THRESHOLD
    silence_rms: float = DEFAULT_SILENCE_RMS
    min_note_duration: float = DEFAULT_MIN_NOTE_DURATION
    default_velocity: int = DEFAULT_VELOCITY
    velocity_mode: str = "fixed"
    merge_glitches: bool = True
    tempo: float = DEFAULT_TEMPO
    time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE
    key_signature: str = DEFAULT_KEY_SIGNATURE

    def validate(self) -> "TranscriptionConfig":
        """Check all values, raising ConfigurationError on the first bad one."""
        if self.frame_size <= 0:
            raise ConfigurationError(f"frame_size must be positive, got {self.frame_size}")
        if self.hop_size <= 0:
            raise ConfigurationError(f"hop_size must be positive, got {self.hop_size}")
        if self.hop_size > self.frame_size:
            raise ConfigurationError(
                f"hop_size ({self.hop_size}) must not exceed frame_size ({self.frame_size})"
            )
        if self.fmin <= 0:
            raise ConfigurationError(f"fmin must be positive, got {self.fmin}")
        if self.fmin >= self.fmax:
            raise ConfigurationError(
                f"fmin ({self.fmin}) must be lower than fmax ({self.fmax})"
            )
        if not 0.0 < self.yin_threshold <= 1.0:
            raise ConfigurationError(
                f"yin_threshold must be in (0, 1], got {self.yin_threshold}"
            )
        if self.silence_rms < 0:
            raise ConfigurationError(f"silence_rms must be >= 0, got {self.silence_rms}")
        if self.min_note_duration < 0:
            raise ConfigurationError(
                f"min_note_duration must be >= 0, got {self.min_note_duration}"
            )
        if not MIDI_MIN <= self.default_velocity <= MIDI_MAX:
            raise ConfigurationError(
                f"default_velocity must be in [0, 127], got {self.default_velocity}"
            )
        if self.velocity_mode not in VELOCITY_MODES:
            raise ConfigurationError(
                f"Unknown velocity_mode '{self.velocity_mode}'. Supported: {VELOCITY_MODES}"
            )
        if self.tempo <= 0:
            raise ConfigurationError(f"tempo must be positive, got {self.tempo}")
        if (
            len(self.time_signature) != 2
            or self.time_signature[0] <= 0
            or self.time_signature[1] <= 0
        ):
            raise ConfigurationError(f"Invalid time_signature: {self.time_signature}")
        return self

    def replace(self, **overrides: Any) -> "TranscriptionConfig":
        """Copy with overrides applied (None values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["time_signature"] = list(self.time_signature)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptionConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
        values = dict(data)
        if "time_signature" in values:
            values["time_signature"] = tuple(values["time_signature"])
        return cls(**values).validate()

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "TranscriptionConfig":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a JSON object: {path}")
        return cls.from_dict(data)
