"""Note segmentation - turns a per-frame pitch stream into note events.

The segmenter is a two-state machine. Idle has no sounding note; Active
tracks the current pitch and its onset. A note is closed by an unvoiced
frame, a pitch change, or the end of the stream, and is only emitted when
it lasted strictly longer than ``min_note_duration``. Shorter fragments are
dropped silently.

With ``merge_glitches`` enabled, a note closed by a pitch change is
re-opened when the stream comes back to the same pitch within
``min_note_duration`` and everything in between was dropped as too short
(no unvoiced frame). A one-frame glitch in a sustained tone therefore
yields one note rather than two.
"""

import logging
from typing import List, Optional

import numpy as np

from ..analysis.quantize import QuantizedObservation
from ..core import Note
from ..core.config import VELOCITY_MODES
from ..core.constants import DEFAULT_MIN_NOTE_DURATION, DEFAULT_VELOCITY
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class NoteSegmenter:
    """Stateful segmenter over time-ordered quantized observations."""

    def __init__(
        self,
        min_note_duration: float = DEFAULT_MIN_NOTE_DURATION,
        default_velocity: int = DEFAULT_VELOCITY,
        velocity_mode: str = "fixed",
        merge_glitches: bool = True,
    ):
        """
        Initialize NoteSegmenter.

        Args:
            min_note_duration: Notes must last strictly longer than this (seconds)
            default_velocity: Velocity used in "fixed" mode
            velocity_mode: "fixed" or "rms" (velocity from the note's peak frame RMS)
            merge_glitches: Re-open a note interrupted only by dropped fragments
        """
        if min_note_duration < 0:
            raise ConfigurationError(
                f"min_note_duration must be >= 0, got {min_note_duration}"
            )
        if velocity_mode not in VELOCITY_MODES:
            raise ConfigurationError(f"Unknown velocity_mode '{velocity_mode}'")

        self.min_note_duration = min_note_duration
        self.default_velocity = default_velocity
        self.velocity_mode = velocity_mode
        self.merge_glitches = merge_glitches
        self.reset()

    def reset(self) -> None:
        """Return to Idle and forget all emitted notes."""
        self._notes: List[Note] = []
        self._pitch: Optional[int] = None
        self._start = 0.0
        self._peak_rms = 0.0
        self._velocity_floor = 0
        self._last_timestamp: Optional[float] = None
        self._bridge_open = False
        self.dropped = 0

    @property
    def active(self) -> bool:
        return self._pitch is not None

    @property
    def current_pitch(self) -> Optional[int]:
        return self._pitch

    @property
    def notes(self) -> List[Note]:
        """Notes emitted so far (a copy)."""
        return list(self._notes)

    def process(self, observation: QuantizedObservation) -> None:
        """Consume one observation."""
        t = observation.timestamp
        if self._last_timestamp is not None and t < self._last_timestamp:
            raise ValueError(
                f"Observations must be time-ordered: {t} after {self._last_timestamp}"
            )
        self._last_timestamp = t

        if observation.pitch is None:
            if self._pitch is not None:
                self._close(t)
                self._pitch = None
            self._bridge_open = False
            return

        if self._pitch is None:
            self._open(observation)
        elif observation.pitch == self._pitch:
            self._peak_rms = max(self._peak_rms, observation.rms)
        else:
            if self._close(t):
                self._bridge_open = True
            self._open(observation)

    def finish(self, end_time: Optional[float] = None) -> List[Note]:
        """
        Close the stream and return all emitted notes in time order.

        Args:
            end_time: Closing boundary of the last note. Defaults to the
                timestamp of the last observation.
        """
        if self._pitch is not None:
            boundary = self._last_timestamp if self._last_timestamp is not None else 0.0
            if end_time is not None:
                boundary = max(boundary, end_time)
            self._close(boundary)
            self._pitch = None
        self._bridge_open = False

        logger.debug(
            "Segmentation finished: %d notes, %d fragments dropped",
            len(self._notes), self.dropped,
        )
        return sorted(self._notes, key=lambda n: n.onset)

    def _open(self, observation: QuantizedObservation) -> None:
        t = observation.timestamp
        previous = self._notes[-1] if self._notes else None

        if (
            self.merge_glitches
            and self._bridge_open
            and previous is not None
            and previous.pitch == observation.pitch
            and t - previous.offset <= self.min_note_duration
        ):
            # Resume the interrupted note
            self._notes.pop()
            self._start = previous.onset
            self._velocity_floor = previous.velocity
            logger.debug("Bridged glitch at %.3fs, resuming pitch %d", t, previous.pitch)
            self._bridge_open = False
        else:
            self._start = t
            self._velocity_floor = 0

        self._pitch = observation.pitch
        self._peak_rms = observation.rms

    def _close(self, end_time: float) -> bool:
        duration = end_time - self._start
        if duration <= self.min_note_duration:
            self.dropped += 1
            return False

        self._notes.append(
            Note(
                pitch=self._pitch,
                onset=self._start,
                duration=duration,
                velocity=max(self._velocity(), self._velocity_floor),
            )
        )
        return True

    def _velocity(self) -> int:
        if self.velocity_mode == "rms":
            return rms_to_velocity(self._peak_rms)
        return self.default_velocity


def rms_to_velocity(rms: float) -> int:
    """Convert RMS energy to MIDI velocity in [20, 127]."""
    # Assuming normalized audio, RMS typically 0.01-0.5
    return int(np.clip(rms * 200, 20, 127))
