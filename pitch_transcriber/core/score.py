"""MusicScore - the ordered result of one transcription run."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from .constants import DEFAULT_KEY_SIGNATURE, DEFAULT_TEMPO, DEFAULT_TIME_SIGNATURE
from .note import Note


@dataclass(frozen=True)
class MusicScore:
    """Notes plus the score metadata handed to exporters.

    Tempo, time signature and key signature are carried through from the
    configuration; the engine does not infer them.
    """

    notes: List[Note] = field(default_factory=list)
    tempo: float = DEFAULT_TEMPO
    time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE
    key_signature: str = DEFAULT_KEY_SIGNATURE

    @property
    def is_empty(self) -> bool:
        return not self.notes

    @property
    def total_duration(self) -> float:
        """End time of the last sounding note in seconds."""
        if not self.notes:
            return 0.0
        return max(n.offset for n in self.notes)

    def notes_in_range(self, start_time: float, end_time: float) -> List[Note]:
        """Notes that sound anywhere inside [start_time, end_time)."""
        return [
            n for n in self.notes
            if n.onset < end_time and n.offset > start_time
        ]

    def sorted_by_time(self) -> "MusicScore":
        """Return a copy with notes sorted by onset."""
        return replace(self, notes=sorted(self.notes, key=lambda n: n.onset))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tempo": self.tempo,
            "time_signature": list(self.time_signature),
            "key_signature": self.key_signature,
            "duration": self.total_duration,
            "notes": [n.to_dict() for n in self.notes],
        }
