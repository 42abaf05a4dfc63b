"""MIDI export functionality."""

import pretty_midi
from typing import Union
from pathlib import Path

from ..core import MusicScore


class MIDIExporter:
    """Export scores to MIDI format."""

    def __init__(
        self,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
    ):
        """
        Initialize MIDIExporter.

        Args:
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
        """
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program

    def export(self, score: MusicScore, output_path: Union[str, Path]) -> Path:
        """
        Export a score to a MIDI file.

        Args:
            score: Score to write
            output_path: Path to output MIDI file

        Returns:
            The written path
        """
        midi = self.to_pretty_midi(score)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        midi.write(str(output_path))
        return output_path

    def to_pretty_midi(self, score: MusicScore) -> pretty_midi.PrettyMIDI:
        """Convert a score to a PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=score.tempo)

        numerator, denominator = score.time_signature
        midi.time_signature_changes.append(
            pretty_midi.TimeSignature(numerator, denominator, 0.0)
        )

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for note in sorted(score.notes, key=lambda n: n.onset):
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=note.velocity,
                    pitch=note.pitch,
                    start=note.onset,
                    end=note.offset,
                )
            )

        midi.instruments.append(instrument)
        return midi
