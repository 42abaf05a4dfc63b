"""MusicXML export functionality via music21."""

from typing import Union
from pathlib import Path

from ..core import MusicScore

# Durations are snapped to 16th notes
GRID_QUARTERS = 0.25


class MusicXMLExporter:
    """Export scores to MusicXML format."""

    def __init__(self, title: str = "Transcribed Music", part_name: str = "Piano"):
        """
        Initialize MusicXMLExporter.

        Args:
            title: Score title written to the metadata
            part_name: Name of the single part
        """
        self.title = title
        self.part_name = part_name

    def export(self, score: MusicScore, output_path: Union[str, Path]) -> Path:
        """
        Export a score to a MusicXML file.

        Args:
            score: Score to write
            output_path: Path to output MusicXML file

        Returns:
            The written path
        """
        m21_score = self.to_music21(score)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        m21_score.write("musicxml", fp=str(output_path))
        return output_path

    def to_music21(self, score: MusicScore):
        """Build a music21 Score; gaps between notes become rests."""
        try:
            from music21 import stream, note as m21_note, tempo as m21_tempo
            from music21 import key, meter, metadata
        except ImportError:
            raise ImportError("music21 is required for MusicXML export")

        m21_score = stream.Score()
        m21_score.metadata = metadata.Metadata()
        m21_score.metadata.title = self.title

        part = stream.Part()
        part.partName = self.part_name
        part.append(m21_tempo.MetronomeMark(number=score.tempo))
        numerator, denominator = score.time_signature
        part.append(meter.TimeSignature(f"{numerator}/{denominator}"))
        part.append(self._key(key, score.key_signature))

        cursor = 0.0
        for n in sorted(score.notes, key=lambda n: n.onset):
            onset = self._snap(self._seconds_to_quarters(n.onset, score.tempo))
            if onset > cursor:
                part.append(m21_note.Rest(quarterLength=onset - cursor))
                cursor = onset

            length = max(
                GRID_QUARTERS,
                self._snap(self._seconds_to_quarters(n.duration, score.tempo)),
            )
            m21_n = m21_note.Note()
            m21_n.pitch.midi = n.pitch
            m21_n.duration.quarterLength = length
            m21_n.volume.velocity = n.velocity
            part.append(m21_n)
            cursor += length

        m21_score.append(part)
        return m21_score

    def _seconds_to_quarters(self, seconds: float, tempo: float) -> float:
        """Convert seconds to quarter notes at the given tempo."""
        return seconds * tempo / 60.0

    def _snap(self, quarters: float) -> float:
        return round(quarters / GRID_QUARTERS) * GRID_QUARTERS

    def _key(self, key_module, signature: str):
        """Build a music21 Key from names like "C", "F#" or "Am"."""
        mode = "major"
        if len(signature) > 1 and signature.endswith("m"):
            signature, mode = signature[:-1], "minor"
        # music21 spells flats with "-"
        tonic = signature[0] + signature[1:].replace("b", "-")
        return key_module.Key(tonic, mode)
