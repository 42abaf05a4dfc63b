"""Output layer - Export to various formats.

This layer handles exporting transcribed scores to:
- MIDI files
- MusicXML (for notation software)
- JSON (for scripting)
"""

from .midi import MIDIExporter
from .musicxml import MusicXMLExporter
from .json_export import score_to_json, write_score_json

__all__ = [
    "MIDIExporter",
    "MusicXMLExporter",
    "score_to_json",
    "write_score_json",
]
