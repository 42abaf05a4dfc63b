"""JSON export of a score."""

import json
from pathlib import Path
from typing import Optional, Union

from ..core import MusicScore


def score_to_json(score: MusicScore, indent: Optional[int] = 2) -> str:
    """Serialize a score to a JSON string."""
    return json.dumps(score.to_dict(), indent=indent)


def write_score_json(score: MusicScore, output_path: Union[str, Path]) -> Path:
    """Write a score as JSON, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(score_to_json(score), encoding="utf-8")
    return output_path
