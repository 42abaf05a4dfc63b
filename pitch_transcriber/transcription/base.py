"""Base classes for transcription."""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import numpy as np

from ..core import MusicScore

ProgressSink = Callable[[float], None]


class Transcriber(ABC):
    """Abstract base class for audio transcription."""

    @abstractmethod
    def transcribe(
        self,
        audio: np.ndarray,
        sr: int,
        progress: Optional[ProgressSink] = None,
    ) -> MusicScore:
        """
        Transcribe audio to a score.

        Args:
            audio: Mono audio array
            sr: Sample rate
            progress: Optional callback receiving fractions in [0, 1]

        Returns:
            MusicScore with notes sorted by onset
        """
        pass
