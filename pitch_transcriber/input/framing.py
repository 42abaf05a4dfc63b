"""Frame source - slices a mono sample buffer into analysis frames.

Tail policy: after the last full frame, a trailing partial frame is kept
and zero-padded to ``frame_size`` only when it holds at least half a frame
of real samples; shorter tails are dropped.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import librosa

from ..core.errors import ConfigurationError


@dataclass(frozen=True)
class AnalysisFrame:
    """One analysis window of samples."""

    index: int
    start_sample: int
    timestamp: float  # start time in seconds
    end_time: float  # time of the last real sample boundary in seconds
    samples: np.ndarray


def as_float_buffer(audio: np.ndarray) -> np.ndarray:
    """Return ``audio`` as float32 in [-1, 1].

    Integer PCM is scaled by its full-scale value; floating point input is
    assumed to be normalized already.
    """
    audio = np.asarray(audio)
    if audio.ndim != 1:
        raise ConfigurationError(
            f"Expected a mono (1-D) sample buffer, got shape {audio.shape}"
        )
    if np.issubdtype(audio.dtype, np.unsignedinteger):
        midpoint = float(np.iinfo(audio.dtype).max // 2 + 1)
        return (audio.astype(np.float32) - midpoint) / midpoint
    if np.issubdtype(audio.dtype, np.integer):
        full_scale = float(-np.iinfo(audio.dtype).min)
        return audio.astype(np.float32) / full_scale
    return audio.astype(np.float32, copy=False)


class FrameSource:
    """Restartable, lazy sequence of fixed-size frames over a buffer."""

    def __init__(
        self,
        audio: np.ndarray,
        sr: int,
        frame_size: int = 2048,
        hop_size: int = 2048,
    ):
        if sr <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sr}")
        if frame_size <= 0 or hop_size <= 0:
            raise ConfigurationError("frame_size and hop_size must be positive")
        if hop_size > frame_size:
            raise ConfigurationError(
                f"hop_size ({hop_size}) must not exceed frame_size ({frame_size})"
            )

        self.audio = as_float_buffer(audio)
        self.sr = sr
        self.frame_size = frame_size
        self.hop_size = hop_size

        n = len(self.audio)
        self.n_full = 0 if n < frame_size else 1 + (n - frame_size) // hop_size
        tail_start = self.n_full * hop_size
        tail_len = n - tail_start
        self.has_tail = tail_len > 0 and tail_len * 2 >= frame_size

    @property
    def duration(self) -> float:
        return len(self.audio) / self.sr

    def __len__(self) -> int:
        return self.n_full + (1 if self.has_tail else 0)

    def __iter__(self) -> Iterator[AnalysisFrame]:
        if self.n_full:
            frames = librosa.util.frame(
                self.audio,
                frame_length=self.frame_size,
                hop_length=self.hop_size,
                axis=0,
            )
            for i in range(self.n_full):
                start = i * self.hop_size
                yield AnalysisFrame(
                    index=i,
                    start_sample=start,
                    timestamp=start / self.sr,
                    end_time=(start + self.frame_size) / self.sr,
                    samples=frames[i],
                )

        if self.has_tail:
            start = self.n_full * self.hop_size
            tail = self.audio[start:]
            padded = np.zeros(self.frame_size, dtype=np.float32)
            padded[: len(tail)] = tail
            yield AnalysisFrame(
                index=self.n_full,
                start_sample=start,
                timestamp=start / self.sr,
                end_time=len(self.audio) / self.sr,
                samples=padded,
            )
