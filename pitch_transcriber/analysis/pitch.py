"""YIN fundamental frequency estimation for single analysis frames.

The estimator follows de Cheveigne & Kawahara (2002):

1. difference function d(tau) over an integration window of half a frame
2. cumulative mean normalized difference d'(tau)
3. absolute threshold: first lag with d'(tau) below the threshold, then
   the bottom of that dip
4. parabolic interpolation around the chosen lag

A frame with no dip under the threshold is unvoiced. The default threshold
of 0.20 is the TarsosDSP YIN default. The YIN paper reports 0.10-0.15 as
best for clean speech; higher values accept noisier periodic frames at the
cost of occasional octave errors.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import signal

from ..core.constants import (
    DEFAULT_FMAX,
    DEFAULT_FMIN,
    DEFAULT_FRAME_SIZE,
    DEFAULT_SILENCE_RMS,
    DEFAULT_SR,
    DEFAULT_YIN_THRESHOLD,
)
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PitchObservation:
    """Per-frame pitch estimate; ``frequency is None`` means unvoiced."""

    timestamp: float
    frequency: Optional[float]
    confidence: float = 0.0
    rms: float = 0.0

    @property
    def voiced(self) -> bool:
        return self.frequency is not None


class YinPitchEstimator:
    """Frame-wise YIN pitch detector."""

    def __init__(
        self,
        sr: int = DEFAULT_SR,
        frame_size: int = DEFAULT_FRAME_SIZE,
        fmin: float = DEFAULT_FMIN,
        fmax: float = DEFAULT_FMAX,
        threshold: float = DEFAULT_YIN_THRESHOLD,
        silence_rms: float = DEFAULT_SILENCE_RMS,
    ):
        """
        Initialize YinPitchEstimator.

        Args:
            sr: Sample rate of the frames
            frame_size: Frame length in samples
            fmin: Lowest fundamental to search (Hz)
            fmax: Highest fundamental to search (Hz)
            threshold: Absolute threshold on the normalized difference
            silence_rms: Frames quieter than this are unvoiced
        """
        if sr <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sr}")
        if frame_size < 8:
            raise ConfigurationError(f"frame_size too small for YIN: {frame_size}")

        self.sr = sr
        self.frame_size = frame_size
        self.fmin = fmin
        self.fmax = fmax
        self.threshold = threshold
        self.silence_rms = silence_rms

        # Integration window W and lag search range
        self.window = frame_size // 2
        self.tau_min = max(2, int(math.floor(sr / fmax)))
        self.tau_max = min(self.window - 1, int(math.ceil(sr / fmin)))
        if self.tau_min >= self.tau_max:
            raise ConfigurationError(
                f"No lags to search: frame_size={frame_size}, sr={sr}, "
                f"fmin={fmin}, fmax={fmax}"
            )
        if sr / fmin > self.window - 1:
            logger.debug(
                "fmin=%.1f Hz needs a longer frame; lowest detectable is %.1f Hz",
                fmin, sr / self.tau_max,
            )

    def estimate(self, samples: np.ndarray, timestamp: float = 0.0) -> PitchObservation:
        """
        Estimate the fundamental frequency of one frame.

        Args:
            samples: Frame samples (float, length frame_size)
            timestamp: Frame start time in seconds

        Returns:
            PitchObservation, unvoiced when no periodicity passes the threshold
        """
        x = np.asarray(samples, dtype=np.float64)
        rms = float(np.sqrt(np.mean(x**2))) if len(x) else 0.0

        if len(x) < self.window + self.tau_max or rms <= self.silence_rms:
            return PitchObservation(timestamp=timestamp, frequency=None, rms=rms)

        cmndf = self.cumulative_mean_normalized_difference(x)
        tau = self._absolute_threshold(cmndf)
        if tau is None:
            return PitchObservation(timestamp=timestamp, frequency=None, rms=rms)

        refined = self._parabolic_interpolation(cmndf, tau)
        frequency = self.sr / refined
        if not self.fmin <= frequency <= self.fmax:
            return PitchObservation(timestamp=timestamp, frequency=None, rms=rms)

        confidence = float(np.clip(1.0 - cmndf[tau], 0.0, 1.0))
        return PitchObservation(
            timestamp=timestamp,
            frequency=float(frequency),
            confidence=confidence,
            rms=rms,
        )

    def difference(self, x: np.ndarray) -> np.ndarray:
        """YIN difference function d(tau) for tau in [0, tau_max]."""
        w = self.window
        head = x[:w]
        span = x[: w + self.tau_max]

        # sum_j head[j] * span[j + tau]
        cross = signal.correlate(span, head, mode="valid", method="fft")

        energy = np.concatenate(([0.0], np.cumsum(span**2)))
        lagged_energy = energy[w : w + self.tau_max + 1] - energy[: self.tau_max + 1]
        head_energy = energy[w]

        d = head_energy + lagged_energy - 2.0 * cross
        d[0] = 0.0
        return np.maximum(d, 0.0)

    def cumulative_mean_normalized_difference(self, x: np.ndarray) -> np.ndarray:
        """d'(tau) = d(tau) * tau / sum_{j<=tau} d(j), with d'(0) = 1."""
        d = self.difference(x)
        running = np.cumsum(d[1:])
        lags = np.arange(1, len(d))
        cmndf = np.ones_like(d)
        np.divide(d[1:] * lags, running, out=cmndf[1:], where=running > 0)
        return cmndf

    def _absolute_threshold(self, cmndf: np.ndarray) -> Optional[int]:
        candidates = np.flatnonzero(cmndf[self.tau_min : self.tau_max + 1] < self.threshold)
        if len(candidates) == 0:
            return None

        tau = int(candidates[0]) + self.tau_min
        while tau + 1 <= self.tau_max and cmndf[tau + 1] < cmndf[tau]:
            tau += 1
        return tau

    def _parabolic_interpolation(self, cmndf: np.ndarray, tau: int) -> float:
        if tau <= 0 or tau + 1 >= len(cmndf):
            return float(tau)

        alpha, beta, gamma = cmndf[tau - 1], cmndf[tau], cmndf[tau + 1]
        denominator = 2.0 * (alpha - 2.0 * beta + gamma)
        if abs(denominator) < 1e-12:
            return float(tau)
        return tau + (alpha - gamma) / denominator
