"""Monophonic transcription: framing -> YIN -> quantization -> segmentation."""

import logging
import time
from typing import Callable, Optional

import numpy as np

from .base import ProgressSink, Transcriber
from .segmenter import NoteSegmenter
from ..analysis import YinPitchEstimator, quantize
from ..core import MusicScore, TranscriptionConfig
from ..core.errors import ConfigurationError, TranscriptionCancelled
from ..input import FrameSource

logger = logging.getLogger(__name__)


class MonophonicTranscriber(Transcriber):
    """Transcribes monophonic audio with frame-wise YIN pitch tracking.

    Each call builds its own estimator and segmenter, so one instance can
    serve concurrent calls on independent buffers.
    """

    def __init__(self, config: Optional[TranscriptionConfig] = None):
        """
        Initialize MonophonicTranscriber.

        Args:
            config: Engine configuration (defaults if omitted)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = (config or TranscriptionConfig()).validate()

    def transcribe(
        self,
        audio: np.ndarray,
        sr: int,
        progress: Optional[ProgressSink] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
        progress_start: float = 0.0,
        progress_end: float = 1.0,
    ) -> MusicScore:
        """
        Transcribe monophonic audio to a score.

        Args:
            audio: Mono audio array (float in [-1, 1] or integer PCM)
            sr: Sample rate
            progress: Called with non-decreasing fractions, last call is progress_end
            should_cancel: Polled between frames; True aborts the run
            progress_start: First reported fraction (reserve head room for the caller)
            progress_end: Last reported fraction

        Returns:
            MusicScore (empty for an empty buffer)

        Raises:
            ConfigurationError: Invalid sample rate, buffer shape or progress range
            TranscriptionCancelled: If should_cancel returned True
        """
        cfg = self.config
        if sr <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sr}")
        if not 0.0 <= progress_start <= progress_end <= 1.0:
            raise ConfigurationError(
                f"Invalid progress range ({progress_start}, {progress_end})"
            )

        source = FrameSource(audio, sr, frame_size=cfg.frame_size, hop_size=cfg.hop_size)
        estimator = YinPitchEstimator(
            sr=sr,
            frame_size=cfg.frame_size,
            fmin=cfg.fmin,
            fmax=cfg.fmax,
            threshold=cfg.yin_threshold,
            silence_rms=cfg.silence_rms,
        )
        segmenter = NoteSegmenter(
            min_note_duration=cfg.min_note_duration,
            default_velocity=cfg.default_velocity,
            velocity_mode=cfg.velocity_mode,
            merge_glitches=cfg.merge_glitches,
        )

        total = len(source)
        span = progress_end - progress_start
        logger.debug(
            "Transcribing %.2fs of audio at %d Hz in %d frames",
            source.duration, sr, total,
        )

        report = progress or (lambda fraction: None)
        report(progress_start)

        started = time.perf_counter()
        end_time = 0.0
        voiced = 0
        for i, frame in enumerate(source):
            if should_cancel is not None and should_cancel():
                logger.info("Transcription cancelled after %d/%d frames", i, total)
                raise TranscriptionCancelled(f"Cancelled after {i} of {total} frames")

            observation = estimator.estimate(frame.samples, frame.timestamp)
            if observation.voiced:
                voiced += 1
            segmenter.process(quantize(observation))
            end_time = frame.end_time

            report(min(progress_start + span * (i + 1) / total, progress_end))

        notes = segmenter.finish(end_time)
        report(progress_end)

        logger.info(
            "Detected %d notes (%d/%d voiced frames, %d fragments dropped) in %.2fs",
            len(notes), voiced, total, segmenter.dropped, time.perf_counter() - started,
        )

        score = MusicScore(
            notes=notes,
            tempo=cfg.tempo,
            time_signature=tuple(cfg.time_signature),
            key_signature=cfg.key_signature,
        )
        return score.sorted_by_time()


def transcribe(
    audio: np.ndarray,
    sr: int,
    progress: Optional[ProgressSink] = None,
    config: Optional[TranscriptionConfig] = None,
) -> MusicScore:
    """Transcribe a mono buffer with a one-off MonophonicTranscriber."""
    return MonophonicTranscriber(config).transcribe(audio, sr, progress=progress)
