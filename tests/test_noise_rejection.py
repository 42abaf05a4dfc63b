"""Tests for noise rejection in transcription.

Unpitched or silent input must not produce spurious notes.
"""

import numpy as np
import pytest

from pitch_transcriber.transcription import MonophonicTranscriber


class TestNoiseRejection:
    """Test that various types of noise produce no false detections."""

    @pytest.fixture
    def sample_rate(self):
        return 44100

    @pytest.fixture
    def duration(self):
        return 3.0  # 3 seconds

    def generate_white_noise(self, duration: float, sr: int, amplitude: float = 0.1) -> np.ndarray:
        """Generate white noise."""
        rng = np.random.default_rng(1234)
        n_samples = int(duration * sr)
        return (rng.standard_normal(n_samples) * amplitude).astype(np.float32)

    def generate_silence(self, duration: float, sr: int) -> np.ndarray:
        """Generate silence."""
        return np.zeros(int(duration * sr), dtype=np.float32)

    def test_rejects_white_noise(self, sample_rate, duration):
        audio = self.generate_white_noise(duration, sample_rate)
        notes = MonophonicTranscriber().transcribe(audio, sample_rate).notes

        assert len(notes) == 0, f"Expected 0 notes from white noise, got {len(notes)}"

    def test_rejects_silence(self, sample_rate, duration):
        audio = self.generate_silence(duration, sample_rate)
        notes = MonophonicTranscriber().transcribe(audio, sample_rate).notes

        assert len(notes) == 0, f"Expected 0 notes from silence, got {len(notes)}"

    def test_rejects_below_silence_floor(self, sample_rate, duration):
        """Very low level noise is gated before pitch detection."""
        audio = self.generate_white_noise(duration, sample_rate, amplitude=5e-5)
        notes = MonophonicTranscriber().transcribe(audio, sample_rate).notes

        assert len(notes) == 0

    def test_tone_in_light_noise(self, sample_rate):
        """A clear tone survives a modest noise floor."""
        t = np.arange(int(2.0 * sample_rate)) / sample_rate
        tone = 0.5 * np.sin(2 * np.pi * 440.0 * t)
        audio = (tone + self.generate_white_noise(2.0, sample_rate, amplitude=0.02)).astype(np.float32)

        notes = MonophonicTranscriber().transcribe(audio, sample_rate).notes

        assert len(notes) == 1
        assert notes[0].pitch == 69
