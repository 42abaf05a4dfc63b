"""Tests for audio loading and framing."""

import numpy as np
import pytest
import soundfile as sf

from pitch_transcriber.core import ConfigurationError
from pitch_transcriber.input import AudioLoader, FrameSource, as_float_buffer

SR = 44100


class TestFrameSource:
    """Tests for FrameSource."""

    def test_back_to_back_frames(self):
        audio = np.arange(8192, dtype=np.float32)
        source = FrameSource(audio, SR, frame_size=2048, hop_size=2048)
        frames = list(source)

        assert len(source) == 4
        assert len(frames) == 4
        assert [f.start_sample for f in frames] == [0, 2048, 4096, 6144]
        assert frames[1].timestamp == pytest.approx(2048 / SR)
        np.testing.assert_array_equal(frames[2].samples, audio[4096:6144])

    def test_overlapping_frames(self):
        audio = np.zeros(4096, dtype=np.float32)
        source = FrameSource(audio, SR, frame_size=2048, hop_size=1024)
        frames = list(source)

        # 3 full frames, the 1024-sample tail is exactly half a frame and kept
        assert len(frames) == 4
        assert [f.start_sample for f in frames] == [0, 1024, 2048, 3072]

    def test_short_tail_dropped(self):
        audio = np.ones(2048 + 1000, dtype=np.float32)
        frames = list(FrameSource(audio, SR, frame_size=2048, hop_size=2048))
        assert len(frames) == 1

    def test_long_tail_zero_padded(self):
        audio = np.ones(2048 + 1500, dtype=np.float32)
        frames = list(FrameSource(audio, SR, frame_size=2048, hop_size=2048))

        assert len(frames) == 2
        tail = frames[-1]
        assert len(tail.samples) == 2048
        assert np.all(tail.samples[:1500] == 1.0)
        assert np.all(tail.samples[1500:] == 0.0)
        assert tail.end_time == pytest.approx(len(audio) / SR)

    def test_buffer_shorter_than_frame(self):
        assert len(FrameSource(np.ones(1500), SR, 2048, 2048)) == 1
        assert len(FrameSource(np.ones(500), SR, 2048, 2048)) == 0

    def test_empty_buffer(self):
        source = FrameSource(np.array([], dtype=np.float32), SR)
        assert len(source) == 0
        assert list(source) == []

    def test_restartable(self):
        audio = np.random.default_rng(0).standard_normal(10000).astype(np.float32)
        source = FrameSource(audio, SR, 2048, 1024)
        first = [f.samples.copy() for f in source]
        second = [f.samples.copy() for f in source]

        assert len(first) == len(second)
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_end_time_of_full_frame(self):
        frames = list(FrameSource(np.zeros(4096), SR, 2048, 2048))
        assert frames[0].end_time == pytest.approx(2048 / SR)

    @pytest.mark.parametrize(
        "frame_size,hop_size,sr",
        [(2048, 4096, SR), (0, 0, SR), (2048, 2048, 0)],
    )
    def test_invalid_parameters(self, frame_size, hop_size, sr):
        with pytest.raises(ConfigurationError):
            FrameSource(np.zeros(4096), sr, frame_size, hop_size)

    def test_rejects_multichannel(self):
        with pytest.raises(ConfigurationError, match="mono"):
            FrameSource(np.zeros((4096, 2)), SR)


class TestAsFloatBuffer:
    """Tests for PCM normalization."""

    def test_int16_scaled(self):
        pcm = np.array([0, 16384, -32768], dtype=np.int16)
        out = as_float_buffer(pcm)
        assert out.dtype == np.float32
        np.testing.assert_allclose(out, [0.0, 0.5, -1.0])

    def test_uint8_centered(self):
        pcm = np.array([128, 192, 0], dtype=np.uint8)
        np.testing.assert_allclose(as_float_buffer(pcm), [0.0, 0.5, -1.0])

    def test_float_passthrough(self):
        audio = np.array([0.25, -0.5], dtype=np.float64)
        out = as_float_buffer(audio)
        assert out.dtype == np.float32
        np.testing.assert_allclose(out, [0.25, -0.5])


class TestAudioLoader:
    """Tests for AudioLoader."""

    def test_normalize(self):
        loader = AudioLoader()
        audio = np.array([0.5, -0.5, 0.25, -0.25])
        normalized = loader._normalize(audio)

        assert np.abs(normalized).max() == 1.0

    def test_unsupported_format(self, tmp_path):
        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        loader = AudioLoader()
        with pytest.raises(ValueError, match="Unsupported format"):
            loader.load(str(dummy_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))

    def test_load_wav(self, tmp_path):
        t = np.arange(SR) / SR
        audio = 0.5 * np.sin(2 * np.pi * 440.0 * t)
        path = tmp_path / "a4.wav"
        sf.write(str(path), audio, SR, subtype="PCM_16")

        loader = AudioLoader()
        loaded, sr = loader.load(str(path))

        assert sr == SR
        assert loaded.ndim == 1
        assert loader.get_duration(loaded, sr) == pytest.approx(1.0, abs=1e-3)

    def test_load_stereo_downmixed(self, tmp_path):
        stereo = np.zeros((SR // 2, 2), dtype=np.float32)
        path = tmp_path / "stereo.wav"
        sf.write(str(path), stereo, SR)

        loaded, _ = AudioLoader().load(str(path))
        assert loaded.ndim == 1
