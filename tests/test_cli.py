"""Tests for the command-line interface."""

import json

import numpy as np
import pretty_midi
import pytest
import soundfile as sf
from typer.testing import CliRunner

from pitch_transcriber.cli import app

SR = 44100

runner = CliRunner()


@pytest.fixture
def melody_wav(tmp_path):
    t = np.arange(SR) / SR
    audio = np.concatenate(
        [0.5 * np.sin(2 * np.pi * 440.0 * t), 0.5 * np.sin(2 * np.pi * 523.25 * t)]
    )
    path = tmp_path / "melody.wav"
    sf.write(str(path), audio, SR, subtype="PCM_16")
    return path


class TestTranscribeCommand:
    """Tests for `pitch-transcriber transcribe`."""

    def test_writes_midi(self, melody_wav, tmp_path):
        output = tmp_path / "out.mid"
        result = runner.invoke(app, ["transcribe", str(melody_wav), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.exists()
        notes = pretty_midi.PrettyMIDI(str(output)).instruments[0].notes
        assert [n.pitch for n in notes] == [69, 72]

    def test_default_output_path(self, melody_wav):
        result = runner.invoke(app, ["transcribe", str(melody_wav)])

        assert result.exit_code == 0, result.output
        assert melody_wav.with_suffix(".mid").exists()

    def test_config_file_and_overrides(self, melody_wav, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"default_velocity": 70}))
        output = tmp_path / "out.mid"

        result = runner.invoke(
            app,
            ["transcribe", str(melody_wav), "-o", str(output), "-c", str(config), "--tempo", "90"],
        )

        assert result.exit_code == 0, result.output
        midi = pretty_midi.PrettyMIDI(str(output))
        assert all(n.velocity == 70 for n in midi.instruments[0].notes)
        assert midi.get_tempo_changes()[1][0] == pytest.approx(90.0, abs=0.01)

    def test_musicxml_output(self, melody_wav, tmp_path):
        pytest.importorskip("music21")
        xml = tmp_path / "out.musicxml"
        result = runner.invoke(
            app,
            ["transcribe", str(melody_wav), "-o", str(tmp_path / "out.mid"), "--musicxml", str(xml)],
        )

        assert result.exit_code == 0, result.output
        assert xml.exists()

    def test_verbose_shows_notes(self, melody_wav, tmp_path):
        result = runner.invoke(
            app, ["transcribe", str(melody_wav), "-o", str(tmp_path / "out.mid"), "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "A4" in result.output
        assert "Timing Summary" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["transcribe", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_configuration(self, melody_wav, tmp_path):
        result = runner.invoke(
            app,
            ["transcribe", str(melody_wav), "-o", str(tmp_path / "out.mid"), "--hop-size", "4096"],
        )
        assert result.exit_code == 1
        assert "hop_size" in result.output


class TestInfoCommand:
    """Tests for `pitch-transcriber info`."""

    def test_info(self, melody_wav):
        result = runner.invoke(app, ["info", str(melody_wav)])

        assert result.exit_code == 0, result.output
        assert "44100 Hz" in result.output
        assert "2.00 seconds" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
