"""Global constants for Pitch Transcriber."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Audio defaults (the decoder delivers 16-bit mono PCM at this rate)
DEFAULT_SR = 44100
DEFAULT_FRAME_SIZE = 2048
DEFAULT_HOP_SIZE = 2048  # no overlap

# Pitch search range in Hz
DEFAULT_FMIN = 50.0
DEFAULT_FMAX = 2000.0

# YIN absolute threshold on the cumulative mean normalized difference.
# Frames whose best dip stays above it are reported unvoiced.
DEFAULT_YIN_THRESHOLD = 0.20

# Frames quieter than this RMS are unvoiced without running YIN
DEFAULT_SILENCE_RMS = 1e-4

# Segmentation defaults
DEFAULT_MIN_NOTE_DURATION = 0.1
DEFAULT_VELOCITY = 90

# Musical defaults (not inferred by the engine)
DEFAULT_TEMPO = 120.0
DEFAULT_TIME_SIGNATURE = (4, 4)
DEFAULT_KEY_SIGNATURE = "C"

# Tuning reference
A4_MIDI = 69
A4_FREQUENCY = 440.0

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
