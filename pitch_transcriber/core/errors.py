"""Exceptions raised by the transcription engine."""


class TranscriptionError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(TranscriptionError, ValueError):
    """Invalid configuration or input parameters, raised before processing starts."""


class TranscriptionCancelled(TranscriptionError):
    """Raised when a caller's cancellation check asks the pipeline to stop."""
