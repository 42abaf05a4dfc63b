"""Input layer - audio loading and framing."""

from .loader import AudioLoader
from .framing import AnalysisFrame, FrameSource, as_float_buffer

__all__ = ["AudioLoader", "AnalysisFrame", "FrameSource", "as_float_buffer"]
