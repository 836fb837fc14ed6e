from __future__ import annotations

import logging
import math

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .models import LoudnessProfile, SampleBuffer

logger = logging.getLogger(__name__)

__all__ = ["compute_loudness_profile", "ms_to_samples"]


def ms_to_samples(sample_rate: int, duration_ms: float) -> int:
    """Whole samples covered by ``duration_ms``, never less than one."""
    return max(1, int(math.floor(sample_rate * duration_ms / 1000)))


def compute_loudness_profile(buffer: SampleBuffer, frame_ms: float, hop_ms: float) -> LoudnessProfile:
    """
    Short-time RMS energy of ``buffer``.

    Frames of ``frame_ms`` start every ``hop_ms``. A trailing partial frame is
    dropped rather than padded, so up to ``frame_size - 1`` samples at the end
    never contribute.
    """
    frame_size = ms_to_samples(buffer.sample_rate, frame_ms)
    hop_size = ms_to_samples(buffer.sample_rate, hop_ms)

    samples = np.asarray(buffer.samples, dtype=np.float64)
    if samples.shape[0] < frame_size:
        values = np.zeros(0, dtype=np.float64)
    else:
        frames = sliding_window_view(samples, frame_size)[::hop_size]
        energy = np.einsum("ij,ij->i", frames, frames) / frame_size
        values = np.sqrt(energy)

    logger.debug(
        "Loudness profile: %d frames (frame=%d, hop=%d samples).",
        values.shape[0],
        frame_size,
        hop_size,
    )
    return LoudnessProfile(
        values=values,
        frame_size=frame_size,
        hop_size=hop_size,
        sample_rate=buffer.sample_rate,
    )
