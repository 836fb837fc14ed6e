from __future__ import annotations

import numpy as np

from .models import SampleBuffer, SampleRange

__all__ = ["slice_buffer", "slice_range"]


def slice_buffer(buffer: SampleBuffer, start_sample: int, end_sample: int) -> SampleBuffer:
    """
    Copy ``[start_sample, end_sample)`` into a new buffer.

    Positions outside the source read as silence, so ranges that overrun the
    recording still yield a clip of the requested length.
    """
    length = max(0, end_sample - start_sample)
    out = np.zeros(length, dtype=np.float32)
    lo = max(start_sample, 0)
    hi = min(end_sample, len(buffer))
    if hi > lo:
        out[lo - start_sample : hi - start_sample] = buffer.samples[lo:hi]
    return SampleBuffer(samples=out, sample_rate=buffer.sample_rate)


def slice_range(buffer: SampleBuffer, sample_range: SampleRange) -> SampleBuffer:
    return slice_buffer(buffer, sample_range.start_sample, sample_range.end_sample)
