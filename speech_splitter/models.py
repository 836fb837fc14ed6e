"""Dataclasses shared across the segmentation engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

__all__ = [
    "SampleBuffer",
    "SampleRange",
    "LoudnessProfile",
    "SegmentationConfig",
]


@dataclass(eq=False)
class SampleBuffer:
    """Mono float samples in [-1.0, 1.0] at a fixed sample rate."""

    samples: np.ndarray = field(repr=False)
    sample_rate: int

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_seconds(self) -> float:
        return len(self) / self.sample_rate


@dataclass(frozen=True)
class SampleRange:
    """Half-open interval ``[start_sample, end_sample)`` over a buffer."""

    start_sample: int
    end_sample: int

    def __post_init__(self) -> None:
        if self.end_sample < self.start_sample:
            raise ValueError(
                f"Range end {self.end_sample} precedes start {self.start_sample}"
            )

    @property
    def length(self) -> int:
        return self.end_sample - self.start_sample

    def duration_seconds(self, sample_rate: int) -> float:
        return self.length / sample_rate

    def start_ms(self, sample_rate: int) -> int:
        return int(self.start_sample * 1000 / sample_rate)

    def end_ms(self, sample_rate: int) -> int:
        return int(self.end_sample * 1000 / sample_rate)


@dataclass(eq=False)
class LoudnessProfile:
    """Per-frame RMS energy. Frame ``i`` starts at sample ``i * hop_size``."""

    values: np.ndarray = field(repr=False)
    frame_size: int
    hop_size: int
    sample_rate: int

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def frame_start(self, index: int) -> int:
        return index * self.hop_size


@dataclass(frozen=True)
class SegmentationConfig:
    """
    Thresholds used to find sentence pauses in a recording.

    The defaults suit clean synthesized speech at 24 kHz. Noisier recordings
    need a higher ``rms_threshold``.
    """

    rms_threshold: float = 0.015
    min_silence_ms: float = 450.0
    frame_ms: float = 20.0
    hop_ms: float = 10.0

    @property
    def min_silence_frames(self) -> int | None:
        # No run can qualify without a positive hop.
        if self.hop_ms <= 0:
            return None
        return math.ceil(self.min_silence_ms / self.hop_ms)

    def validate(self) -> None:
        for name in ("rms_threshold", "min_silence_ms", "frame_ms", "hop_ms"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.hop_ms > self.frame_ms:
            raise ValueError(
                f"hop_ms ({self.hop_ms}) must not exceed frame_ms ({self.frame_ms})"
            )
