from __future__ import annotations

import logging
from typing import List, Optional

from .models import LoudnessProfile, SampleBuffer, SampleRange, SegmentationConfig
from .profile import compute_loudness_profile

logger = logging.getLogger(__name__)

__all__ = ["MIN_CANDIDATE_SECONDS", "find_cut_points", "find_segments"]

# Candidates no longer than this are noise blips and are dropped.
MIN_CANDIDATE_SECONDS = 0.2


def find_cut_points(profile: LoudnessProfile, config: SegmentationConfig) -> List[int]:
    """
    Sample positions at which the recording should be cut.

    A cut is placed once per silence run, the moment the run first reaches
    ``config.min_silence_frames`` frames. It sits at the centre of that
    minimum-length run so both neighbouring sentences keep some silence.
    """
    min_frames: Optional[int] = config.min_silence_frames
    boundaries: List[int] = []
    run = 0
    for index, rms in enumerate(profile.values):
        if rms < config.rms_threshold:
            run += 1
            if run == min_frames:
                centre = index - min_frames // 2
                boundaries.append(profile.frame_start(centre))
        else:
            run = 0
    return boundaries


def find_segments(buffer: SampleBuffer, config: SegmentationConfig) -> List[SampleRange]:
    """
    Split ``buffer`` at sustained pauses into candidate sentence ranges.

    The number of ranges returned is whatever the signal suggests; matching it
    to an expected sentence count is left to ``normalize_to_count``.
    """
    profile = compute_loudness_profile(buffer, config.frame_ms, config.hop_ms)
    boundaries = find_cut_points(profile, config)

    edges = [0, *boundaries, len(buffer)]
    min_length = buffer.sample_rate * MIN_CANDIDATE_SECONDS
    segments: List[SampleRange] = []
    for start, end in zip(edges, edges[1:]):
        if end - start > min_length:
            segments.append(SampleRange(start, end))
        else:
            logger.debug("Dropping short candidate [%d, %d).", start, end)

    logger.debug(
        "Found %d cut points and %d candidate segments in %.2fs of audio.",
        len(boundaries),
        len(segments),
        buffer.duration_seconds,
    )
    return segments
