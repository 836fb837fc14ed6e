from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from . import pcm
from .models import SampleBuffer, SampleRange, SegmentationConfig
from .normalizer import normalize_to_count
from .segmenter import find_segments
from .slicer import slice_range

logger = logging.getLogger(__name__)


@dataclass
class SplitterConfig:
    """
    Configuration describing the recording format and how pauses are detected.
    """

    pcm_format: pcm.PcmFormat = field(default_factory=pcm.PcmFormat)
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)

    @property
    def sample_rate(self) -> int:
        return self.pcm_format.sample_rate


@dataclass
class ClipResult:
    index: int
    sample_range: SampleRange
    pcm: bytes
    sample_rate: int

    @property
    def start_ms(self) -> int:
        return self.sample_range.start_ms(self.sample_rate)

    @property
    def end_ms(self) -> int:
        return self.sample_range.end_ms(self.sample_rate)

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass
class SplitResult:
    candidates: List[SampleRange]
    ranges: List[SampleRange]
    clips: List[ClipResult]
    total_samples: int


class ClipSplitter:
    """
    Cuts one recording of several spoken sentences into one clip per sentence.
    """

    def __init__(self, config: SplitterConfig | None = None) -> None:
        self.config = config or SplitterConfig()

    def split(self, data: bytes, clip_count: int) -> SplitResult:
        fmt = self.config.pcm_format
        buffer = pcm.decode(data, sample_rate=fmt.sample_rate, channels=fmt.channels)
        return self.split_buffer(buffer, clip_count)

    def split_base64(self, payload: str | bytes, clip_count: int) -> SplitResult:
        fmt = self.config.pcm_format
        buffer = pcm.decode_base64(payload, sample_rate=fmt.sample_rate, channels=fmt.channels)
        return self.split_buffer(buffer, clip_count)

    def split_buffer(self, buffer: SampleBuffer, clip_count: int) -> SplitResult:
        if clip_count < 1:
            raise ValueError(f"clip_count must be at least 1, got {clip_count}")
        if len(buffer) == 0:
            raise ValueError(f"Cannot split an empty recording into {clip_count} clips.")

        candidates = find_segments(buffer, self.config.segmentation)
        logger.debug(
            "Detected %d candidate segments for %d expected clips.",
            len(candidates),
            clip_count,
        )
        ranges_in = candidates
        if not candidates:
            logger.warning(
                "No pauses or speech segments survived filtering in %.2fs of audio; "
                "splitting the whole recording evenly.",
                buffer.duration_seconds,
            )
            ranges_in = [SampleRange(0, len(buffer))]
        elif abs(len(candidates) - clip_count) > max(1, clip_count // 2):
            logger.warning(
                "Detected %d segments but %d were expected. "
                "Consider adjusting the silence threshold.",
                len(candidates),
                clip_count,
            )

        ranges = normalize_to_count(ranges_in, clip_count, buffer.sample_rate)
        clips = [
            ClipResult(
                index=index,
                sample_range=sample_range,
                pcm=pcm.encode(slice_range(buffer, sample_range)),
                sample_rate=buffer.sample_rate,
            )
            for index, sample_range in enumerate(ranges, start=1)
        ]
        logger.info("Split %.2fs of audio into %d clips.", buffer.duration_seconds, len(clips))
        return SplitResult(
            candidates=candidates,
            ranges=ranges,
            clips=clips,
            total_samples=len(buffer),
        )
