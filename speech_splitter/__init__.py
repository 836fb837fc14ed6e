"""
Sentence clip splitting utilities.

This package exposes the building blocks used by the CLI entry point:

- PCM conversion between 16-bit bytes and float buffers (`pcm`).
- Short-time loudness analysis (`profile`).
- Pause detection and candidate ranges (`segmenter`).
- Matching candidate ranges to the expected sentence count (`normalizer`).
- Clip extraction (`slicer`) and the end-to-end splitter (`splitter`).
- Recording I/O, transcript parsing and manifest helpers.
"""

from .models import LoudnessProfile, SampleBuffer, SampleRange, SegmentationConfig
from .pcm import (
    DEFAULT_SAMPLE_RATE,
    FormatError,
    PcmFormat,
    decode,
    decode_base64,
    encode,
    encode_base64,
)
from .profile import compute_loudness_profile
from .segmenter import find_cut_points, find_segments
from .normalizer import normalize_to_count
from .slicer import slice_buffer, slice_range
from .splitter import ClipResult, ClipSplitter, SplitResult, SplitterConfig
from .exporter import clip_to_segment, export_clips, load_recording
from .transcript import count_sentences, parse_transcript
from .metadata import ManifestBuilder

__all__ = [
    "SampleBuffer",
    "SampleRange",
    "LoudnessProfile",
    "SegmentationConfig",
    "DEFAULT_SAMPLE_RATE",
    "FormatError",
    "PcmFormat",
    "decode",
    "encode",
    "decode_base64",
    "encode_base64",
    "compute_loudness_profile",
    "find_cut_points",
    "find_segments",
    "normalize_to_count",
    "slice_buffer",
    "slice_range",
    "ClipSplitter",
    "ClipResult",
    "SplitResult",
    "SplitterConfig",
    "load_recording",
    "clip_to_segment",
    "export_clips",
    "parse_transcript",
    "count_sentences",
    "ManifestBuilder",
]
