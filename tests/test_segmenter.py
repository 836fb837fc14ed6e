import math

import numpy as np

from speech_splitter.models import LoudnessProfile, SampleBuffer, SampleRange, SegmentationConfig
from speech_splitter.segmenter import find_cut_points, find_segments


def _tone(duration_s: float, sample_rate: int, amplitude: float = 0.5) -> np.ndarray:
    length = int(duration_s * sample_rate)
    t = np.arange(length)
    return (amplitude * np.sin(2 * math.pi * 220 * t / sample_rate)).astype(np.float32)


def _silence(duration_s: float, sample_rate: int) -> np.ndarray:
    return np.zeros(int(duration_s * sample_rate), dtype=np.float32)


def test_two_sentences_separated_by_one_second_pause():
    rate = 24000
    samples = np.concatenate([_tone(2, rate), _silence(1, rate), _tone(2, rate)])
    config = SegmentationConfig(rms_threshold=0.015, min_silence_ms=450, frame_ms=20, hop_ms=10)

    segments = find_segments(SampleBuffer(samples=samples, sample_rate=rate), config)

    # First fully silent frame is 200 (sample 48000); the run reaches 45 frames at
    # frame 244 and the cut sits 22 frames back from there.
    assert segments == [SampleRange(0, 53280), SampleRange(53280, 120000)]
    assert abs(segments[0].end_sample / rate - 2.0) < 0.5


def test_cut_point_is_centred_in_minimum_run():
    profile = LoudnessProfile(
        values=np.array([1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0]),
        frame_size=4,
        hop_size=2,
        sample_rate=100,
    )
    config = SegmentationConfig(rms_threshold=0.5, min_silence_ms=30, frame_ms=40, hop_ms=10)

    boundaries = find_cut_points(profile, config)

    # Run reaches 3 frames at index 4: (4 - 3 // 2) * hop, not 4 * hop.
    assert boundaries == [6]


def test_one_cut_per_silence_run():
    values = np.array([1.0] + [0.0] * 10 + [1.0] + [0.0] * 3 + [1.0])
    profile = LoudnessProfile(values=values, frame_size=2, hop_size=1, sample_rate=100)
    config = SegmentationConfig(rms_threshold=0.5, min_silence_ms=20, frame_ms=20, hop_ms=10)

    boundaries = find_cut_points(profile, config)

    # min frames = 2; first run qualifies at index 2, second at index 13.
    assert boundaries == [1, 12]


def test_threshold_is_strict():
    profile = LoudnessProfile(values=np.array([0.5, 0.5, 0.5]), frame_size=1, hop_size=1, sample_rate=10)
    config = SegmentationConfig(rms_threshold=0.5, min_silence_ms=10, frame_ms=10, hop_ms=10)

    assert find_cut_points(profile, config) == []


def test_short_candidates_are_dropped():
    rate = 24000
    samples = np.concatenate([_silence(1, rate), _tone(1, rate)])
    config = SegmentationConfig(min_silence_ms=200)

    segments = find_segments(SampleBuffer(samples=samples, sample_rate=rate), config)

    # Leading silence qualifies at frame 19 -> cut at (19 - 10) * 240 = 2160,
    # leaving [0, 2160) shorter than 0.2 s.
    assert segments == [SampleRange(2160, 48000)]
    assert all(segment.length > 0.2 * rate for segment in segments)


def test_recording_without_pauses_is_one_segment():
    rate = 16000
    samples = _tone(1.5, rate)

    segments = find_segments(SampleBuffer(samples=samples, sample_rate=rate), SegmentationConfig())

    assert segments == [SampleRange(0, len(samples))]


def test_empty_buffer_has_no_segments():
    buffer = SampleBuffer(samples=np.zeros(0, dtype=np.float32), sample_rate=24000)

    assert find_segments(buffer, SegmentationConfig()) == []


def test_non_positive_hop_never_cuts():
    rate = 8000
    samples = np.concatenate([_tone(1, rate), _silence(1, rate), _tone(1, rate)])
    config = SegmentationConfig(hop_ms=0)

    segments = find_segments(SampleBuffer(samples=samples, sample_rate=rate), config)

    assert segments == [SampleRange(0, len(samples))]
