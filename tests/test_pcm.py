import struct

import numpy as np
import pytest

from speech_splitter.models import SampleBuffer
from speech_splitter.pcm import FormatError, decode, decode_base64, encode, encode_base64


def test_decode_scales_by_32768():
    data = struct.pack("<4h", 0, 16384, -32768, 32767)

    buffer = decode(data, sample_rate=16000)

    assert buffer.sample_rate == 16000
    assert len(buffer) == 4
    assert buffer.samples.tolist() == [0.0, 0.5, -1.0, 32767 / 32768]


def test_decode_rejects_partial_sample():
    with pytest.raises(FormatError):
        decode(b"\x00\x01\x02", sample_rate=24000)


def test_format_error_is_value_error():
    assert issubclass(FormatError, ValueError)


def test_decode_keeps_first_channel_of_interleaved_input():
    # Left channel rises, right channel is constant.
    data = struct.pack("<6h", 100, -5, 200, -5, 300, -5)

    buffer = decode(data, sample_rate=24000, channels=2)

    assert len(buffer) == 3
    assert np.allclose(buffer.samples * 32768, [100, 200, 300])


def test_encode_uses_asymmetric_scaling_and_clamps():
    samples = np.array([1.0, -1.0, 0.5, -0.5, 2.0, -3.0, 0.0], dtype=np.float32)

    data = encode(SampleBuffer(samples=samples, sample_rate=24000))

    assert struct.unpack("<7h", data) == (32767, -32768, 16383, -16384, 32767, -32768, 0)


def test_encode_truncates_toward_zero():
    samples = np.array([0.3, -0.3], dtype=np.float64)

    data = encode(SampleBuffer(samples=samples, sample_rate=24000))

    assert struct.unpack("<2h", data) == (int(0.3 * 32767), int(-0.3 * 32768))


def test_decode_encode_round_trip_is_quantization_bound():
    rng = np.random.default_rng(7)
    samples = rng.uniform(-1.0, 1.0, size=5000).astype(np.float32)
    samples[:3] = [-1.0, 0.0, 1.0]
    original = SampleBuffer(samples=samples, sample_rate=24000)

    restored = decode(encode(original), sample_rate=24000)

    assert len(restored) == len(original)
    error = np.abs(restored.samples.astype(np.float64) - samples.astype(np.float64))
    # Truncation plus the 32767/32768 scale gap on the positive side.
    assert float(error.max()) <= 2 / 32768
    negative = samples < 0
    assert float(error[negative].max()) <= 1 / 32768


def test_base64_transport():
    samples = np.array([0.0, -0.25, -0.5], dtype=np.float32)
    payload = encode_base64(SampleBuffer(samples=samples, sample_rate=24000))

    restored = decode_base64(payload, sample_rate=24000)

    assert restored.samples.tolist() == [0.0, -0.25, -0.5]


def test_decode_base64_rejects_garbage():
    with pytest.raises(FormatError):
        decode_base64("not base64!", sample_rate=24000)
