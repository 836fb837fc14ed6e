from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass

import numpy as np

from .models import SampleBuffer

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SAMPLE_RATE",
    "FormatError",
    "PcmFormat",
    "decode",
    "decode_base64",
    "encode",
    "encode_base64",
]

DEFAULT_SAMPLE_RATE = 24000
SAMPLE_WIDTH = 2

_PCM16 = np.dtype("<i2")


class FormatError(ValueError):
    """Raised when a byte stream is not whole 16-bit PCM samples."""


@dataclass(frozen=True)
class PcmFormat:
    """
    Transport description of a linear PCM stream.

    Only 16-bit signed little-endian samples are supported; ``sample_width`` is
    carried so it can be handed to container writers unchanged.
    """

    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = 1
    sample_width: int = SAMPLE_WIDTH


def decode(data: bytes, sample_rate: int = DEFAULT_SAMPLE_RATE, channels: int = 1) -> SampleBuffer:
    """
    Interpret ``data`` as little-endian signed 16-bit PCM.

    Interleaved multi-channel input keeps only the first channel. Samples are
    scaled into [-1.0, 1.0) by dividing by 32768.
    """
    if len(data) % SAMPLE_WIDTH:
        raise FormatError(
            f"PCM payload has {len(data)} bytes, which is not a whole number of 16-bit samples."
        )
    raw = np.frombuffer(data, dtype=_PCM16)
    channels = max(1, int(channels))
    if channels > 1:
        frame_count = raw.shape[0] // channels
        raw = raw[: frame_count * channels : channels]
    samples = raw.astype(np.float32) / np.float32(32768.0)
    logger.debug("Decoded %d samples at %d Hz (%d channel input).", samples.shape[0], sample_rate, channels)
    return SampleBuffer(samples=samples, sample_rate=sample_rate)


def encode(buffer: SampleBuffer) -> bytes:
    """
    Convert float samples back to little-endian signed 16-bit PCM.

    Negative values scale by 32768 and non-negative values by 32767, matching
    the asymmetric range of int16. Fractions are truncated toward zero.
    """
    clipped = np.clip(np.asarray(buffer.samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.trunc(scaled).astype(_PCM16).tobytes()


def decode_base64(payload: str | bytes, sample_rate: int = DEFAULT_SAMPLE_RATE, channels: int = 1) -> SampleBuffer:
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise FormatError(f"PCM payload is not valid base64: {exc}") from exc
    return decode(data, sample_rate=sample_rate, channels=channels)


def encode_base64(buffer: SampleBuffer) -> str:
    return base64.b64encode(encode(buffer)).decode("ascii")
