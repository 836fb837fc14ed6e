from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from pydub import AudioSegment

from .pcm import SAMPLE_WIDTH, PcmFormat
from .splitter import ClipResult

logger = logging.getLogger(__name__)

__all__ = ["clip_to_segment", "export_clips", "load_recording"]


def load_recording(
    path: Path,
    *,
    raw_pcm: bool = False,
    pcm_format: PcmFormat | None = None,
) -> Tuple[bytes, PcmFormat]:
    """
    Read a recording and return mono 16-bit PCM plus its format.

    Container files keep their own frame rate; nothing is resampled. Headerless
    ``raw_pcm`` files are described by ``pcm_format`` and returned untouched so
    the codec can pick out the first channel itself.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input recording does not exist: {path}")

    pcm_format = pcm_format or PcmFormat()
    if raw_pcm:
        data = path.read_bytes()
        logger.debug("Read %d bytes of raw PCM from %s", len(data), path)
        return data, pcm_format

    segment = AudioSegment.from_file(path)
    if segment.channels > 1:
        logger.debug("Using first of %d channels from %s", segment.channels, path)
        segment = segment.split_to_mono()[0]
    if segment.sample_width != SAMPLE_WIDTH:
        segment = segment.set_sample_width(SAMPLE_WIDTH)
    logger.debug("Loaded %s: %d ms at %d Hz", path, len(segment), segment.frame_rate)
    return segment.raw_data, PcmFormat(sample_rate=segment.frame_rate, channels=1)


def clip_to_segment(clip: ClipResult) -> AudioSegment:
    return AudioSegment(
        data=clip.pcm,
        sample_width=SAMPLE_WIDTH,
        frame_rate=clip.sample_rate,
        channels=1,
    )


def export_clips(
    clips: Sequence[ClipResult],
    directory: Path,
    *,
    prefix: str = "audio_",
    output_format: str = "wav",
) -> List[Path]:
    """Write each clip as ``<prefix><index>.<format>`` under ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    paths: List[Path] = []
    for clip in clips:
        path = directory / f"{prefix}{clip.index}.{output_format}"
        clip_to_segment(clip).export(path, format=output_format)
        paths.append(path)
    logger.info("Exported %d clips to %s", len(paths), directory)
    return paths
