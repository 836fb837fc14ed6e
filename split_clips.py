#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from speech_splitter.exporter import export_clips, load_recording
from speech_splitter.metadata import ManifestBuilder
from speech_splitter.models import SegmentationConfig
from speech_splitter.pcm import DEFAULT_SAMPLE_RATE, PcmFormat
from speech_splitter.splitter import ClipSplitter, SplitterConfig
from speech_splitter.transcript import parse_transcript

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    defaults = SegmentationConfig()
    parser = argparse.ArgumentParser(description="Split a multi-sentence speech recording into one clip per sentence.")
    parser.add_argument("--input", required=True, help="Recording to split (any format ffmpeg reads, or raw PCM with --raw-pcm).")
    parser.add_argument("--output-dir", default="./output/clips", help="Directory to write the clips to.")
    count = parser.add_mutually_exclusive_group(required=True)
    count.add_argument("--sentences", type=int, help="Number of sentences spoken in the recording.")
    count.add_argument("--transcript", help="Transcript file; the sentence count is taken from it.")
    parser.add_argument("--transcript-encoding", default="utf-8", help="Encoding used for the transcript file.")
    parser.add_argument("--raw-pcm", action="store_true", help="Treat input as headerless 16-bit little-endian PCM.")
    parser.add_argument("--sample-rate", type=int, default=DEFAULT_SAMPLE_RATE, help="Sample rate of raw PCM input.")
    parser.add_argument("--channels", type=int, default=1, help="Interleaved channel count of raw PCM input.")
    parser.add_argument("--rms-threshold", type=float, default=defaults.rms_threshold, help="RMS level below which a frame counts as silent.")
    parser.add_argument("--min-silence-ms", type=float, default=defaults.min_silence_ms, help="Pause length that separates two sentences.")
    parser.add_argument("--frame-ms", type=float, default=defaults.frame_ms, help="Analysis frame length in milliseconds.")
    parser.add_argument("--hop-ms", type=float, default=defaults.hop_ms, help="Analysis hop length in milliseconds.")
    parser.add_argument("--prefix", default="audio_", help="File name prefix for clips.")
    parser.add_argument("--format", default="wav", help="Container format for clips.")
    parser.add_argument("--manifest-output", help="Path for the manifest JSON (default: <output-dir>/manifest.json).")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def load_sentences(path: Path, encoding: str) -> List[str]:
    if not path.exists():
        raise FileNotFoundError(f"Transcript file does not exist: {path}")
    return parse_transcript(path.read_text(encoding=encoding))


def build_segmentation_config(args: argparse.Namespace) -> SegmentationConfig:
    config = SegmentationConfig(
        rms_threshold=args.rms_threshold,
        min_silence_ms=args.min_silence_ms,
        frame_ms=args.frame_ms,
        hop_ms=args.hop_ms,
    )
    config.validate()
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.debug)

    sentences: List[str] = []
    if args.transcript:
        sentences = load_sentences(Path(args.transcript), args.transcript_encoding)
        if not sentences:
            logger.warning("Transcript %s contains no sentences. Nothing to split.", args.transcript)
            return 0
        clip_count = len(sentences)
    else:
        clip_count = args.sentences
        if clip_count <= 0:
            raise ValueError("--sentences must be positive.")

    input_path = Path(args.input)
    data, pcm_format = load_recording(
        input_path,
        raw_pcm=args.raw_pcm,
        pcm_format=PcmFormat(sample_rate=args.sample_rate, channels=args.channels),
    )
    config = SplitterConfig(pcm_format=pcm_format, segmentation=build_segmentation_config(args))

    logger.info("Splitting %s into %d clips.", input_path, clip_count)
    result = ClipSplitter(config).split(data, clip_count)

    output_dir = Path(args.output_dir)
    files = export_clips(result.clips, output_dir, prefix=args.prefix, output_format=args.format)

    manifest_path = Path(args.manifest_output) if args.manifest_output else output_dir / "manifest.json"
    builder = ManifestBuilder(config=config, output_path=manifest_path)
    manifest = builder.build_manifest(
        result=result,
        files=files,
        sentences=sentences,
        options={"input_path": input_path},
    )
    builder.write_manifest(manifest)

    logger.info("Done. %d clips saved to %s", len(files), output_dir)
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.error("Interrupted by user.")
        sys.exit(1)
    except Exception as exc:
        logger.exception("Fatal error: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
