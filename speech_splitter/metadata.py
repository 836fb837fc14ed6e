from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from .splitter import SplitResult, SplitterConfig

logger = logging.getLogger(__name__)

__all__ = ["ManifestBuilder"]


@dataclass
class ManifestBuilder:
    config: SplitterConfig
    output_path: Path

    def build_manifest(
        self,
        *,
        result: SplitResult,
        files: Sequence[Path],
        sentences: Optional[Sequence[str]] = None,
        options: Optional[Dict[str, object]] = None,
    ) -> Dict[str, object]:
        options = options or {}
        sentences = list(sentences or [])
        segmentation = self.config.segmentation
        sample_rate = self.config.sample_rate

        clips = []
        for position, clip in enumerate(result.clips):
            clips.append(
                {
                    "index": clip.index,
                    "file": files[position].name if position < len(files) else None,
                    "start_sample": clip.sample_range.start_sample,
                    "end_sample": clip.sample_range.end_sample,
                    "start_ms": clip.start_ms,
                    "end_ms": clip.end_ms,
                    "ms": clip.duration_ms,
                    "sentence": sentences[position] if position < len(sentences) else None,
                }
            )

        manifest = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "input_path": str(options.get("input_path")) if options.get("input_path") else None,
            "sample_rate": sample_rate,
            "total_samples": result.total_samples,
            "total_ms": int(result.total_samples * 1000 / sample_rate),
            "segmentation": {
                "rms_threshold": segmentation.rms_threshold,
                "min_silence_ms": segmentation.min_silence_ms,
                "frame_ms": segmentation.frame_ms,
                "hop_ms": segmentation.hop_ms,
            },
            "candidate_count": len(result.candidates),
            "clip_count": len(result.clips),
            "clips": clips,
        }
        return manifest

    def write_manifest(self, manifest: Dict[str, object]) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with self.output_path.open("w", encoding="utf-8") as f:
            json.dump(manifest, f, ensure_ascii=False, indent=2)
        logger.info("Manifest written to %s", self.output_path)
