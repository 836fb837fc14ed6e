from __future__ import annotations

import logging
import re
from typing import Iterable, List

logger = logging.getLogger(__name__)

__all__ = ["count_sentences", "parse_transcript"]

NUMBERED_LINE_PATTERN = re.compile(r"^\s*(\d+)[.)]\s+(.*\S)\s*$")
# CJK sentence marks are not followed by a space.
SENTENCE_END_PATTERN = re.compile(r"(?<=[\.?!])\s+|(?<=[。！？])\s*")


def parse_transcript(text: str) -> List[str]:
    """
    Recover the sentences that were read aloud in a recording.

    Numbered transcripts (``"1. First sentence."`` entries, usually separated by
    blank lines) yield one sentence per entry even when an entry holds several
    full stops. Anything else is split on sentence-final punctuation and line
    breaks.
    """
    text = (text or "").strip()
    if not text:
        return []

    normalized = re.sub(r"\r\n?", "\n", text)
    numbered = _numbered_entries(normalized)
    if numbered:
        logger.debug("Parsed %d numbered transcript entries.", len(numbered))
        return numbered

    sentences = _regex_sentence_split(normalized)
    logger.debug("Split transcript into %d sentences.", len(sentences))
    return sentences


def count_sentences(text: str) -> int:
    return len(parse_transcript(text))


def _numbered_entries(text: str) -> List[str]:
    lines = [line for line in text.split("\n") if line.strip()]
    entries: List[str] = []
    for line in lines:
        match = NUMBERED_LINE_PATTERN.match(line)
        if match:
            entries.append(match.group(2).strip())
        elif entries:
            # Wrapped continuation of the previous entry.
            entries[-1] = f"{entries[-1]} {line.strip()}"
        else:
            return []
    return entries


def _regex_sentence_split(text: str) -> List[str]:
    parts: Iterable[str] = SENTENCE_END_PATTERN.split(text)
    sentences: List[str] = []
    for part in parts:
        for sub in re.split(r"\n+", part):
            sub = sub.strip()
            if sub:
                sentences.append(sub)
    return sentences
