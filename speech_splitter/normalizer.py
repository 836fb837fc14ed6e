from __future__ import annotations

import logging
from typing import List, Sequence

from .models import SampleRange

logger = logging.getLogger(__name__)

__all__ = ["TINY_RANGE_SECONDS", "normalize_to_count"]

TINY_RANGE_SECONDS = 0.25


def normalize_to_count(
    ranges: Sequence[SampleRange], target_count: int, sample_rate: int
) -> List[SampleRange]:
    """
    Reconcile detected ranges with the number of sentences expected.

    Runs in three passes:

    1. Ranges shorter than ``TINY_RANGE_SECONDS`` absorb their successor, so a
       chain of tiny ranges collapses into one.
    2. While there are too many ranges, the shortest one merges with its
       successor (or its predecessor when it is last).
    3. While there are too few, the longest range is split at its midpoint.

    Ties always go to the lowest index so the result is reproducible. The input
    sequence is not modified.
    """
    if target_count < 0:
        raise ValueError(f"target_count must not be negative, got {target_count}")
    if target_count > 0 and not ranges:
        raise ValueError(f"Cannot produce {target_count} ranges from an empty range list.")

    out = _merge_tiny(list(ranges), sample_rate)
    merges = 0
    while len(out) > target_count and len(out) > 1:
        out = _merge_shortest(out)
        merges += 1
    splits = 0
    while len(out) < target_count:
        out = _split_longest(out)
        splits += 1

    logger.debug(
        "Normalized %d ranges to %d (merges=%d, splits=%d).",
        len(ranges),
        target_count,
        merges,
        splits,
    )
    return out[:target_count]


def _merge_tiny(ranges: List[SampleRange], sample_rate: int) -> List[SampleRange]:
    out = list(ranges)
    index = 0
    while index < len(out) - 1:
        current = out[index]
        if current.duration_seconds(sample_rate) < TINY_RANGE_SECONDS:
            merged = SampleRange(current.start_sample, out[index + 1].end_sample)
            out[index : index + 2] = [merged]
        else:
            index += 1
    return out


def _merge_shortest(ranges: List[SampleRange]) -> List[SampleRange]:
    shortest = _first_extreme(ranges, longest=False)
    if shortest < len(ranges) - 1:
        left, right = shortest, shortest + 1
    else:
        left, right = shortest - 1, shortest
    merged = SampleRange(ranges[left].start_sample, ranges[right].end_sample)
    return ranges[:left] + [merged] + ranges[right + 1 :]


def _split_longest(ranges: List[SampleRange]) -> List[SampleRange]:
    longest = _first_extreme(ranges, longest=True)
    target = ranges[longest]
    mid = (target.start_sample + target.end_sample) // 2
    halves = [SampleRange(target.start_sample, mid), SampleRange(mid, target.end_sample)]
    return ranges[:longest] + halves + ranges[longest + 1 :]


def _first_extreme(ranges: Sequence[SampleRange], *, longest: bool) -> int:
    # Strict comparison keeps the earliest index on ties.
    best = 0
    for index in range(1, len(ranges)):
        length = ranges[index].length
        if (length > ranges[best].length) if longest else (length < ranges[best].length):
            best = index
    return best
