"""Topic selection and truncation helpers."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from ad_insights.domain.models import AdRecord, SegmentationResult

ROW_LIMIT = 5
GROUP_LIMIT = 3

T = TypeVar("T")


def top_n(items: Sequence[T], limit: int) -> List[T]:
    """Leading entries of an already ordered bucket."""
    if limit <= 0:
        return []
    return list(items[:limit])


def wasted_budget(segments: SegmentationResult) -> float:
    return sum(record.amount_spent for record in segments.zombies) + sum(
        record.amount_spent for record in segments.bleeders
    )


def kill_list(segments: SegmentationResult, limit: int = ROW_LIMIT) -> tuple[List[AdRecord], List[AdRecord]]:
    """Zombies and bleeders to stop, each capped for display."""
    return top_n(segments.zombies, limit), top_n(segments.bleeders, limit)
