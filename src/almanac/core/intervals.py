from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """Half-open integer range ``[start, start + length)``."""

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"interval start must be non-negative, got {self.start}")
        if self.length < 0:
            raise ValueError(f"interval length must be non-negative, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def empty(self) -> bool:
        return self.length == 0

    def shifted(self, offset: int) -> Interval:
        return Interval(self.start + offset, self.length)

    @classmethod
    def from_bounds(cls, start: int, end: int) -> Interval:
        return cls(start, max(0, end - start))


def drop_empty(intervals: Iterable[Interval]) -> list[Interval]:
    return [iv for iv in intervals if not iv.empty]


def total_length(intervals: Iterable[Interval]) -> int:
    return sum(iv.length for iv in intervals)


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort and coalesce overlapping or touching intervals.

    Empty intervals are discarded. Used to keep the piece count down between
    stages; merging never changes which values are covered.
    """
    ordered = sorted((iv for iv in intervals if iv.length > 0), key=lambda iv: iv.start)
    merged: list[tuple[int, int]] = []
    for iv in ordered:
        if merged and iv.start <= merged[-1][1]:
            ps, pe = merged[-1]
            merged[-1] = (ps, max(pe, iv.end))
        else:
            merged.append((iv.start, iv.end))
    return [Interval.from_bounds(s, e) for s, e in merged]
