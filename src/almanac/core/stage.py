"""Mapping rules and the per-category mapping stage."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from almanac.core.intervals import Interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingRule:
    """Shift every value in ``[source_start, source_start + length)`` by a fixed offset."""

    source_start: int
    dest_start: int
    length: int

    def __post_init__(self) -> None:
        for name in ("source_start", "dest_start", "length"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_triple(cls, triple: Sequence[int]) -> MappingRule:
        """Build from the almanac line order ``(dest_start, source_start, length)``."""
        dest_start, source_start, length = triple
        return cls(source_start=source_start, dest_start=dest_start, length=length)

    @property
    def source_end(self) -> int:
        return self.source_start + self.length

    @property
    def offset(self) -> int:
        return self.dest_start - self.source_start

    def contains(self, value: int) -> bool:
        return self.source_start <= value < self.source_end

    def apply(self, value: int) -> int:
        return value + self.offset


@dataclass(frozen=True)
class _Segment:
    start: int
    end: int
    offset: int
    rule_index: int  # position in MappingStage.rules


class MappingStage:
    """All rules for one category-to-category conversion, identity elsewhere.

    ``rules`` keeps insertion order. At construction the rules are resolved
    into sorted, disjoint segments; where rules overlap, each value belongs to
    the first rule (in insertion order) that contains it. Queries only touch
    the segment index.
    """

    def __init__(self, rules: Iterable[MappingRule], name: str = "") -> None:
        self.name = name
        self._rules = tuple(r for r in rules if r.length > 0)
        self._overlaps = _find_overlaps(self._rules)
        self._segments = _resolve_segments(self._rules, bool(self._overlaps))
        self._starts = [seg.start for seg in self._segments]
        if self._overlaps:
            logger.debug(
                "stage %s: %d rules, %d overlapping pairs resolved first-match",
                name or "<unnamed>",
                len(self._rules),
                len(self._overlaps),
            )
        else:
            logger.debug("stage %s: %d rules", name or "<unnamed>", len(self._rules))

    @classmethod
    def from_triples(cls, triples: Iterable[Sequence[int]], name: str = "") -> MappingStage:
        return cls((MappingRule.from_triple(t) for t in triples), name=name)

    @property
    def rules(self) -> tuple[MappingRule, ...]:
        return self._rules

    @property
    def sorted_rules(self) -> list[MappingRule]:
        return sorted(self._rules, key=lambda r: r.source_start)

    def overlaps(self) -> list[tuple[int, int]]:
        """Index pairs (into ``rules``) of rules whose source ranges overlap."""
        return list(self._overlaps)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"MappingStage(name={self.name!r}, rules={len(self._rules)})"

    def _segment_at(self, value: int) -> _Segment | None:
        i = bisect_right(self._starts, value) - 1
        if i >= 0:
            seg = self._segments[i]
            if seg.start <= value < seg.end:
                return seg
        return None

    def rule_for(self, value: int) -> MappingRule | None:
        seg = self._segment_at(value)
        return self._rules[seg.rule_index] if seg is not None else None

    def lookup(self, value: int) -> int:
        rule = self.rule_for(value)
        if rule is None:
            return value
        return rule.apply(value)

    def map_interval(self, interval: Interval) -> list[Interval]:
        """Split one interval against the segments and shift each piece.

        Walks a cursor from the interval start: inside a segment the piece runs
        to the segment end, in a gap it runs to the next segment start (identity).
        Work is proportional to the pieces emitted, not to the interval length.
        """
        out: list[Interval] = []
        cursor = interval.start
        remaining = interval.length
        if remaining <= 0:
            return out

        segs = self._segments
        i = bisect_right(self._starts, cursor) - 1
        if i < 0 or cursor >= segs[i].end:
            i += 1

        while remaining > 0:
            if i < len(segs) and segs[i].start <= cursor:
                seg = segs[i]
                take = min(remaining, seg.end - cursor)
                out.append(Interval(cursor, take).shifted(seg.offset))
                i += 1
            elif i < len(segs):
                take = min(remaining, segs[i].start - cursor)
                out.append(Interval(cursor, take))
            else:
                take = remaining
                out.append(Interval(cursor, take))
            cursor += take
            remaining -= take
        return out

    def map_intervals(self, intervals: Iterable[Interval]) -> list[Interval]:
        out: list[Interval] = []
        for iv in intervals:
            out.extend(self.map_interval(iv))
        return out


def _find_overlaps(rules: Sequence[MappingRule]) -> list[tuple[int, int]]:
    order = sorted(range(len(rules)), key=lambda k: rules[k].source_start)
    pairs: list[tuple[int, int]] = []
    for pos, a in enumerate(order):
        ra = rules[a]
        for b in order[pos + 1 :]:
            rb = rules[b]
            if rb.source_start >= ra.source_end:
                break
            pairs.append((min(a, b), max(a, b)))
    pairs.sort()
    return pairs


def _resolve_segments(rules: Sequence[MappingRule], overlapping: bool) -> list[_Segment]:
    if not overlapping:
        segs = [
            _Segment(r.source_start, r.source_end, r.offset, idx) for idx, r in enumerate(rules)
        ]
        segs.sort(key=lambda s: s.start)
        return segs

    # Cut the line at every rule boundary; each elementary piece is owned by
    # the first rule containing it.
    bounds = sorted({r.source_start for r in rules} | {r.source_end for r in rules})
    segs: list[_Segment] = []
    for lo, hi in zip(bounds, bounds[1:]):
        owner = next((idx for idx, r in enumerate(rules) if r.contains(lo)), None)
        if owner is None:
            continue
        prev = segs[-1] if segs else None
        if prev is not None and prev.rule_index == owner and prev.end == lo:
            segs[-1] = _Segment(prev.start, hi, prev.offset, owner)
        else:
            segs.append(_Segment(lo, hi, rules[owner].offset, owner))
    return segs
