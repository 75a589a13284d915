from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from almanac.core.intervals import Interval, drop_empty, merge_intervals
from almanac.core.stage import MappingStage

logger = logging.getLogger(__name__)

CATEGORY_CHAIN: tuple[str, ...] = (
    "seed",
    "soil",
    "fertilizer",
    "water",
    "light",
    "temperature",
    "humidity",
    "location",
)


def stage_names(chain: Sequence[str] = CATEGORY_CHAIN) -> list[str]:
    """``["seed-to-soil", "soil-to-fertilizer", ...]`` for a category chain."""
    return [f"{a}-to-{b}" for a, b in zip(chain, chain[1:])]


class Pipeline:
    """Fixed, ordered composition of mapping stages (seed to location by default)."""

    def __init__(self, stages: Iterable[MappingStage]) -> None:
        self._stages = tuple(stages)
        if not self._stages:
            raise ValueError("pipeline needs at least one stage")

    @classmethod
    def from_tables(
        cls,
        tables: Sequence[Iterable[Sequence[int]]],
        chain: Sequence[str] = CATEGORY_CHAIN,
    ) -> Pipeline:
        """Build from ``(dest_start, source_start, length)`` tables in chain order."""
        names = stage_names(chain)
        if len(tables) != len(names):
            raise ValueError(f"expected {len(names)} stage tables, got {len(tables)}")
        return cls(MappingStage.from_triples(t, name=n) for t, n in zip(tables, names))

    @property
    def stages(self) -> tuple[MappingStage, ...]:
        return self._stages

    def __len__(self) -> int:
        return len(self._stages)

    def __iter__(self) -> Iterator[MappingStage]:
        return iter(self._stages)

    def stage(self, name: str) -> MappingStage:
        for st in self._stages:
            if st.name == name:
                return st
        raise KeyError(name)

    def map_value(self, seed: int) -> int:
        value = seed
        for st in self._stages:
            value = st.lookup(value)
        return value

    def trace(self, seed: int) -> list[int]:
        """Value after every stage; first entry is the seed, last the final category."""
        values = [seed]
        for st in self._stages:
            values.append(st.lookup(values[-1]))
        return values

    def map_intervals(self, seeds: Iterable[Interval], *, compact: bool = False) -> list[Interval]:
        """Push intervals through every stage in order.

        Total length is preserved unless ``compact`` is set, in which case the
        pieces are merged after each stage. Merging keeps the covered values
        (and so the minimum) but collapses pieces that landed on top of each other.
        """
        current = drop_empty(seeds)
        for st in self._stages:
            current = st.map_intervals(current)
            if compact:
                current = merge_intervals(current)
            logger.debug("after %s: %d pieces", st.name or "<unnamed>", len(current))
        return current
