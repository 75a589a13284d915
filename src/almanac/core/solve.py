"""Seed interpretation and lowest-location search.

Part one treats the seed list as individual seeds. Part two reads it as
``(start, length)`` pairs and pushes whole intervals through the pipeline.
Every stage piece is either the identity or an increasing shift, so the
smallest value of any output interval is its start.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from almanac.core.config import Config, SolveProfile, get_profile
from almanac.core.intervals import Interval
from almanac.core.parse import AlmanacError, ParsedAlmanac, parse_almanac
from almanac.core.pipeline import Pipeline

logger = logging.getLogger(__name__)


class SeedSpecError(ValueError):
    """Raised when the seed list cannot be read as ``(start, length)`` pairs."""


def seeds_as_points(raw: Sequence[int]) -> list[int]:
    return list(raw)


def seeds_as_ranges(raw: Sequence[int]) -> list[Interval]:
    if len(raw) % 2:
        raise SeedSpecError(f"range seeds need (start, length) pairs, got {len(raw)} numbers")
    return [Interval(s, ln) for s, ln in zip(raw[::2], raw[1::2]) if ln > 0]


def lowest_location(pipeline: Pipeline, seeds: Iterable[int], *, workers: int = 1) -> int | None:
    """Minimum mapped value over discrete seeds, ``None`` if there are none."""
    seeds = list(seeds)
    if workers > 1 and len(seeds) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return min(pool.map(pipeline.map_value, seeds), default=None)
    return min((pipeline.map_value(s) for s in seeds), default=None)


def location_intervals(
    pipeline: Pipeline,
    ranges: Iterable[Interval],
    *,
    workers: int = 1,
    compact: bool = False,
) -> list[Interval]:
    ranges = list(ranges)
    if workers > 1 and len(ranges) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(pipeline.map_intervals, [iv], compact=compact) for iv in ranges]
            out: list[Interval] = []
            for fut in futures:
                out.extend(fut.result())
            return out
    return pipeline.map_intervals(ranges, compact=compact)


def lowest_location_for_ranges(
    pipeline: Pipeline,
    ranges: Iterable[Interval],
    *,
    workers: int = 1,
    compact: bool = False,
) -> int | None:
    """Minimum mapped value over every seed in ``ranges``, ``None`` if empty."""
    pieces = location_intervals(pipeline, ranges, workers=workers, compact=compact)
    return min((iv.start for iv in pieces), default=None)


def run_profile(pipeline: Pipeline, raw_seeds: Sequence[int], profile: SolveProfile) -> int | None:
    t0 = time.perf_counter()
    if profile.seed_mode == "points":
        result = lowest_location(pipeline, seeds_as_points(raw_seeds), workers=profile.workers)
    elif profile.seed_mode == "ranges":
        result = lowest_location_for_ranges(
            pipeline,
            seeds_as_ranges(raw_seeds),
            workers=profile.workers,
            compact=profile.compact,
        )
    else:
        raise ValueError(f"unknown seed mode: {profile.seed_mode}")
    logger.debug("%s: %s in %.3fs", profile.name, result, time.perf_counter() - t0)
    return result


def build_pipeline(parsed: ParsedAlmanac, config: Config | None = None) -> Pipeline:
    pipeline = parsed.build_pipeline()
    if config is not None and config.strict_overlaps:
        errors = []
        for table, st in zip(parsed.tables, pipeline):
            for a, b in st.overlaps():
                errors.append(f"{st.name}: rules {a + 1} and {b + 1} overlap (line {table.line})")
        if errors:
            raise AlmanacError(errors)
    return pipeline


@dataclass
class Solution:
    part_one: int | None = None
    part_two: int | None = None
    part_two_error: str | None = None  # set when the seeds cannot be read as ranges
    seed_count: int = 0
    range_count: int = 0


def solve(parsed: ParsedAlmanac, config: Config | None = None) -> Solution:
    config = config or Config()
    pipeline = build_pipeline(parsed, config)
    sol = Solution(seed_count=len(parsed.seeds))
    if config.part in ("1", "both"):
        sol.part_one = run_profile(pipeline, parsed.seeds, get_profile("points", config))
    if config.part in ("2", "both"):
        try:
            sol.range_count = len(seeds_as_ranges(parsed.seeds))
        except SeedSpecError as e:
            sol.part_two_error = str(e)
        else:
            sol.part_two = run_profile(pipeline, parsed.seeds, get_profile("ranges", config))
    return sol


def part_one(text: str) -> int | None:
    parsed = parse_almanac(text)
    return run_profile(parsed.build_pipeline(), parsed.seeds, get_profile("points"))


def part_two(text: str) -> int | None:
    parsed = parse_almanac(text)
    return run_profile(parsed.build_pipeline(), parsed.seeds, get_profile("ranges"))
