"""Almanac text parser.

Reads the ``seeds:`` line and the ``<from>-to-<to> map:`` blocks and hands the
raw numbers to the pipeline builder. Problems are collected with line numbers
and raised together.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from almanac.core.pipeline import CATEGORY_CHAIN, Pipeline, stage_names

U64_MAX = 2**64 - 1

_HEADER_RE = re.compile(r"^([A-Za-z]+)-to-([A-Za-z]+) map:$")


class AlmanacError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class StageTable:
    """One map block as written: ``(dest_start, source_start, length)`` triples."""

    source: str
    target: str
    triples: list[tuple[int, int, int]] = field(default_factory=list)
    line: int = 0  # 1-based line of the header

    @property
    def name(self) -> str:
        return f"{self.source}-to-{self.target}"


@dataclass
class ParsedAlmanac:
    seeds: list[int]
    tables: list[StageTable]
    chain: tuple[str, ...] = CATEGORY_CHAIN

    def build_pipeline(self) -> Pipeline:
        return Pipeline.from_tables([t.triples for t in self.tables], chain=self.chain)


def _parse_u64(token: str) -> int | None:
    if not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    if value > U64_MAX:
        return None
    return value


def parse_almanac(text: str, chain: Sequence[str] = CATEGORY_CHAIN) -> ParsedAlmanac:
    errors: list[str] = []
    seeds: list[int] | None = None
    tables: list[StageTable] = []
    current: StageTable | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            current = None
            continue

        if seeds is None:
            if not line.startswith("seeds:"):
                errors.append(f"line {lineno}: expected 'seeds:' line, got {line!r}")
                # Nothing else can be interpreted without the seeds line.
                raise AlmanacError(errors)
            seeds = []
            for tok in line[len("seeds:") :].split():
                v = _parse_u64(tok)
                if v is None:
                    errors.append(f"line {lineno}: invalid seed {tok!r}")
                else:
                    seeds.append(v)
            continue

        m = _HEADER_RE.match(line)
        if m:
            current = StageTable(source=m.group(1), target=m.group(2), line=lineno)
            tables.append(current)
            continue
        if line.endswith("map:"):
            errors.append(f"line {lineno}: malformed map header {line!r}")
            current = None
            continue

        if current is None:
            errors.append(f"line {lineno}: rule line outside a map block: {line!r}")
            continue

        tokens = line.split()
        if len(tokens) != 3:
            errors.append(f"line {lineno}: expected 3 numbers, got {len(tokens)}")
            continue
        values = [_parse_u64(tok) for tok in tokens]
        if any(v is None for v in values):
            bad = next(tok for tok, v in zip(tokens, values) if v is None)
            errors.append(f"line {lineno}: invalid number {bad!r}")
            continue
        dest_start, source_start, length = values  # type: ignore[misc]
        if source_start + length - 1 > U64_MAX or dest_start + length - 1 > U64_MAX:
            errors.append(f"line {lineno}: range exceeds 64-bit bounds")
            continue
        current.triples.append((dest_start, source_start, length))

    if seeds is None:
        errors.append("missing 'seeds:' line")
        raise AlmanacError(errors)

    expected = stage_names(chain)
    seen = [t.name for t in tables]
    for pos, name in enumerate(expected):
        if pos >= len(tables):
            errors.append(f"missing map block {name!r}")
        elif tables[pos].name != name:
            errors.append(
                f"line {tables[pos].line}: expected {name!r} map, got {tables[pos].name!r}"
            )
    for extra in tables[len(expected) :]:
        what = "duplicate" if extra.name in seen[: len(expected)] else "unexpected"
        errors.append(f"line {extra.line}: {what} map block {extra.name!r}")

    if errors:
        raise AlmanacError(errors)

    return ParsedAlmanac(seeds=seeds, tables=tables, chain=tuple(chain))


def load_almanac(path: str | Path, chain: Sequence[str] = CATEGORY_CHAIN) -> ParsedAlmanac:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {p}") from None
    return parse_almanac(text, chain=chain)
