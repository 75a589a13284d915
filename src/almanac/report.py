"""Console reporting for solve results and seed traces."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from almanac.core.pipeline import Pipeline
from almanac.core.solve import Solution
from almanac.ui.palette import PALETTE

NO_RESULT = "no result"


def format_answer(value: int | None) -> str:
    return NO_RESULT if value is None else str(value)


def _answers(sol: Solution, part: str) -> list[tuple[str, str, str]]:
    """(label, answer, style) per requested part."""
    rows: list[tuple[str, str, str]] = []
    for name, value, error in (
        ("1", sol.part_one, None),
        ("2", sol.part_two, sol.part_two_error),
    ):
        if part not in (name, "both"):
            continue
        if error is not None:
            rows.append((f"part {name}", error, PALETTE.error))
        else:
            style = PALETTE.identity if value is None else f"bold {PALETTE.value}"
            rows.append((f"part {name}", format_answer(value), style))
    return rows


def solution_lines(sol: Solution, part: str = "both") -> list[str]:
    return [f"{label}: {answer}" for label, answer, _ in _answers(sol, part)]


def print_solution(console: Console, sol: Solution, part: str = "both") -> None:
    for label, answer, style in _answers(sol, part):
        text = Text(f"{label}: ")
        text.append(answer, style=style)
        console.print(text)


def trace_table(pipeline: Pipeline, seeds: Sequence[int], chain: Sequence[str]) -> Table:
    """One row per seed, one column per category in the chain."""
    table = Table(title="Category walk", header_style=f"bold {PALETTE.accent}")
    for name in chain:
        table.add_column(name, justify="right")
    for seed in seeds:
        values = pipeline.trace(seed)
        cells = [Text(str(values[0]))]
        for prev, cur in zip(values, values[1:]):
            style = PALETTE.identity if prev == cur else PALETTE.value
            cells.append(Text(str(cur), style=style))
        table.add_row(*cells)
    return table
