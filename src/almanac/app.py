from __future__ import annotations

import os

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Static, Tree

from almanac.core.config import Config
from almanac.core.parse import AlmanacError, ParsedAlmanac
from almanac.core.solve import build_pipeline, solve
from almanac.core.stage import MappingRule, MappingStage
from almanac.report import solution_lines
from almanac.ui.palette import PALETTE
from almanac.widgets.stage_tree import StageTree


def seed_from_text(raw: str) -> int | None:
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


class AlmanacApp(App):
    """Textual viewer for an almanac: stages, rules, seed walks and answers."""

    DEFAULT_CSS = f"""
    #stages {{ width: 1fr; border: round {PALETTE.accent_dim}; }}
    #stages:focus {{ border: round {PALETTE.accent}; }}
    #side {{ width: 1fr; }}
    #details {{ height: 1fr; border: round {PALETTE.panel_border}; padding: 0 1; }}
    #status {{ height: 1; color: {PALETTE.status_fg}; background: {PALETTE.status_bg}; }}
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("t", "focus_trace", "Trace Seed"),
        ("s", "focus_stages", "Stages"),
    ]

    def __init__(self, path: str, parsed: ParsedAlmanac, config: Config | None = None) -> None:
        super().__init__()
        self._path = path
        self._parsed = parsed
        self._config = config or Config()
        self._pipeline = None
        self.title = f"almanac — {os.path.basename(path)}"
        self.status = Static(id="status")
        self.stages = StageTree(id="stages")
        self.details = Static(id="details")
        self.trace_input = Input(placeholder="seed to trace", id="trace")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            yield self.stages
            with Vertical(id="side"):
                yield self.details
                yield self.trace_input
        yield self.status
        yield Footer()

    def on_mount(self) -> None:
        try:
            self._pipeline = build_pipeline(self._parsed, self._config)
            sol = solve(self._parsed, self._config)
        except AlmanacError as e:
            self.details.update(Text("\n".join(e.errors), style=PALETTE.error))
            self.status.update("errors")
            return
        self.stages.set_pipeline(self._pipeline)
        answers = " | ".join(solution_lines(sol, self._config.part))
        self.status.update(Text(f"{len(self._parsed.seeds)} seeds | {answers}"))

    def action_focus_trace(self) -> None:
        self.trace_input.focus()

    def action_focus_stages(self) -> None:
        self.stages.focus()

    def on_tree_node_highlighted(self, event: Tree.NodeHighlighted) -> None:
        data = event.node.data
        if isinstance(data, MappingStage):
            self.details.update(self._stage_details(data))
        elif isinstance(data, MappingRule):
            self.details.update(
                Text(
                    f"source [{data.source_start}, {data.source_end})\n"
                    f"dest   [{data.dest_start}, {data.dest_start + data.length})\n"
                    f"length {data.length}\noffset {data.offset:+d}"
                )
            )

    def _stage_details(self, stage: MappingStage) -> Text:
        text = Text(f"{stage.name}\n", style=f"bold {PALETTE.accent}")
        text.append(f"{len(stage)} rules\n")
        covered = sum(r.length for r in stage.rules)
        text.append(f"{covered} values remapped, identity elsewhere\n", style=PALETTE.identity)
        for a, b in stage.overlaps():
            text.append(f"rules {a + 1} and {b + 1} overlap (first wins)\n", style=PALETTE.error)
        return text

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self._pipeline is None:
            return
        seed = seed_from_text(event.value)
        if seed is None:
            self.details.update(Text(f"not a seed: {event.value.strip()!r}", style=PALETTE.error))
            return
        values = self._pipeline.trace(seed)
        text = Text()
        for name, value in zip(self._config.chain, values):
            text.append(f"{name:>12} ", style=PALETTE.identity)
            text.append(f"{value}\n", style=PALETTE.value)
        self.details.update(text)
