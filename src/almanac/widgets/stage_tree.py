from __future__ import annotations

from contextlib import suppress

from rich.text import Text
from textual.widgets import Tree

from almanac.core.pipeline import Pipeline
from almanac.core.stage import MappingRule, MappingStage
from almanac.ui.palette import PALETTE


def rule_label(rule: MappingRule) -> Text:
    text = Text()
    text.append(f"[{rule.source_start}, {rule.source_end})", style=PALETTE.rule_range)
    text.append(" -> ")
    text.append(str(rule.dest_start), style=PALETTE.value)
    off = rule.offset
    style = PALETTE.rule_offset_up if off >= 0 else PALETTE.rule_offset_down
    text.append(f"  ({off:+d})", style=style)
    return text


def stage_label(stage: MappingStage) -> Text:
    text = Text(stage.name or "<unnamed>", style=f"bold {PALETTE.stage_name}")
    text.append(f"  {len(stage)} rules", style=PALETTE.identity)
    if stage.overlaps():
        text.append("  overlaps", style=PALETTE.error)
    return text


class StageTree(Tree[MappingStage | MappingRule | None]):
    """Stages of the pipeline, each expandable to its rules in source order.

    Node data is the stage for headers and the rule for leaves.
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("Stages", id=id)

    def set_pipeline(self, pipeline: Pipeline) -> None:
        for child in list(self.root.children):
            child.remove()
        for st in pipeline:
            node = self.root.add(stage_label(st), st)
            for rule in st.sorted_rules:
                node.add_leaf(rule_label(rule), rule)
        with suppress(Exception):
            self.root.expand()
        self.refresh(layout=True)
