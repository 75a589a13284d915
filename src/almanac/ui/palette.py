from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    accent: str
    accent_dim: str
    panel_border: str
    stage_name: str
    rule_range: str
    rule_offset_up: str
    rule_offset_down: str
    identity: str
    value: str
    error: str
    status_fg: str
    status_bg: str


DEFAULT = Palette(
    accent="#5ea1ff",
    accent_dim="#4c75c6",
    panel_border="#3b4252",
    stage_name="#d8dee9",
    rule_range="#9cdcfe",
    rule_offset_up="#7ee787",
    rule_offset_down="#ffa657",
    identity="#6b7280",
    value="#ffffff",
    error="#ff5555",
    status_fg="#d8dee9",
    status_bg="#1f2430",
)

PALETTE = DEFAULT
