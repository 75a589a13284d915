"""Solve settings: YAML configuration file and named solve profiles."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from almanac.core.pipeline import CATEGORY_CHAIN

PARTS = ("1", "2", "both")


class ConfigError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class Config:
    """Settings shared by the CLI and the viewer.

    Attributes:
        workers: Thread count for mapping independent seeds/ranges (1 = serial)
        part: Which answers to report ("1", "2" or "both")
        chain: Category names, first to last; one stage per adjacent pair
        strict_overlaps: Reject stages whose rules overlap instead of first-match
        compact: Merge interval pieces after each stage in range mode
    """

    workers: int = 1
    part: str = "both"
    chain: tuple[str, ...] = CATEGORY_CHAIN
    strict_overlaps: bool = False
    compact: bool = False

    def with_overrides(self, **changes: Any) -> Config:
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass(frozen=True)
class SolveProfile:
    """How one part interprets the seed list and runs the pipeline."""

    name: str
    seed_mode: str  # "points" | "ranges"
    workers: int = 1
    compact: bool = False


POINTS_PROFILE = SolveProfile(name="points", seed_mode="points")
RANGES_PROFILE = SolveProfile(name="ranges", seed_mode="ranges")

PROFILES = {
    "points": POINTS_PROFILE,
    "ranges": RANGES_PROFILE,
}


def get_profile(name: str, config: Config | None = None) -> SolveProfile:
    """Get a solve profile by name, with worker/compact settings from ``config``.

    Raises:
        KeyError: If profile name not found
    """
    profile = PROFILES[name]
    if config is None:
        return profile
    return replace(profile, workers=config.workers, compact=config.compact)


def get_user_config_path() -> Path:
    """Platform-appropriate location of the user config file."""
    if os.name == "nt":
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
        return Path(base) / "almanac" / "config.yaml"
    return Path.home() / ".config" / "almanac" / "config.yaml"


def load_config(text: str) -> Config:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError([f"YAML parse error: {e}"]) from None

    if not isinstance(data, dict):
        raise ConfigError(["Top-level YAML must be a mapping"])

    errors: list[str] = []
    known = {"workers", "part", "chain", "strict_overlaps", "compact"}
    for key in data:
        if key not in known:
            errors.append(f"unknown setting: {key}")

    workers = data.get("workers", 1)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        errors.append("workers must be an integer >= 1")

    part = str(data.get("part", "both"))
    if part not in PARTS:
        errors.append("part must be 1, 2 or both")

    raw_chain = data.get("chain", list(CATEGORY_CHAIN))
    chain: tuple[str, ...] = CATEGORY_CHAIN
    if (
        not isinstance(raw_chain, list)
        or len(raw_chain) < 2
        or not all(isinstance(c, str) and c.isalpha() for c in raw_chain)
    ):
        errors.append("chain must be a list of at least two category names")
    elif len(set(raw_chain)) != len(raw_chain):
        errors.append("chain categories must be unique")
    else:
        chain = tuple(raw_chain)

    flags: dict[str, bool] = {}
    for key in ("strict_overlaps", "compact"):
        value = data.get(key, False)
        if not isinstance(value, bool):
            errors.append(f"{key} must be true or false")
        flags[key] = bool(value)

    if errors:
        raise ConfigError(errors)

    return Config(
        workers=workers,
        part=part,
        chain=chain,
        strict_overlaps=flags["strict_overlaps"],
        compact=flags["compact"],
    )


def load_config_file(path: str | Path) -> Config:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {p}") from None
    return load_config(text)
