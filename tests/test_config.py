from __future__ import annotations

from pathlib import Path

import pytest

from almanac.core.config import (
    Config,
    ConfigError,
    get_profile,
    get_user_config_path,
    load_config,
    load_config_file,
)
from almanac.core.pipeline import CATEGORY_CHAIN


def test_defaults_from_empty_yaml() -> None:
    cfg = load_config("")
    assert cfg == Config()
    assert cfg.workers == 1
    assert cfg.part == "both"
    assert cfg.chain == CATEGORY_CHAIN
    assert cfg.strict_overlaps is False
    assert cfg.compact is False


def test_full_config() -> None:
    cfg = load_config(
        """
workers: 4
part: 2
chain: [a, b, c]
strict_overlaps: true
compact: true
"""
    )
    assert cfg.workers == 4
    assert cfg.part == "2"
    assert cfg.chain == ("a", "b", "c")
    assert cfg.strict_overlaps is True
    assert cfg.compact is True


def test_invalid_values_collected() -> None:
    with pytest.raises(ConfigError) as ei:
        load_config("workers: 0\npart: 3\nchain: [seed]\ncompact: maybe\ncolour: red\n")
    errs = ei.value.errors
    assert "workers must be an integer >= 1" in errs
    assert "part must be 1, 2 or both" in errs
    assert "chain must be a list of at least two category names" in errs
    assert "compact must be true or false" in errs
    assert "unknown setting: colour" in errs


def test_duplicate_chain_categories() -> None:
    with pytest.raises(ConfigError) as ei:
        load_config("chain: [a, b, a]\n")
    assert ei.value.errors == ["chain categories must be unique"]


def test_non_mapping_and_bad_yaml() -> None:
    with pytest.raises(ConfigError):
        load_config("- 1\n- 2\n")
    with pytest.raises(ConfigError) as ei:
        load_config("workers: [1\n")
    assert "YAML parse error" in ei.value.errors[0]


def test_load_config_file(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("workers: 2\n", encoding="utf-8")
    assert load_config_file(p).workers == 2
    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / "missing.yaml")


def test_with_overrides_ignores_none() -> None:
    cfg = Config(workers=3).with_overrides(workers=None, part="1")
    assert cfg.workers == 3
    assert cfg.part == "1"


def test_profiles() -> None:
    assert get_profile("points").seed_mode == "points"
    assert get_profile("ranges").seed_mode == "ranges"
    tuned = get_profile("ranges", Config(workers=8, compact=True))
    assert tuned.workers == 8
    assert tuned.compact is True
    with pytest.raises(KeyError):
        get_profile("brute")


def test_user_config_path_under_home() -> None:
    p = get_user_config_path()
    assert p.name == "config.yaml"
    assert p.parent.name == "almanac"
