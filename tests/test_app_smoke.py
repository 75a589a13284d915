from __future__ import annotations

from pathlib import Path

import pytest

textual = pytest.importorskip("textual")

EXAMPLE = Path(__file__).parent / "data" / "example.txt"


def test_app_constructs() -> None:
    # Import here to avoid E402 when textual is absent
    from almanac.app import AlmanacApp
    from almanac.core.parse import load_almanac

    app = AlmanacApp(str(EXAMPLE), load_almanac(EXAMPLE))
    # Do not run the app; just ensure construction doesn't crash
    assert app is not None
    assert app.title.endswith("example.txt")


def test_stage_labels() -> None:
    from almanac.core.stage import MappingRule, MappingStage
    from almanac.widgets.stage_tree import rule_label, stage_label

    rule = MappingRule(source_start=98, dest_start=50, length=2)
    assert rule_label(rule).plain == "[98, 100) -> 50  (-48)"
    st = MappingStage([rule], name="seed-to-soil")
    assert stage_label(st).plain == "seed-to-soil  1 rules"


def test_seed_from_text() -> None:
    from almanac.app import seed_from_text

    assert seed_from_text(" 79 ") == 79
    assert seed_from_text("7²") is None
    assert seed_from_text("-3") is None
    assert seed_from_text("") is None


def test_css_uses_palette() -> None:
    from almanac.app import AlmanacApp
    from almanac.ui.palette import PALETTE

    for colour in (PALETTE.accent_dim, PALETTE.panel_border, PALETTE.status_fg, PALETTE.status_bg):
        assert colour in AlmanacApp.DEFAULT_CSS
