from __future__ import annotations

from pathlib import Path

import pytest

import almanac.cli as cli
from almanac.cli import main

EXAMPLE = Path(__file__).parent / "data" / "example.txt"


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "get_user_config_path", lambda: tmp_path / "absent.yaml")


def test_cli_reports_both_parts(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE)]) == 0
    out = capsys.readouterr().out
    assert "part 1: 35" in out
    assert "part 2: 46" in out


def test_cli_single_part(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE), "--part", "2", "--workers", "2"]) == 0
    out = capsys.readouterr().out
    assert "part 1" not in out
    assert "part 2: 46" in out


def test_cli_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "none.txt")]) == 2
    assert "file not found" in capsys.readouterr().err


def test_cli_parse_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "bad.txt"
    p.write_text(EXAMPLE.read_text(encoding="utf-8").replace("50 98 2", "50 98"), encoding="utf-8")
    assert main([str(p)]) == 2
    assert "almanac: line 4: expected 3 numbers" in capsys.readouterr().err


def test_cli_empty_seeds(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "empty.txt"
    p.write_text(
        EXAMPLE.read_text(encoding="utf-8").replace("seeds: 79 14 55 13", "seeds:"),
        encoding="utf-8",
    )
    assert main([str(p)]) == 0
    out = capsys.readouterr().out
    assert "part 1: no result" in out
    assert "part 2: no result" in out


def test_cli_odd_seeds_for_ranges(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "odd.txt"
    p.write_text(
        EXAMPLE.read_text(encoding="utf-8").replace("seeds: 79 14 55 13", "seeds: 79 14 55"),
        encoding="utf-8",
    )
    assert main([str(p), "--part", "2"]) == 2
    assert "pairs" in capsys.readouterr().err


def test_cli_odd_seeds_still_reports_part_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    p = tmp_path / "odd.txt"
    p.write_text(
        EXAMPLE.read_text(encoding="utf-8").replace("seeds: 79 14 55 13", "seeds: 79 14 55"),
        encoding="utf-8",
    )
    assert main([str(p)]) == 2
    captured = capsys.readouterr()
    assert "part 1: 43" in captured.out
    assert "part 2: range seeds need (start, length) pairs" in captured.out
    assert "almanac: range seeds need (start, length) pairs, got 3 numbers" in captured.err


def test_cli_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("part: 1\n", encoding="utf-8")
    assert main([str(EXAMPLE), "--config", str(cfg)]) == 0
    out = capsys.readouterr().out
    assert "part 1: 35" in out
    assert "part 2" not in out


def test_cli_bad_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("workers: 0\n", encoding="utf-8")
    assert main([str(EXAMPLE), "--config", str(cfg)]) == 2
    assert "workers must be" in capsys.readouterr().err


def test_cli_user_config_is_read(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    user = tmp_path / "user.yaml"
    user.write_text("part: 2\n", encoding="utf-8")
    monkeypatch.setattr(cli, "get_user_config_path", lambda: user)
    assert main([str(EXAMPLE)]) == 0
    out = capsys.readouterr().out
    assert "part 1" not in out
    assert "part 2: 46" in out


def test_cli_trace(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE), "--trace", "79", "--part", "1"]) == 0
    out = capsys.readouterr().out
    assert "82" in out
    assert "74" in out
    assert "part 1: 35" in out


def test_cli_rejects_zero_workers(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE), "--workers", "0"]) == 2
    assert "--workers" in capsys.readouterr().err


def test_cli_unicode_digit_is_parse_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    p = tmp_path / "sup.txt"
    p.write_text(
        EXAMPLE.read_text(encoding="utf-8").replace("seeds: 79", "seeds: 7²"), encoding="utf-8"
    )
    assert main([str(p)]) == 2
    assert "almanac: line 1: invalid seed '7²'" in capsys.readouterr().err
