"""
Tests for deal loading, settings persistence and the command line.

Usage:
    pytest tests/test_deal_settings.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main as cli
from solitaire.deal import load_deal, parse_cards, read_deal
from solitaire.settings import (
    DEFAULT_SETTINGS,
    load_settings,
    run_config_from_settings,
    save_settings,
)
from solitaire.solver import Card, DealError, RunConfig
from deals import solvable_freecell_deal


def test_read_deal_skips_comments_and_separators():
    text = """
    # FreeCell deal 1
    Ac, 2c 3c   # first three
    10d,,Kh
    """
    assert [str(c) for c in read_deal(text)] == ["Ac", "2c", "3c", "Td", "Kh"]


def test_parse_cards_rejects_bad_token():
    assert parse_cards(["Qs", " ", "9h"]) == [Card(12, "s"), Card(9, "h")]
    with pytest.raises(DealError, match="Xy"):
        parse_cards(["Ac", "Xy"])


def test_load_deal(tmp_path):
    path = tmp_path / "deal.txt"
    path.write_text("As 2s\n3s\n", encoding="utf-8")
    assert [str(c) for c in load_deal(path)] == ["As", "2s", "3s"]

    with pytest.raises(DealError, match="Cannot read"):
        load_deal(tmp_path / "missing.txt")


def test_settings_defaults_and_round_trip(tmp_path):
    path = tmp_path / "config.json"
    assert load_settings(path) == DEFAULT_SETTINGS

    settings = dict(DEFAULT_SETTINGS, variant="spider", depth_bound=4)
    save_settings(settings, path)
    assert json.loads(path.read_text(encoding="utf-8"))["variant"] == "spider"
    assert load_settings(path) == settings


def test_settings_merge_missing_keys_and_bad_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"variant": "pyramid"}', encoding="utf-8")
    settings = load_settings(path)
    assert settings["variant"] == "pyramid"
    assert settings["depth_bound"] == DEFAULT_SETTINGS["depth_bound"]

    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_run_config_from_settings():
    base = RunConfig(prune_fraction=1.0, min_children=1)
    config = run_config_from_settings(DEFAULT_SETTINGS, base=base)
    assert config.prune_fraction == 1.0
    assert config.min_children == 1
    assert config.depth_bound == 6
    assert config.stop_at_first_solution is True

    config = run_config_from_settings(dict(DEFAULT_SETTINGS, prune_fraction=0.5))
    assert config.prune_fraction == 0.5


def test_run_config_validation():
    with pytest.raises(ValueError):
        RunConfig(prune_fraction=0)
    with pytest.raises(ValueError):
        RunConfig(depth_bound=0)
    with pytest.raises(ValueError):
        RunConfig(min_children=-1)


def write_deal(path, deal):
    path.write_text(" ".join(str(c) for c in deal) + "\n", encoding="utf-8")


def test_cli_solves_deal(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    write_deal(tmp_path / "deal.txt", solvable_freecell_deal())

    assert cli.main(["deal.txt", "--prune", "1.0", "--json"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["solutions"] == 1
    assert result["paths"][0][0] == "1$:Ac"
    assert result["strategy"] == "dfs"
    assert result["memory_mb"] > 0


def test_cli_reports_structural_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    deal = solvable_freecell_deal()
    deal[0] = deal[1]
    write_deal(tmp_path / "deal.txt", deal)

    assert cli.main(["deal.txt"]) == 2
    err = capsys.readouterr().err
    assert "Missing card: Ad" in err
    assert "Extra card: Kc" in err


def test_cli_rejects_short_deal(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_deal(tmp_path / "deal.txt", solvable_freecell_deal()[:40])
    assert cli.main(["deal.txt", "--variant", "freecell"]) == 2


def test_cli_saves_settings(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    write_deal(tmp_path / "deal.txt", solvable_freecell_deal())

    assert cli.main(["deal.txt", "--prune", "1.0", "--save-settings"]) == 0
    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert saved["prune_fraction"] == 1.0
    assert "Solution 1 (52 moves)" in capsys.readouterr().out
