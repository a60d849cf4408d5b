"""Tests for the vocab-import CLI."""
from __future__ import annotations

import json

import pytest

from app.modules.vocab.cli import main


def test_import_file(tmp_path, capsys):
    path = tmp_path / "words.txt"
    path.write_text("sol: sun: hace sol\nluna: moon\n", encoding="utf-8")
    assert main(["import", str(path), "--json"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert [(r["term"], r["definition"], r["example"]) for r in records] == [
        ("sol", "sun", "hace sol"),
        ("luna", "moon", ""),
    ]


def test_import_inline_text(capsys):
    assert main(["import", "--text", "agua: water", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["term"] == "agua"


def test_import_empty_exits_nonzero(capsys):
    assert main(["import", "--text", "nothing useful"]) == 1
    assert "No valid vocabulary entries found" in capsys.readouterr().out


def test_requires_input():
    with pytest.raises(SystemExit):
        main(["import"])


def test_import_prints_lines_without_json_flag(capsys):
    assert main(["import", "--text", "sol :  sun : hace sol\n\nluna:moon"]) == 0
    assert capsys.readouterr().out.splitlines() == ["sol:sun:hace sol", "luna:moon"]
