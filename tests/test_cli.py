import json
from pathlib import Path

from blocktext.cli import main


def _read_json(p: Path):
    return json.loads(p.read_text(encoding="utf-8"))


def test_cli_writes_json(tmp_path: Path):
    src = tmp_path / "script.txt"
    src.write_text("when flag clicked\nmove (10) steps\n", encoding="utf-8")
    out = tmp_path / "out" / "tree.json"
    rc = main([str(src), "--out", str(out), "--validate"])
    assert rc == 0
    j = _read_json(out)
    assert [b["blockid"] for b in j[0]["blocks"]] == ["when @green-flag clicked", "move _ steps"]


def test_cli_prints_to_stdout(tmp_path: Path, capsys):
    src = tmp_path / "script.txt"
    src.write_text("gehe (10) er-Schritt", encoding="utf-8")
    assert main([str(src), "--lang", "de", "--indent", "0"]) == 0
    j = json.loads(capsys.readouterr().out)
    assert j[0]["blocks"][0]["language"] == "de"


def test_cli_missing_input(tmp_path: Path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 2
    assert "input not found" in capsys.readouterr().err


def test_cli_unknown_language(tmp_path: Path, capsys):
    src = tmp_path / "script.txt"
    src.write_text("move (10) steps", encoding="utf-8")
    assert main([str(src), "--lang", "xx"]) == 2
    assert "Unknown language: xx" in capsys.readouterr().err


def test_cli_lists_languages(capsys):
    assert main(["--list-languages"]) == 0
    codes = capsys.readouterr().out.split()
    assert "en" in codes and "de" in codes
