from __future__ import annotations

from pathlib import Path

from datashelf.cli.main import main


def test_init_then_ls(tmp_path: Path, capsys) -> None:
    data_dir = tmp_path / "data"

    assert main(["--data-dir", str(data_dir), "init"]) == 0
    assert (data_dir / "index.html").is_file()

    (data_dir / "notes.md").write_text("# hi", encoding="utf-8")
    assert main(["--data-dir", str(data_dir), "ls"]) == 0
    out = capsys.readouterr().out
    assert "notes.md" in out
    assert "text/markdown" in out


def test_ls_without_init_fails(tmp_path: Path) -> None:
    assert main(["--data-dir", str(tmp_path / "missing"), "ls"]) == 1


def test_bad_port_env_fails(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert main(["--data-dir", str(tmp_path / "data"), "init"]) == 1
