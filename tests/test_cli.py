import json
import tempfile
from pathlib import Path

import pytest

from basecolumns.cli import _create_parser, main


BASE_FILE = "\n".join([
    "views:",
    "  - type: table",
    "    name: Books",
    "    order:",
    "      - file.name",
    "      - note.author",
    "    rowHeight: 40",
    "",
])


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "lib.base").write_text(BASE_FILE, encoding="utf-8")
        (root / "config.json").write_text(json.dumps({"window_width": 600}), encoding="utf-8")
        yield root


def run(workdir, *args):
    return main(["--config", str(workdir / "config.json"), "--no-backup", *args])


def test_views_and_show(workdir, capsys):
    assert run(workdir, "views", str(workdir / "lib.base")) == 0
    assert capsys.readouterr().out.strip() == "Books"

    assert run(workdir, "show", str(workdir / "lib.base")) == 0
    out = capsys.readouterr().out
    assert "Books" in out
    assert "no column sizes set" in out


def test_set_writes_file(workdir, capsys):
    path = workdir / "lib.base"
    assert run(workdir, "set", str(path), "file.name=240") == 0
    content = path.read_text(encoding="utf-8").split("\n")
    assert content[6:9] == ["    columnSize:", "      file.name: 240", "    rowHeight: 40"]
    assert not (workdir / "lib.base.bak").exists()


def test_set_rejects_out_of_bounds_width(workdir, capsys):
    path = workdir / "lib.base"
    assert run(workdir, "set", str(path), "file.name=20") == 1
    assert "outside" in capsys.readouterr().err
    assert path.read_text(encoding="utf-8") == BASE_FILE

    assert run(workdir, "set", str(path), "file.name=20", "--force") == 0
    assert "file.name: 20" in path.read_text(encoding="utf-8")


def test_distribute_uses_configured_window_width(workdir):
    path = workdir / "lib.base"
    assert run(workdir, "distribute", str(path)) == 0
    text = path.read_text(encoding="utf-8")
    assert "      file.name: 300" in text
    assert "      note.author: 300" in text


def test_dry_run_prints_diff_without_writing(workdir, capsys):
    path = workdir / "lib.base"
    assert run(workdir, "--dry-run", "uniform", str(path), "--width", "120") == 0
    out = capsys.readouterr().out
    assert "+    columnSize:" in out
    assert "+      note.author: 120" in out
    assert path.read_text(encoding="utf-8") == BASE_FILE


def test_init_seeds_default_width(workdir):
    path = workdir / "lib.base"
    assert run(workdir, "init", str(path)) == 0
    assert "      note.author: 150" in path.read_text(encoding="utf-8")


def test_unknown_view_warns(workdir, capsys):
    path = workdir / "lib.base"
    assert run(workdir, "uniform", str(path), "--view", "Nope", "--width", "120") == 0
    assert "not found" in capsys.readouterr().out
    assert path.read_text(encoding="utf-8") == BASE_FILE


def test_missing_file_reports_error(workdir, capsys):
    assert run(workdir, "show", str(workdir / "missing.base"), "--view", "Books") == 1
    assert "Could not read" in capsys.readouterr().err


def test_parser_rejects_bad_assignment():
    parser = _create_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["set", "lib.base", "file.name"])


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out
