from __future__ import annotations

import json
import re
from pathlib import Path

from cna_import.cli import main as cli_main

"""Exit code contract: 0 all files imported, 2 partial failure, 1 fatal."""

PASTE = "Email\tFull Name\tPosition\tGrade\tA1\nann@x.org\tAnn\tClerk\tGrade 10\t6\n"


def test_exit_code_fatal_missing_config(temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config:" in out
    assert "SUMMARY" not in out


def test_exit_code_fatal_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "import.yml").write_text(
        "source_directory: ./data\nagency_type: Ministry\n", encoding="utf-8"
    )
    code = cli_main([])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_fatal_missing_source_directory(write_config: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data").rmdir()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR processing: Directory not found" in out


def test_exit_code_all_success(write_config: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data" / "paste.tsv").write_text(PASTE, encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1 success=1 failed=0 officers=1 unique=1 unkeyed=0 establishment=0" in out
    assert not (temp_workdir / "logs").exists()


def test_exit_code_partial_failure(write_config: Path, temp_workdir: Path, capsys):
    data_dir = temp_workdir / "data"
    (data_dir / "good.tsv").write_text(PASTE, encoding="utf-8")
    (data_dir / "broken.xlsx").write_bytes(b"not a workbook")
    (data_dir / "headers_only.tsv").write_text("Email\tGrade\n", encoding="utf-8")

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    match = re.search(r"SUMMARY files=(\d+) success=(\d+) failed=(\d+)", out)
    assert match is not None, out
    assert match.groups() == ("3", "1", "2")
    assert "ERROR file=broken.xlsx import failed" in out

    [log_file] = list((temp_workdir / "logs").glob("errors-*.log"))
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    by_file = {e["file"]: e for e in entries}
    assert by_file["headers_only.tsv"]["error_type"] == "INPUT_SHAPE_ERROR"
    assert by_file["broken.xlsx"]["error_type"] == "READ_ERROR"
    assert all(e["sheet"] == "<FILE_LEVEL>" and e["row"] == -1 for e in entries)
