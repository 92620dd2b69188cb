from __future__ import annotations

import json
from pathlib import Path

from cna_import.config.loader import default_header_mappings
from cna_import.models.config_models import ImportConfig
from cna_import.models.enums import AgencyType
from cna_import.services.orchestrator import process_all, scan_source_files


def _config(temp_workdir: Path) -> ImportConfig:
    return ImportConfig(
        source_directory=str(temp_workdir / "data"),
        output_directory=str(temp_workdir / "output"),
        agency_type=AgencyType.NATIONAL_DEPARTMENT,
        header_mappings=default_header_mappings(),
    )


def test_scan_source_files_sorted_and_skips_lock_files(temp_workdir: Path):
    data = temp_workdir / "data"
    for name in ("b.tsv", "a.xlsx", "~$a.xlsx", "notes.txt"):
        (data / name).write_bytes(b"")
    assert [p.name for p in scan_source_files(data, (".xlsx", ".tsv"))] == ["a.xlsx", "b.tsv"]


def test_tsv_with_byte_order_mark_keeps_first_rating_column(temp_workdir: Path):
    # saved as "UTF-8 with BOM"
    (temp_workdir / "data" / "export.tsv").write_bytes(
        "A1 Strategy\tEmail\tA2\n8\tann@x.org\t6\n".encode("utf-8-sig")
    )
    result = process_all(_config(temp_workdir))
    assert result.success_files == 1

    payload = json.loads((temp_workdir / "output" / "export.officers.json").read_text(encoding="utf-8"))
    assert payload["headers"] == ["A1 Strategy", "Email", "A2"]
    [ann] = payload["records"]
    assert ann["email"] == "ann@x.org"
    assert [r["question_code"] for r in ann["capability_ratings"]] == ["A1", "A2"]
