# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from cna_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "establishment").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
establishment_directory: ./establishment
output_directory: ./output
agency_type: National Department
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def survey_grid() -> list[list[object]]:
    return [
        ["Email Address", "Full Name", "Job Title", "Division", "Grade", "SPA Rating",
         "Highest Qualification", "A1 - Strategic Alignment", "A2", "B10 Records"],
        ["jane@example.com", "Jane Doe", "Policy Officer", "Corporate", "Grade 13", 4,
         "Bachelor of Arts", 8, 7, 9],
        ["tom@example.com", "Tom Kila", "Director", "Policy", "Grade 18", 2,
         "Diploma", 9, 9, ""],
    ]


@pytest.fixture()
def make_workbook():
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path) as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make
