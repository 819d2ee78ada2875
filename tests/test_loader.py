import io
from pathlib import Path

import pandas as pd
import pytest

from exceptions.custom_errors import FileContentError, FileReadingError
from utils.loader import load_records
from validation.engine import validate


def test_load_csv_keeps_cells_as_text(tmp_path: Path) -> None:
    path = tmp_path / "workers.csv"
    path.write_text(
        'WorkerID,WorkerName,Skills,AvailableSlots,MaxLoadPerPhase,WorkerGroup,QualificationLevel\n'
        'W1,Ada,"python,sql","[1,2]",2,A,\n',
        encoding="utf-8",
    )

    [record] = load_records(path, "workers")

    assert record["AvailableSlots"] == "[1,2]"
    assert record["MaxLoadPerPhase"] == "2"
    assert record["QualificationLevel"] == ""


def test_load_xlsx_buffer(tmp_path: Path) -> None:
    buffer = io.BytesIO()
    pd.DataFrame(
        [{"TaskID": "T1", "TaskName": "Build", "PreferredPhases": "1-3", "Duration": 2}]
    ).to_excel(buffer, index=False)
    buffer.seek(0)

    [record] = load_records(buffer, "tasks", suffix=".xlsx")

    assert record == {"TaskID": "T1", "TaskName": "Build", "PreferredPhases": "1-3", "Duration": "2"}


def test_loaded_records_feed_validation(tmp_path: Path) -> None:
    path = tmp_path / "clients.csv"
    path.write_text("ClientID,ClientName,PriorityLevel\nC1,Acme,7\n", encoding="utf-8")

    report = validate(load_records(path, "clients"), [], [])

    types = {f.validation_type for f in report.errors}
    assert types == {"missing_column", "out_of_range"}


def test_unsupported_format(tmp_path: Path) -> None:
    path = tmp_path / "clients.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(FileReadingError):
        load_records(path, "clients")


def test_legacy_xls_is_not_supported(tmp_path: Path) -> None:
    path = tmp_path / "workers.xls"
    path.write_bytes(b"")
    with pytest.raises(FileReadingError):
        load_records(path, "workers")


def test_unreadable_file(tmp_path: Path) -> None:
    with pytest.raises(FileReadingError):
        load_records(tmp_path / "missing.csv", "clients")


def test_empty_header_row(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text("\n", encoding="utf-8")
    with pytest.raises((FileReadingError, FileContentError)):
        load_records(path, "tasks")


def test_unknown_kind() -> None:
    with pytest.raises(ValueError):
        load_records("whatever.csv", "projects")
