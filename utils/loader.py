import pandas as pd
from typing import Any, Dict, List, Optional, Union, IO
from pathlib import Path
from config.paths import DATA_DIR
from exceptions.custom_errors import FileContentError, FileReadingError
from utils.constants import ENTITY_KINDS

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


def read_table(path_or_buffer: Union[str, Path, IO], suffix: str) -> pd.DataFrame:
    """
    Read a CSV or Excel sheet with every cell kept as text, so list and JSON
    columns reach the parsers untouched and blanks stay blank.
    """
    try:
        if suffix == ".csv":
            return pd.read_csv(path_or_buffer, dtype=str, keep_default_na=False)
        return pd.read_excel(path_or_buffer, dtype=str, keep_default_na=False)
    except Exception as e:
        raise FileReadingError(f"Error reading {suffix} file: {e}")


def load_records(
    path_or_buffer: Union[str, Path, IO, None] = None,
    kind: str = "clients",
    suffix: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Load one entity sheet as row-ordered, string-keyed records.

    Parameters:
        path_or_buffer: Path to a CSV/XLSX file or a file-like object. Defaults to
                        'data/<kind>.csv'.
        kind: One of "clients", "workers" or "tasks".
        suffix: File type for buffers without a name (".csv" or ".xlsx").

    Returns:
        A list of dicts, one per row, keyed by the stripped column headers. Column
        presence is not checked here; that is the validation engine's job.
    """
    if kind not in ENTITY_KINDS:
        raise ValueError(f"Unknown entity kind: {kind}")
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / f"{kind}.csv"

    if suffix is None:
        name = getattr(path_or_buffer, "name", path_or_buffer)
        suffix = Path(str(name)).suffix
    suffix = suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileReadingError(f"Unsupported file format '{suffix}'. Please upload CSV or XLSX files.")

    df = read_table(path_or_buffer, suffix)
    if df.columns.empty:
        raise FileContentError(f"No columns found in {kind} file.")

    df.columns = [str(c).strip() for c in df.columns]
    if df.columns.duplicated().any():
        dupes = sorted(set(df.columns[df.columns.duplicated()]))
        raise FileContentError(f"Duplicate column headers in {kind} file: {dupes}")

    return df.to_dict(orient="records")
