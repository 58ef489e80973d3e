"""CSV and console output for resolved NDC records."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from .records import CSV_COLUMNS, NDCRecord

TABLE_COLUMNS: Dict[str, str] = {
    "name": "Name",
    "concept_id": "RxCUI",
    "ndc": "NDC",
    "ndc9": "NDC9",
    "ndc10": "NDC10",
    "description": "Desc",
    "manufacturer": "Mfg",
    "route": "Route",
    "strength": "Strength",
}


def resolve_output_path(value: str) -> Path:
    path = Path(value).expanduser().resolve()
    if not path.suffix:
        path = path.with_suffix(".csv")
    return path


def records_frame(records: Sequence[NDCRecord]) -> pd.DataFrame:
    rows: List[Dict[str, str]] = [record.to_dict() for record in records]
    return pd.DataFrame(rows, columns=list(CSV_COLUMNS.values()), dtype=str)


def write_csv(records: Sequence[NDCRecord], path: Path) -> Path:
    """Write every record to ``path``, replacing any existing file."""

    path.parent.mkdir(parents=True, exist_ok=True)
    records_frame(records).to_csv(path, index=False)
    return path


def format_table(records: Sequence[NDCRecord]) -> str:
    frame = records_frame(records).rename(columns={CSV_COLUMNS[key]: label for key, label in TABLE_COLUMNS.items()})
    table = frame[list(TABLE_COLUMNS.values())].to_string(index=False)
    return f"{table}\n\n{len(records)} NDC records found"


__all__ = ["format_table", "records_frame", "resolve_output_path", "write_csv"]
