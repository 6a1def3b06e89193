#!/usr/bin/env python3
"""
Write sheet tables as pretty-printed JSON.

DataFrames become arrays of row objects. Unset values are left out of each
object rather than written as null, dates are written as YYYY-MM-DD, and
list/dict cells are cleaned the same way recursively.
"""

import datetime
import json
from pathlib import Path
from typing import Any, List, Union

import numpy as np
import pandas as pd

JSON_INDENT = 2

TABLE_FILE = 'software-table.json'
BY_NAME_FILE = 'software.json'
BY_CATEGORY_FILE = 'categories.json'
TIDY_CSV_FILE = 'single-cell-software_tidy.csv'

_MISSING = object()


def _clean(value: Any) -> Any:
    """Convert one cell to a JSON-ready value, or _MISSING if it is unset."""
    if isinstance(value, dict):
        cleaned = {k: _clean(v) for k, v in value.items()}
        return {k: v for k, v in cleaned.items() if v is not _MISSING}
    if isinstance(value, (list, tuple, np.ndarray)):
        return [v for v in (_clean(item) for item in value) if v is not _MISSING]
    if value is None or pd.isna(value):
        return _MISSING
    if isinstance(value, (pd.Timestamp, datetime.date)):
        return value.strftime('%Y-%m-%d')
    if isinstance(value, np.generic):
        return value.item()
    return value


def table_records(data: Union[pd.DataFrame, List[dict]]) -> List[dict]:
    """Row objects for a table, with unset fields dropped."""
    if isinstance(data, pd.DataFrame):
        data = data.to_dict('records')
    return [_clean(dict(row)) for row in data]


def write_json(data: Union[pd.DataFrame, List[dict]], path: Union[str, Path]) -> Path:
    """Serialise `data` to `path` (overwritten), UTF-8, two-space indent."""
    path = Path(path)
    text = json.dumps(table_records(data), indent=JSON_INDENT, ensure_ascii=False)
    path.write_text(text + '\n', encoding='utf-8')
    return path


def write_tidy_csv(tidy: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write the long (tool, category) table as CSV."""
    path = Path(path)
    tidy.to_csv(path, index=False, date_format='%Y-%m-%d')
    return path
