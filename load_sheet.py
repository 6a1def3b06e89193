#!/usr/bin/env python3
"""
Load the single-cell software spreadsheet with its fixed column schema.

The sheet has nine descriptive columns with explicit types; every remaining
column is a logical category flag (one column per category). The category
columns are read from the header rather than listed here.
"""

from pathlib import Path
from typing import Dict, List, NamedTuple, Union

import pandas as pd

DEFAULT_INPUT = 'single_cell_software.csv'

# Column -> type for the fixed columns; anything else is a category flag
STRING_COLUMNS = ['Name', 'Platform', 'DOI', 'PubDate', 'Code', 'Description', 'License']
DATE_COLUMNS = ['Added', 'Updated']
FIXED_COLUMNS = ['Name', 'Platform', 'DOI', 'PubDate', 'Code', 'Description', 'License',
                 'Added', 'Updated']

NA_VALUES = ['', 'NA']
DATE_FORMAT = '%Y-%m-%d'

LOGICAL_VALUES: Dict[str, bool] = {
    'TRUE': True, 'True': True, 'true': True, 'T': True, '1': True,
    'FALSE': False, 'False': False, 'false': False, 'F': False, '0': False,
}


class SoftwareSheet(NamedTuple):
    """Parsed sheet plus the names of its category columns, in header order."""
    table: pd.DataFrame
    category_columns: List[str]


def parse_logical(series: pd.Series) -> pd.Series:
    """Convert a column of logical strings to a nullable boolean column."""
    def convert(value):
        if pd.isna(value):
            return pd.NA
        try:
            return LOGICAL_VALUES[value.strip()]
        except KeyError:
            raise ValueError(
                f"Column '{series.name}': cannot parse {value!r} as a logical value"
            ) from None

    return series.map(convert).astype('boolean')


def parse_dates(series: pd.Series) -> pd.Series:
    """Parse a YYYY-MM-DD column; malformed values raise."""
    try:
        return pd.to_datetime(series, format=DATE_FORMAT)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Column '{series.name}': {e}") from e


def trim_fields(raw: pd.DataFrame) -> pd.DataFrame:
    """Strip surrounding whitespace from every cell; cells left empty or NA become unset."""
    trimmed = raw.copy()
    for col in raw.columns:
        stripped = raw[col].str.strip()
        trimmed[col] = stripped.where(~stripped.isin(NA_VALUES))
    return trimmed


def load_sheet(path: Union[str, Path] = DEFAULT_INPUT) -> SoftwareSheet:
    """
    Read the spreadsheet into a typed DataFrame.

    Args:
        path: CSV file to read

    Returns:
        SoftwareSheet with the typed table and its category column names

    Raises:
        ValueError: a fixed column is missing, a row has no Name, or a value
            cannot be coerced to its column's type
        pandas.errors.ParserError: the CSV itself is malformed
    """
    raw = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=NA_VALUES,
                      skipinitialspace=True)
    raw.columns = [str(col).strip() for col in raw.columns]

    missing = [col for col in FIXED_COLUMNS if col not in raw.columns]
    if missing:
        raise ValueError(f"{path}: missing required columns: {', '.join(missing)}")

    raw = trim_fields(raw)

    # Line numbers count the header as line 1
    unnamed = [i + 2 for i in raw.index[raw['Name'].isna()]]
    if unnamed:
        raise ValueError(f"{path}: missing Name on line(s) {', '.join(map(str, unnamed))}")

    category_columns = [col for col in raw.columns if col not in FIXED_COLUMNS]

    table = raw.copy()
    for col in STRING_COLUMNS:
        table[col] = raw[col].astype('string')
    for col in DATE_COLUMNS:
        table[col] = parse_dates(raw[col])
    for col in category_columns:
        table[col] = parse_logical(raw[col])

    return SoftwareSheet(table=table, category_columns=category_columns)
