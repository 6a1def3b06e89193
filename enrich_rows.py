#!/usr/bin/env python3
"""
Derive link, preprint and registry-membership fields for each sheet row.

Fields added (in this order):
- Preprint:     True when PubDate is the PREPRINT sentinel, otherwise unset
- DOI_url:      resolver link for the DOI
- Github:       owner/repo for GitHub-hosted code
- Bioconductor: Bioconductor display name if the tool is a Bioconductor package
- CRAN:         CRAN display name, only for tools whose Platform mentions R
- pypi:         PyPI display name, only for tools whose Platform mentions Python

Unset values are pd.NA (NaT for PubDate); nothing is ever stored as False.
"""

import logging
from typing import Any, Dict, Mapping

import pandas as pd

from load_sheet import DATE_FORMAT
from registry_lists import Registries

logger = logging.getLogger(__name__)

PREPRINT_SENTINEL = 'PREPRINT'
DOI_RESOLVER = 'http://dx.doi.org/'
GITHUB_PREFIX = 'https://github.com/'

DERIVED_COLUMNS = ['Preprint', 'DOI_url', 'Github', 'Bioconductor', 'CRAN', 'pypi']

DERIVED_DTYPES = {
    'Preprint': 'boolean',
    'DOI_url': 'string',
    'Github': 'string',
    'Bioconductor': 'string',
    'CRAN': 'string',
    'pypi': 'string',
}


def _is_missing(value: Any) -> bool:
    return value is None or value is pd.NA or value is pd.NaT or (
        isinstance(value, float) and pd.isna(value))


def parse_pub_date(value: Any, name: Any = None):
    """Parse a YYYY-MM-DD publication date; anything else becomes NaT with a warning."""
    if _is_missing(value):
        return pd.NaT
    parsed = pd.to_datetime(value, format=DATE_FORMAT, errors='coerce')
    if pd.isna(parsed):
        logger.warning(f"{name}: could not parse PubDate {value!r}, leaving it unset")
    return parsed


def registry_match(name: Any, lookup: Mapping[str, str]):
    """Registry display name for a tool name, or NA."""
    if _is_missing(name):
        return pd.NA
    return lookup.get(str(name).lower(), pd.NA)


def claims_r(platform: Any) -> bool:
    # Plain substring test on "R": "Ruby" passes too. Known quirk, kept as-is.
    return not _is_missing(platform) and 'R' in platform


def claims_python(platform: Any) -> bool:
    return not _is_missing(platform) and 'python' in platform.lower()


def enrich_row(row: Mapping[str, Any], registries: Registries) -> Dict[str, Any]:
    """
    Return a copy of one sheet row with the derived fields filled in.

    Args:
        row: Column name -> value for one row (category flags are passed
            through untouched)
        registries: Registry field name -> {lowercase name: display name},
            as returned by registry_lists.fetch_registries

    Returns:
        New dict with PubDate normalised and DERIVED_COLUMNS appended
    """
    enriched = dict(row)
    name = row.get('Name')

    pub_date = row.get('PubDate')
    if not _is_missing(pub_date) and pub_date == PREPRINT_SENTINEL:
        enriched['Preprint'] = True
        enriched['PubDate'] = pd.NaT
    else:
        enriched['Preprint'] = pd.NA
        enriched['PubDate'] = parse_pub_date(pub_date, name)

    doi = row.get('DOI')
    enriched['DOI_url'] = pd.NA if _is_missing(doi) else DOI_RESOLVER + doi

    code = row.get('Code')
    if not _is_missing(code) and 'github' in code:
        enriched['Github'] = code.replace(GITHUB_PREFIX, '', 1)
    else:
        enriched['Github'] = pd.NA

    platform = row.get('Platform')
    enriched['Bioconductor'] = registry_match(name, registries.get('Bioconductor', {}))
    enriched['CRAN'] = (registry_match(name, registries.get('CRAN', {}))
                        if claims_r(platform) else pd.NA)
    enriched['pypi'] = (registry_match(name, registries.get('pypi', {}))
                        if claims_python(platform) else pd.NA)

    return enriched


def enrich_sheet(table: pd.DataFrame, registries: Registries) -> pd.DataFrame:
    """Apply enrich_row to every row, keeping column order and nullable dtypes."""
    columns = list(table.columns) + [c for c in DERIVED_COLUMNS if c not in table.columns]
    records = [enrich_row(row, registries) for row in table.to_dict('records')]
    enriched = pd.DataFrame(records, columns=columns)
    enriched.index = table.index

    for col in table.columns:
        if col == 'PubDate':
            continue
        enriched[col] = enriched[col].astype(table[col].dtype)
    enriched['PubDate'] = pd.to_datetime(enriched['PubDate'])
    for col, dtype in DERIVED_DTYPES.items():
        enriched[col] = enriched[col].astype(dtype)

    return enriched
