"""
Tests for enrich_rows.py.
"""

import pandas as pd

from enrich_rows import DERIVED_COLUMNS, enrich_row, enrich_sheet
from load_sheet import load_sheet


def _row(**fields):
    row = {
        'Name': 'tool', 'Platform': pd.NA, 'DOI': pd.NA, 'PubDate': pd.NA,
        'Code': pd.NA, 'Description': 'x', 'License': 'MIT',
        'Added': pd.Timestamp('2016-09-08'), 'Updated': pd.Timestamp('2016-09-08'),
    }
    row.update(fields)
    return row


def test_preprint_sentinel(registries):
    enriched = enrich_row(_row(PubDate='PREPRINT'), registries)
    assert enriched['Preprint'] is True
    assert pd.isna(enriched['PubDate'])


def test_published_date_is_parsed_and_preprint_unset(registries):
    enriched = enrich_row(_row(PubDate='2017-01-14'), registries)
    assert enriched['PubDate'] == pd.Timestamp('2017-01-14')
    assert enriched['Preprint'] is pd.NA


def test_missing_pub_date_leaves_both_unset(registries):
    enriched = enrich_row(_row(), registries)
    assert pd.isna(enriched['PubDate'])
    assert enriched['Preprint'] is pd.NA


def test_unparseable_pub_date_is_unset(registries, caplog):
    enriched = enrich_row(_row(PubDate='sometime'), registries)
    assert pd.isna(enriched['PubDate'])
    assert enriched['Preprint'] is pd.NA
    assert 'could not parse PubDate' in caplog.text


def test_doi_url(registries):
    assert enrich_row(_row(DOI='10.1038/nbt.3192'), registries)['DOI_url'] == \
        'http://dx.doi.org/10.1038/nbt.3192'
    assert enrich_row(_row(), registries)['DOI_url'] is pd.NA


def test_github_identifier(registries):
    enriched = enrich_row(_row(Code='https://github.com/org/repo'), registries)
    assert enriched['Github'] == 'org/repo'


def test_github_requires_github_in_code(registries):
    assert enrich_row(_row(Code='https://bitbucket.org/org/repo'), registries)['Github'] is pd.NA
    assert enrich_row(_row(), registries)['Github'] is pd.NA


def test_github_other_prefix_kept(registries):
    # Only the exact https prefix is stripped
    enriched = enrich_row(_row(Code='http://github.com/org/repo'), registries)
    assert enriched['Github'] == 'http://github.com/org/repo'


def test_pypi_requires_python_platform(registries):
    python = enrich_row(_row(Name='Scanpy', Platform='Python'), registries)
    assert python['pypi'] == 'scanpy'

    r_only = enrich_row(_row(Name='scater', Platform='R'), registries)
    assert r_only['pypi'] is pd.NA


def test_pypi_platform_match_is_case_insensitive(registries):
    enriched = enrich_row(_row(Name='scater', Platform='R, PYTHON'), registries)
    assert enriched['pypi'] == 'scater'


def test_cran_requires_capital_r(registries):
    assert enrich_row(_row(Name='Seurat', Platform='R'), registries)['CRAN'] == 'Seurat'
    assert enrich_row(_row(Name='Seurat', Platform='Python'), registries)['CRAN'] is pd.NA
    assert enrich_row(_row(Name='Seurat', Platform='r'), registries)['CRAN'] is pd.NA


def test_cran_gate_matches_any_capital_r(registries):
    # "Ruby" contains an R, so the gate passes
    enriched = enrich_row(_row(Name='RubyTool', Platform='C++, Ruby'), registries)
    assert enriched['CRAN'] == 'RubyTool'


def test_bioconductor_has_no_platform_gate(registries):
    assert enrich_row(_row(Name='SCATER', Platform='Python'), registries)['Bioconductor'] == 'scater'
    assert enrich_row(_row(Name='SCATER'), registries)['Bioconductor'] == 'scater'
    assert enrich_row(_row(Name='Seurat', Platform='R'), registries)['Bioconductor'] is pd.NA


def test_missing_platform_fails_both_gates(registries):
    enriched = enrich_row(_row(Name='Seurat'), registries)
    assert enriched['CRAN'] is pd.NA
    assert enriched['pypi'] is pd.NA


def test_enrich_row_does_not_modify_input(registries):
    row = _row(PubDate='PREPRINT')
    enrich_row(row, registries)
    assert row['PubDate'] == 'PREPRINT'
    assert 'Preprint' not in row


def test_enrich_sheet_columns_and_types(sheet_path, registries):
    sheet = load_sheet(sheet_path)
    enriched = enrich_sheet(sheet.table, registries)

    assert list(enriched.columns) == list(sheet.table.columns) + DERIVED_COLUMNS
    assert pd.api.types.is_datetime64_any_dtype(enriched['PubDate'])
    assert enriched['Preprint'].dtype == 'boolean'
    assert enriched['pypi'].dtype == 'string'
    assert enriched['Clustering'].dtype == 'boolean'


def test_preprint_rows_have_no_pub_date(sheet_path, registries):
    enriched = enrich_sheet(load_sheet(sheet_path).table, registries)
    preprints = enriched[enriched['Preprint'].fillna(False)]

    assert preprints['Name'].tolist() == ['BISCUIT']
    assert preprints['PubDate'].isna().all()
    assert not enriched['Preprint'].eq(False).any()


def test_pub_date_must_be_year_month_day(registries):
    enriched = enrich_row(_row(PubDate='01/02/2017'), registries)
    assert pd.isna(enriched['PubDate'])
    assert enriched['Preprint'] is pd.NA


def test_padded_sheet_cells_enrich_like_clean_ones(tmp_path, registries):
    path = tmp_path / 'sheet.csv'
    path.write_text(
        "Name,Platform,DOI,PubDate,Code,Description,License,Added,Updated,Clustering\n"
        "Seurat , R,, PREPRINT, https://github.com/satijalab/seurat ,Toolkit,GPL-3,"
        "2016-09-08,2016-09-08,TRUE\n",
        encoding='utf-8',
    )
    row = enrich_sheet(load_sheet(path).table, registries).iloc[0]

    assert row['CRAN'] == 'Seurat'
    assert bool(row['Preprint'])
    assert pd.isna(row['PubDate'])
    assert row['Github'] == 'satijalab/seurat'
