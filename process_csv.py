#!/usr/bin/env python3
"""
Convert the single-cell software spreadsheet into the website's JSON files.

Reads single_cell_software.csv, adds registry membership (Bioconductor,
CRAN, PyPI), Crossref citation counts and link fields, and writes:

  - OUTPUT_DIR/software-table.json   every tool, with category flags
  - OUTPUT_DIR/software.json         tools with their list of categories
  - OUTPUT_DIR/categories.json       categories with their member tools

Usage:
    python process_csv.py OUTPUT_DIR
    python process_csv.py OUTPUT_DIR --input path/to/sheet.csv --tidy-csv
    python process_csv.py OUTPUT_DIR --skip-citations

Environment:
    CROSSREF_MAILTO   contact address sent to Crossref (same as --mailto)
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Optional

import pandas as pd

from enrich_rows import enrich_sheet
from export_json import (BY_CATEGORY_FILE, BY_NAME_FILE, TABLE_FILE, TIDY_CSV_FILE,
                         write_json, write_tidy_csv)
from fetch_citations import get_citations
from load_sheet import DEFAULT_INPUT, SoftwareSheet, load_sheet
from registry_lists import fetch_registries
from tidy_sheet import add_categories_column, tidy_sheet, to_list_by_category, to_list_by_name

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def get_swsheet(input_path=DEFAULT_INPUT, mailto: Optional[str] = None,
                skip_citations: bool = False) -> SoftwareSheet:
    """
    Build the enriched sheet: registries, load, derived fields, citations.

    Returns:
        SoftwareSheet whose table carries the derived columns and `citations`
    """
    registries = fetch_registries()

    logger.info("Processing table...")
    sheet = load_sheet(input_path)
    table = enrich_sheet(sheet.table, registries)

    if skip_citations:
        logger.info("Skipping citations")
        citations = [None] * len(table)
    else:
        logger.info("Getting citations...")
        citations = get_citations(table['DOI'], mailto=mailto)
    table['citations'] = pd.array(citations, dtype='Int64')

    return SoftwareSheet(table=table, category_columns=sheet.category_columns)


def write_files(destdir, input_path=DEFAULT_INPUT, mailto: Optional[str] = None,
                skip_citations: bool = False, tidy_csv: bool = False) -> dict:
    """
    Run the whole conversion and write the output files into `destdir`.

    Returns:
        Dict of output name -> written path, plus counts for the summary
    """
    destdir = Path(destdir)
    destdir.mkdir(parents=True, exist_ok=True)

    sheet = get_swsheet(input_path, mailto=mailto, skip_citations=skip_citations)

    logger.info("Tidying data...")
    tidy = tidy_sheet(sheet.table, sheet.category_columns)
    table = add_categories_column(sheet.table, tidy)
    by_name = to_list_by_name(tidy)
    by_category = to_list_by_category(tidy, table)

    written = {
        'table': write_json(table, destdir / TABLE_FILE),
        'software': write_json(by_name, destdir / BY_NAME_FILE),
        'categories': write_json(by_category, destdir / BY_CATEGORY_FILE),
    }
    if tidy_csv:
        written['tidy_csv'] = write_tidy_csv(tidy, destdir / TIDY_CSV_FILE)

    return {
        'files': written,
        'tools': len(table),
        'categorised_tools': len(by_name),
        'categories': len(by_category),
        'with_citations': int(table['citations'].notna().sum()),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Convert the single-cell software spreadsheet to JSON files"
    )
    parser.add_argument(
        'output_dir',
        type=Path,
        help='Directory to write the JSON files into (created if needed)'
    )
    parser.add_argument(
        '--input',
        type=Path,
        default=Path(DEFAULT_INPUT),
        help=f'Spreadsheet to convert (default: {DEFAULT_INPUT})'
    )
    parser.add_argument(
        '--mailto',
        default=os.getenv('CROSSREF_MAILTO'),
        help='Contact email for Crossref requests (default: $CROSSREF_MAILTO)'
    )
    parser.add_argument(
        '--skip-citations',
        action='store_true',
        help='Do not query Crossref; citations are left unset'
    )
    parser.add_argument(
        '--tidy-csv',
        action='store_true',
        help=f'Also write the long-format table to {TIDY_CSV_FILE}'
    )

    args = parser.parse_args(argv)
    logger.info(f"Options: {vars(args)}")

    result = write_files(
        args.output_dir,
        input_path=args.input,
        mailto=args.mailto,
        skip_citations=args.skip_citations,
        tidy_csv=args.tidy_csv,
    )

    print(f"\n✓ Processed {result['tools']} tools")
    print(f"  - {result['categorised_tools']} tools in {result['categories']} categories")
    print(f"  - {result['with_citations']} with citation counts")
    for path in result['files'].values():
        print(f"  Saved: {path}")


if __name__ == '__main__':
    main()
