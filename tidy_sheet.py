#!/usr/bin/env python3
"""
Reshape the enriched sheet between its wide and long forms.

The sheet stores one logical column per category. `tidy_sheet` melts those
into (tool, category) rows for the flags that are true; the other helpers
regroup that long table by tool and by category.
"""

from typing import Dict, List, Set, Tuple

import pandas as pd

MEMBER_COLUMNS = ['Name', 'Bioconductor', 'CRAN', 'pypi']


def tidy_sheet(table: pd.DataFrame, category_columns: List[str]) -> pd.DataFrame:
    """
    Melt the category flags into a long table.

    Args:
        table: Enriched sheet, one row per tool
        category_columns: Names of the logical category columns

    Returns:
        Every non-category column plus `category`, one row per true flag,
        sorted by Name. Rows for the same tool keep category-column order.
    """
    id_columns = [c for c in table.columns if c not in category_columns]
    if not category_columns:
        return pd.DataFrame(columns=id_columns + ['category'])

    long = table.melt(id_vars=id_columns, value_vars=category_columns,
                      var_name='category', value_name='val')
    flagged = long['val'].astype('boolean').fillna(False).astype(bool)

    tidy = long[flagged].drop(columns='val')
    return tidy.sort_values('Name', kind='mergesort').reset_index(drop=True)


def categories_by_name(tidy: pd.DataFrame) -> Dict[str, List[str]]:
    """Tool name -> its categories in encounter order."""
    return {name: list(group) for name, group in tidy.groupby('Name', sort=False)['category']}


def to_list_by_name(tidy: pd.DataFrame) -> pd.DataFrame:
    """One row per tool (tidy order) with a `categories` list column."""
    catlist = categories_by_name(tidy)
    rows = tidy.drop(columns='category').drop_duplicates(subset='Name').reset_index(drop=True)
    rows['categories'] = [catlist[name] for name in rows['Name']]
    return rows


def to_list_by_category(tidy: pd.DataFrame, table: pd.DataFrame) -> pd.DataFrame:
    """
    One row per category (sorted) with the registry fields of its members.

    Members are taken from `table` in sheet order and projected to
    MEMBER_COLUMNS.
    """
    records = []
    for category, names in tidy.groupby('category', sort=True)['Name']:
        members = table[table['Name'].isin(list(names))]
        records.append({
            'category': category,
            'software': members[MEMBER_COLUMNS].to_dict('records'),
        })
    return pd.DataFrame(records, columns=['category', 'software'])


def add_categories_column(table: pd.DataFrame, tidy: pd.DataFrame) -> pd.DataFrame:
    """Attach each tool's category list to the full sheet (None when it has none)."""
    catlist = categories_by_name(tidy)
    with_categories = table.copy()
    with_categories['categories'] = [catlist.get(name) for name in table['Name']]
    return with_categories


def pairs_by_name(by_name: pd.DataFrame) -> Set[Tuple[str, str]]:
    return {(name, category)
            for name, categories in zip(by_name['Name'], by_name['categories'])
            for category in categories}


def pairs_by_category(by_category: pd.DataFrame) -> Set[Tuple[str, str]]:
    return {(member['Name'], category)
            for category, software in zip(by_category['category'], by_category['software'])
            for member in software}
