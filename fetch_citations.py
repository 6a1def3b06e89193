#!/usr/bin/env python3
"""
Look up citation counts for DOIs from the Crossref REST API.

One request per DOI, followed by a random pause so a full sheet stays under
Crossref's rate limit. A failed lookup gives an unset count for that DOI and
the batch carries on.
"""

import logging
import random
import time
from typing import Iterable, List, Optional
from urllib.parse import quote

import pandas as pd
import requests

logger = logging.getLogger(__name__)

CROSSREF_WORKS_URL = "https://api.crossref.org/works/"
USER_AGENT = "scrna-tools-db/1.0"
REQUEST_TIMEOUT = 30

# Seconds to wait after each lookup, drawn uniformly
PAUSE_CHOICES = [0, 0.5, 1, 1.5, 2]


def _headers(mailto: Optional[str] = None) -> dict:
    if mailto:
        return {'User-Agent': f"{USER_AGENT} (mailto:{mailto})"}
    return {'User-Agent': USER_AGENT}


def citation_count(doi: str, mailto: Optional[str] = None) -> int:
    """Number of works citing `doi` according to Crossref.

    Raises on HTTP errors and on responses without a citation count.
    """
    url = CROSSREF_WORKS_URL + quote(doi, safe='/')
    response = requests.get(url, headers=_headers(mailto), timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    count = response.json()['message']['is-referenced-by-count']
    return int(count)


def get_citations(dois: Iterable, mailto: Optional[str] = None) -> List[Optional[int]]:
    """
    Fetch citation counts for a sequence of optional DOIs.

    Args:
        dois: DOIs in row order; missing entries (None/NA) are skipped
        mailto: Contact address for Crossref's polite pool

    Returns:
        Citation counts in the same order, None where the DOI is missing or
        the lookup failed
    """
    dois = list(dois)
    counts: List[Optional[int]] = []

    for i, doi in enumerate(dois, 1):
        if doi is None or pd.isna(doi):
            counts.append(None)
            continue

        try:
            count = citation_count(doi, mailto)
            logger.debug(f"[{i}/{len(dois)}] {doi}: {count} citations")
        except Exception as e:
            logger.warning(f"[{i}/{len(dois)}] Citation lookup failed for {doi}: {e}")
            count = None
        counts.append(count)

        time.sleep(random.choice(PAUSE_CHOICES))

    return counts
