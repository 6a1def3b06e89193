#!/usr/bin/env python3
"""
Fetch package name lists from the Bioconductor, PyPI and CRAN registries.

Each registry is reached through a name-list provider: a zero-argument
callable returning the registry's package names as displayed by the
registry. The providers are interchangeable, so the scraped sources (PyPI,
CRAN) and the repository index (Bioconductor) can be swapped or stubbed.

Names are keyed by their lowercase form so tool names from the sheet can be
matched case-insensitively.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# ─── Registry endpoints ───────────────────────────────────────────────────────
BIOCONDUCTOR_PACKAGES_URL = "https://bioconductor.org/packages/release/bioc/src/contrib/PACKAGES"
PYPI_SIMPLE_URL = "https://pypi.org/simple/"
CRAN_PACKAGES_URL = "https://cran.r-project.org/web/packages/available_packages_by_name.html"

REQUEST_TIMEOUT = 120  # PyPI's simple index is several MB

# CRAN's listing starts with one anchor per initial letter
_INDEX_LETTERS = {chr(c) for c in range(ord('A'), ord('Z') + 1)}

_DCF_PACKAGE_RE = re.compile(r'^Package:\s*(\S+)\s*$', re.MULTILINE)

NameListProvider = Callable[[], List[str]]
Registries = Dict[str, Dict[str, str]]


def _get(url: str) -> requests.Response:
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response


def anchor_texts(html: str) -> List[str]:
    """Return the text of every <a> element in document order."""
    soup = BeautifulSoup(html, 'lxml')
    return [a.get_text().strip() for a in soup.find_all('a')]


def bioconductor_packages() -> List[str]:
    """Package names from the Bioconductor release software repository index."""
    response = _get(BIOCONDUCTOR_PACKAGES_URL)
    return _DCF_PACKAGE_RE.findall(response.text)


def pypi_packages() -> List[str]:
    """Package names scraped from the PyPI simple index."""
    response = _get(PYPI_SIMPLE_URL)
    return [name for name in anchor_texts(response.text) if name]


def cran_packages() -> List[str]:
    """Package names scraped from CRAN's list of available packages.

    The letter links at the top of the page are dropped, as are repeats.
    """
    response = _get(CRAN_PACKAGES_URL)
    names = []
    seen = set()
    for name in anchor_texts(response.text):
        if not name or name in _INDEX_LETTERS or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


def name_lookup(names: List[str]) -> Dict[str, str]:
    """Map lowercase package name -> registry display name (first one wins)."""
    lookup: Dict[str, str] = {}
    for name in names:
        lookup.setdefault(name.lower(), name)
    return lookup


# Order matters only for the progress log
REGISTRY_PROVIDERS: Dict[str, NameListProvider] = {
    'Bioconductor': bioconductor_packages,
    'pypi': pypi_packages,
    'CRAN': cran_packages,
}

_REGISTRY_LABELS = {'Bioconductor': 'Bioconductor', 'pypi': 'PyPI', 'CRAN': 'CRAN'}


def fetch_registries(providers: Optional[Dict[str, NameListProvider]] = None) -> Registries:
    """
    Fetch every registry's package list.

    Args:
        providers: Registry field name -> provider. Defaults to
            REGISTRY_PROVIDERS.

    Returns:
        Registry field name -> {lowercase name: display name}

    Network or HTTP errors are not caught; a registry that cannot be read
    aborts the run.
    """
    if providers is None:
        providers = REGISTRY_PROVIDERS

    registries: Registries = {}
    for field, provider in providers.items():
        logger.info(f"Getting {_REGISTRY_LABELS.get(field, field)} package list...")
        registries[field] = name_lookup(provider())
        logger.info(f"  {len(registries[field])} packages")
    return registries
