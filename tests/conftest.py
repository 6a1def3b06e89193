from pathlib import Path

import pytest

from tests.sheet_data import SHEET_CSV


@pytest.fixture
def sheet_path(tmp_path: Path) -> Path:
    path = tmp_path / 'single_cell_software.csv'
    path.write_text(SHEET_CSV, encoding='utf-8')
    return path


@pytest.fixture
def registries() -> dict:
    return {
        'Bioconductor': {'scater': 'scater'},
        'pypi': {'scanpy': 'scanpy', 'scater': 'scater'},
        'CRAN': {'seurat': 'Seurat', 'rubytool': 'RubyTool'},
    }
