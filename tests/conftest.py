"""Shared pytest fixtures for all tests."""

import pytest

from viz_pipeline.config import Config


@pytest.fixture
def sales_rows():
    """Three months of sales."""
    return [
        {'Month': 'Jan', 'Sales': 100},
        {'Month': 'Feb', 'Sales': 200},
        {'Month': 'Mar', 'Sales': 150},
    ]


@pytest.fixture
def linear_rows():
    """Two perfectly correlated numeric columns."""
    return [{'X': x, 'Y': 2 * x} for x in range(1, 7)]


@pytest.fixture
def mixed_rows():
    """Categorical, date and four numeric columns, 12 rows."""
    regions = ['North', 'South', 'East']
    rows = []
    for i in range(12):
        rows.append({
            'Region': regions[i % 3],
            'Date': f"2024-{i + 1:02d}-01",
            'Sales': 100 + 10 * i,
            'Profit': 20 + 3 * i,
            'Units': (i * 7) % 5,
            'Returns': 12 - i,
        })
    return rows


@pytest.fixture
def empty_config(tmp_path, monkeypatch):
    """Config with no YAML file and no environment overrides."""
    for var in ('LOG_LEVEL', 'TYPE_SAMPLE_SIZE', 'TOP_N_CHARTS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return Config()
