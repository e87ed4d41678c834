"""Tests for the analysis facade."""

import os

import pytest

from viz_pipeline import DataSummary, Pipeline, analyze_data
from viz_pipeline.models import ChartType, CorrelationStrength
from viz_pipeline.utils.sample_data import generate_sample_rows


@pytest.fixture
def pipeline(empty_config):
    return Pipeline(empty_config)


def test_empty_dataset(pipeline):
    summary = pipeline.analyze([])

    assert summary.row_count == 0
    assert summary.column_count == 0
    assert summary.column_summaries == []
    assert summary.correlations == []
    assert summary.recommended_visualizations == []
    assert summary == DataSummary.empty()


def test_counts_follow_first_row(pipeline):
    rows = [
        {'A': 1, 'B': 'x'},
        {'A': 2, 'B': 'y', 'Extra': 99},
        {'A': 3},
    ]
    summary = pipeline.analyze(rows)

    assert summary.row_count == 3
    assert summary.column_count == 2
    assert [c.name for c in summary.column_summaries] == ['A', 'B']
    assert summary.get_column('B').missing_values == 1
    assert summary.get_column('Extra') is None


def test_sales_scenario(pipeline, sales_rows):
    summary = pipeline.analyze(sales_rows)

    assert summary.categorical_columns == ['Month']
    assert summary.numeric_columns == ['Sales']

    sales = summary.get_column('Sales')
    assert (sales.min, sales.max, sales.mean, sales.median) == (100, 200, 150, 150)

    # too few rows to correlate, but bar and pie still apply
    assert summary.correlations == []
    types = {r.type for r in summary.recommended_visualizations}
    assert {ChartType.BAR, ChartType.PIE, ChartType.HISTOGRAM, ChartType.RADAR} <= types


def test_linear_scenario(pipeline, linear_rows):
    summary = pipeline.analyze(linear_rows)

    result = summary.correlation_between('Y', 'X')
    assert result is summary.correlation_between('X', 'Y')
    assert result.correlation == pytest.approx(1.0)
    assert result.strength is CorrelationStrength.STRONG

    recs = summary.recommended_visualizations
    scatter = [r for r in recs if r.type is ChartType.SCATTER]
    lines = [r for r in recs if r.type is ChartType.LINE]
    assert scatter and lines
    assert {scatter[0].x_axis, scatter[0].y_axis} == {'X', 'Y'}
    assert {lines[0].x_axis, lines[0].y_axis} == {'X', 'Y'}


def test_four_rows_have_no_correlation(pipeline):
    rows = [{'X': i, 'Y': i + 1} for i in range(4)]
    assert pipeline.analyze(rows).correlations == []


def test_high_cardinality_category(pipeline):
    rows = [{'Name': f"Item {chr(65 + i)}", 'Value': i * 3} for i in range(25)]
    summary = pipeline.analyze(rows)

    assert summary.get_column('Name').unique_values == 25
    types = {r.type for r in summary.recommended_visualizations}
    assert ChartType.BAR not in types
    assert ChartType.PIE not in types


def test_mixed_dataset_properties(pipeline, mixed_rows):
    summary = pipeline.analyze(mixed_rows)

    assert summary.date_columns == ['Date']
    for col in summary.column_summaries:
        if col.name in summary.numeric_columns:
            assert col.min <= col.median <= col.max
            assert col.min <= col.mean <= col.max

    for corr in summary.correlations:
        assert -1.0 <= corr.correlation <= 1.0
        assert corr.sample_size > 5

    strengths = [r.strength for r in summary.recommended_visualizations]
    assert strengths == sorted(strengths, reverse=True)
    assert any(r.type is ChartType.HEATMAP for r in summary.recommended_visualizations)


def test_idempotent(pipeline, mixed_rows):
    assert pipeline.analyze(mixed_rows) == pipeline.analyze(mixed_rows)


def test_input_is_not_mutated(pipeline, mixed_rows):
    snapshot = [dict(row) for row in mixed_rows]
    pipeline.analyze(mixed_rows)
    assert mixed_rows == snapshot


def test_summary_is_frozen(pipeline, sales_rows):
    summary = pipeline.analyze(sales_rows)
    with pytest.raises(Exception):
        summary.row_count = 10


def test_top_recommendations_deduplicates(pipeline):
    rows = [{'Date': f"2024-01-{d:02d}", 'Sales': d * 10} for d in range(1, 11)]
    summary = pipeline.analyze(rows)

    top = summary.top_recommendations(n=50)
    keys = [r.dedup_key() for r in top]
    assert len(keys) == len(set(keys))
    assert len(summary.top_recommendations(n=2)) == 2


def test_analyze_data_matches_pipeline(empty_config, sales_rows):
    assert analyze_data(sales_rows, empty_config) == Pipeline(empty_config).analyze(sales_rows)


def test_sample_dataset(pipeline):
    rows = generate_sample_rows()
    assert rows == generate_sample_rows()

    summary = pipeline.analyze(rows)
    assert summary.row_count == 36
    assert summary.categorical_columns == ['Month', 'Category']
    assert summary.numeric_columns == ['Sales', 'Profit', 'Units']
    assert pipeline.verify(summary)['status'] == 'pass'


def test_to_dict_is_json_ready(pipeline, linear_rows):
    data = pipeline.analyze(linear_rows).to_dict()
    assert data['numeric_columns'] == ['X', 'Y']
    assert data['correlations'][0]['strength'] == 'strong'
    assert data['column_summaries'][0]['type'] == 'numeric'


def test_default_config_ignores_working_directory(tmp_path, monkeypatch):
    monkeypatch.delenv('TYPE_SAMPLE_SIZE', raising=False)
    monkeypatch.chdir(tmp_path)
    rows = [{'Code': 'abc'}] + [{'Code': i} for i in range(10)]

    before = analyze_data(rows)
    (tmp_path / '.env').write_text("TYPE_SAMPLE_SIZE=1\n")
    (tmp_path / 'config').mkdir()
    (tmp_path / 'config' / 'pipeline_config.yaml').write_text("summarizer:\n  sample_size: 1\n")
    after = analyze_data(rows)

    assert before.numeric_columns == ['Code']
    assert after == before
    assert 'TYPE_SAMPLE_SIZE' not in os.environ
