"""Tests for the summary and chart verification checkpoints."""

import pytest

from viz_pipeline import Pipeline
from viz_pipeline.models import (
    ChartType,
    ColumnSummary,
    ColumnType,
    CorrelationResult,
    CorrelationStrength,
    DataSummary,
    VisualizationRecommendation,
)
from viz_pipeline.verifiers import SummaryChecker, validate_chart_fields


@pytest.fixture
def checker():
    return SummaryChecker()


def _rec(strength, **fields):
    return VisualizationRecommendation(type=ChartType.BAR, title='t', strength=strength, **fields)


def test_analysis_output_passes(checker, empty_config, mixed_rows):
    report = checker.verify(Pipeline(empty_config).analyze(mixed_rows))

    assert report['status'] == 'pass'
    assert report['errors'] == []
    assert set(report['checks']) == {
        'columns', 'numeric_bounds', 'correlations', 'recommendations', 'missing_values'
    }


def test_empty_summary_passes(checker):
    assert checker.verify(DataSummary.empty())['status'] == 'pass'


def test_missing_values_warn(checker, empty_config):
    rows = [{'A': i, 'B': None if i % 2 else 'x'} for i in range(6)]
    report = checker.verify(Pipeline(empty_config).analyze(rows))

    assert report['status'] == 'pass_with_warnings'
    assert report['checks']['missing_values']['columns'] == ['B']


def test_unsorted_recommendations_fail(checker):
    summary = DataSummary(
        row_count=1,
        column_count=1,
        categorical_columns=['A'],
        column_summaries=[ColumnSummary(name='A', type=ColumnType.CATEGORICAL,
                                        unique_values=1, missing_values=0)],
        recommended_visualizations=[_rec(0.5, x_axis='A'), _rec(0.8, x_axis='A')],
    )
    report = checker.verify(summary)

    assert report['status'] == 'fail'
    assert report['checks']['recommendations']['status'] == 'fail'


def test_unknown_binding_fails(checker):
    summary = DataSummary(recommended_visualizations=[_rec(0.5, x_axis='Ghost')])
    report = checker.verify(summary)

    assert report['status'] == 'fail'
    assert "Ghost" in report['errors'][0]['message']


def test_numeric_bounds_violation_fails(checker):
    col = ColumnSummary(name='N', type=ColumnType.NUMERIC, unique_values=2, missing_values=0,
                        min=1.0, max=2.0, mean=5.0, median=1.5)
    summary = DataSummary(column_count=1, numeric_columns=['N'], column_summaries=[col])

    report = checker.verify(summary)
    assert report['checks']['numeric_bounds']['violations'] == ['N']


def test_correlation_problems_fail(checker):
    corr = CorrelationResult(column1='A', column2='B', correlation=0.5,
                             strength=CorrelationStrength.MODERATE, sample_size=3)
    summary = DataSummary(correlations=[corr, corr])

    report = checker.verify(summary)
    messages = [e['message'] for e in report['errors']]

    assert report['checks']['correlations']['status'] == 'fail'
    assert any('Duplicate' in m for m in messages)
    assert any('non-numeric' in m for m in messages)
    assert any('paired values' in m for m in messages)


def test_column_partition_mismatch(checker):
    col = ColumnSummary(name='A', type=ColumnType.CATEGORICAL, unique_values=0, missing_values=0)
    summary = DataSummary(column_count=2, column_summaries=[col])

    report = checker.verify(summary)
    assert report['checks']['columns']['status'] == 'fail'
    assert len(report['errors']) == 2


def test_disabled_checks_are_skipped():
    checker = SummaryChecker(config={'check_recommendations': False})
    summary = DataSummary(recommended_visualizations=[_rec(0.5, x_axis='Ghost')])

    report = checker.verify(summary)
    assert report['status'] == 'pass'
    assert 'recommendations' not in report['checks']


class TestValidateChartFields:
    rows = [{'Region': 'North', 'Sales': 10}]

    def test_valid(self):
        rec = _rec(0.8, x_axis='Region', y_axis='Sales')
        assert validate_chart_fields(self.rows, rec)

    def test_unknown_field(self):
        rec = _rec(0.8, category_field='Region', value_field='Profit')
        assert not validate_chart_fields(self.rows, rec)

    def test_empty_dataset(self):
        assert not validate_chart_fields([], _rec(0.8, x_axis='Region'))
