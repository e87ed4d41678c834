"""Tests for cell classification and statistics helpers."""

import math

import numpy as np
import pytest

from viz_pipeline.utils.stats_utils import (
    ValueKind,
    calculate_date_range,
    calculate_numeric_stats,
    classify_value,
    column_values,
    format_number,
    frequency_table,
    infer_column_type,
    looks_like_date,
    most_frequent,
    top_values,
)


def _classify(values):
    return [classify_value(v) for v in values]


class TestClassifyValue:
    @pytest.mark.parametrize("value", [None, "", float('nan'), np.nan])
    def test_missing_values(self, value):
        assert classify_value(value).is_missing

    def test_whitespace_is_not_missing(self):
        scalar = classify_value(" ")
        assert scalar.kind is ValueKind.TEXT
        assert scalar.number is None

    def test_numbers(self):
        assert classify_value(5) == (ValueKind.NUMBER, '5', 5.0)
        assert classify_value(2.5).number == 2.5
        assert classify_value(np.int64(7)).text == '7'

    def test_integral_float_collapses_with_int(self):
        assert classify_value(5.0).text == classify_value(5).text == classify_value("5").text

    def test_numeric_text(self):
        scalar = classify_value(" 42.5 ")
        assert scalar.kind is ValueKind.TEXT
        assert scalar.number == 42.5

    @pytest.mark.parametrize("text", ["abc", "inf", "nan", "12abc", "1_000"])
    def test_non_numeric_text(self, text):
        assert classify_value(text).number is None

    def test_infinity_is_not_numeric(self):
        scalar = classify_value(math.inf)
        assert scalar.kind is ValueKind.TEXT
        assert scalar.number is None

    def test_bool_is_text(self):
        scalar = classify_value(True)
        assert scalar.kind is ValueKind.TEXT
        assert scalar.number is None


def test_format_number():
    assert format_number(5.0) == '5'
    assert format_number(2.5) == '2.5'
    assert format_number(-3.0) == '-3'


def test_column_values_treats_absent_key_as_missing():
    values = column_values([{'a': 1}, {'b': 2}], 'a')
    assert not values[0].is_missing
    assert values[1].is_missing


class TestLooksLikeDate:
    @pytest.mark.parametrize("text", ["2024-01-15", "2023/12/31", "March 3, 2021"])
    def test_dates(self, text):
        assert looks_like_date(classify_value(text))

    @pytest.mark.parametrize("text", ["Jan", "Monday", "today", "hello world"])
    def test_not_dates(self, text):
        assert not looks_like_date(classify_value(text))

    def test_numbers_are_never_dates(self):
        assert not looks_like_date(classify_value(20240115))


class TestInferColumnType:
    def test_numeric(self):
        assert infer_column_type(_classify([1, 2, "3", 4.5])) == 'numeric'

    def test_numeric_threshold_is_strict(self):
        # exactly 70% numeric stays categorical
        values = [1, 2, 3, 4, 5, 6, 7, "n/a", "n/a", "n/a"]
        assert infer_column_type(_classify(values)) == 'categorical'

        values = [1, 2, 3, 4, 5, 6, 7, 8, "n/a", "n/a"]
        assert infer_column_type(_classify(values)) == 'numeric'

    def test_missing_values_do_not_count(self):
        values = [1, 2, None, "", None, None]
        assert infer_column_type(_classify(values)) == 'numeric'

    def test_empty_column_is_categorical(self):
        assert infer_column_type(_classify([None, "", None])) == 'categorical'
        assert infer_column_type([]) == 'categorical'

    def test_date(self):
        values = ["2024-01-01", "2024-02-01", "2024-03-01", None]
        assert infer_column_type(_classify(values)) == 'date'

    def test_numeric_strings_are_numeric_not_date(self):
        values = ["2020", "2021", "2022", "2023"]
        assert infer_column_type(_classify(values)) == 'numeric'

    def test_month_names_are_categorical(self):
        assert infer_column_type(_classify(["Jan", "Feb", "Mar"])) == 'categorical'


class TestFrequencies:
    def test_frequency_table_uses_string_form(self):
        table = frequency_table(_classify([5, "5", 5.0, "5.0", None, ""]))
        assert table == {'5': 3, '5.0': 1}

    def test_mode_ties_go_to_first_seen(self):
        table = frequency_table(_classify(["b", "a", "a", "b"]))
        assert most_frequent(table) == "b"

    def test_mode_of_empty_table(self):
        assert most_frequent({}) is None

    def test_top_values(self):
        table = {'a': 1, 'b': 3, 'c': 3, 'd': 2}
        assert list(top_values(table, k=3)) == ['b', 'c', 'd']


class TestNumericStats:
    def test_basic(self):
        stats = calculate_numeric_stats([100.0, 200.0, 150.0])
        assert stats['min'] == 100
        assert stats['max'] == 200
        assert stats['mean'] == 150
        assert stats['median'] == 150

    def test_even_count_median_averages_midpoints(self):
        assert calculate_numeric_stats([4.0, 1.0, 3.0, 2.0])['median'] == 2.5

    def test_single_value_has_no_std(self):
        stats = calculate_numeric_stats([7.0])
        assert stats['std'] is None
        assert stats['min'] == stats['max'] == stats['median'] == 7

    def test_empty_yields_none(self):
        stats = calculate_numeric_stats([])
        assert all(value is None for value in stats.values())

    def test_mean_stays_within_bounds(self):
        stats = calculate_numeric_stats([0.1, 0.1, 0.1])
        assert stats['min'] <= stats['mean'] <= stats['max']


def test_calculate_date_range():
    result = calculate_date_range(["2024-03-01", "2024-01-15", "not a date"])
    assert result['min_date'].startswith("2024-01-15")
    assert result['max_date'].startswith("2024-03-01")


def test_calculate_date_range_empty():
    assert calculate_date_range([]) == {'min_date': None, 'max_date': None}


def test_underscore_grouped_text_is_not_numeric():
    values = _classify(["1_000", "2_000", "3_000"])
    assert infer_column_type(values) != 'numeric'
