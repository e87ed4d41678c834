"""
Statistical utilities for the visualization pipeline.
Provides cell classification, type inference and per-column statistics.
"""

import math
import numbers
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from .logging_utils import get_logger

logger = get_logger(__name__)

_DIGIT = re.compile(r'\d')


class ValueKind(str, Enum):
    MISSING = 'missing'
    NUMBER = 'number'
    TEXT = 'text'


class Scalar(NamedTuple):
    """
    A raw cell value tagged with its kind.

    Attributes:
        kind: missing, number or text
        text: Canonical string form used for unique counts and frequencies
        number: Finite numeric value, also set for numeric-looking text
    """
    kind: ValueKind
    text: Optional[str]
    number: Optional[float]

    @property
    def is_missing(self) -> bool:
        return self.kind is ValueKind.MISSING


MISSING = Scalar(ValueKind.MISSING, None, None)


def format_number(value: float) -> str:
    """
    String form of a number, with integral floats rendered as integers.

    Example:
        >>> format_number(5.0)
        '5'
        >>> format_number(2.5)
        '2.5'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(text: str) -> Optional[float]:
    """Parse text as a finite float, or return None."""
    # float() accepts digit grouping like "1_000"
    if '_' in text:
        return None
    try:
        number = float(text.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def classify_value(value: Any) -> Scalar:
    """
    Tag a raw cell value as missing, number or text.

    Missing means None, NaN (or another pandas NA marker) or the empty
    string. Booleans and datetimes are treated as text.

    Example:
        >>> classify_value("42").number
        42.0
        >>> classify_value("").is_missing
        True
    """
    if value is None:
        return MISSING

    if isinstance(value, str):
        if value == '':
            return MISSING
        return Scalar(ValueKind.TEXT, value, parse_number(value))

    if isinstance(value, (bool, np.bool_)):
        return Scalar(ValueKind.TEXT, str(bool(value)), None)

    if isinstance(value, (datetime, date)):
        if pd.isna(value):
            return MISSING
        return Scalar(ValueKind.TEXT, value.isoformat(), None)

    if isinstance(value, numbers.Number):
        if pd.isna(value):
            return MISSING
        number = float(value)
        if not math.isfinite(number):
            return Scalar(ValueKind.TEXT, str(number), None)
        text = format_number(number) if isinstance(value, (float, np.floating)) else str(value)
        return Scalar(ValueKind.NUMBER, text, number)

    if pd.isna(value):
        return MISSING

    return Scalar(ValueKind.TEXT, str(value), None)


def column_values(rows: Iterable[Mapping[str, Any]], column: str) -> List[Scalar]:
    """Classified values of one column; a key absent from a row reads as missing."""
    return [classify_value(row.get(column)) for row in rows]


def looks_like_date(scalar: Scalar) -> bool:
    """
    Check whether a text value parses as a calendar date.

    Requires at least one digit so that bare month or weekday names
    ("Jan", "Monday") and relative words ("today") are not dates.
    """
    if scalar.kind is not ValueKind.TEXT or not _DIGIT.search(scalar.text):
        return False

    try:
        parsed = pd.to_datetime(scalar.text, errors='coerce')
    except (ValueError, TypeError, OverflowError):
        return False

    return not pd.isna(parsed)


def infer_column_type(
    values: Sequence[Scalar],
    threshold: float = 0.7
) -> str:
    """
    Infer the type of a column from a sample of its values.

    Numeric is checked before date so numeric strings never become dates.
    A column without any non-missing value is categorical.

    Args:
        values: Classified sample values
        threshold: Fraction of non-missing values that must match a type

    Returns:
        One of: 'numeric', 'date', 'categorical'

    Example:
        >>> infer_column_type([classify_value(v) for v in ['1', '2', 'x', '4']])
        'numeric'
    """
    non_empty_count = 0
    numeric_count = 0
    date_count = 0

    for scalar in values:
        if scalar.is_missing:
            continue
        non_empty_count += 1
        if scalar.number is not None:
            numeric_count += 1
        if looks_like_date(scalar):
            date_count += 1

    if non_empty_count == 0:
        return 'categorical'
    if numeric_count / non_empty_count > threshold:
        return 'numeric'
    if date_count / non_empty_count > threshold:
        return 'date'
    return 'categorical'


def frequency_table(values: Iterable[Scalar]) -> Dict[str, int]:
    """Count occurrences of each non-missing value by string form, in first-seen order."""
    frequencies: Dict[str, int] = {}
    for scalar in values:
        if scalar.is_missing:
            continue
        frequencies[scalar.text] = frequencies.get(scalar.text, 0) + 1
    return frequencies


def most_frequent(frequencies: Dict[str, int]) -> Optional[str]:
    """
    Key with the highest count.

    Ties go to the key seen first, since frequencies keeps first-seen order
    and only a strictly greater count replaces the current best.
    """
    best = None
    best_count = 0
    for key, count in frequencies.items():
        if count > best_count:
            best, best_count = key, count
    return best


def top_values(frequencies: Dict[str, int], k: int = 10) -> Dict[str, int]:
    """The k most frequent keys, descending, first-seen order among ties."""
    ranked = sorted(frequencies.items(), key=lambda item: -item[1])
    return dict(ranked[:k])


def calculate_numeric_stats(values: List[float]) -> Dict[str, Optional[float]]:
    """
    Calculate descriptive statistics for the usable values of a numeric column.

    Returns None for every field when there are no values, so NaN never
    leaks into the summary.

    Example:
        >>> calculate_numeric_stats([100.0, 200.0, 150.0])['median']
        150.0
    """
    keys = ('min', 'max', 'mean', 'median', 'std', 'q25', 'q75')
    if not values:
        return dict.fromkeys(keys)

    arr = np.asarray(values, dtype=float)
    lo, hi = float(arr.min()), float(arr.max())

    return {
        'min': lo,
        'max': hi,
        # summation rounding can push the mean of equal values past the bounds
        'mean': min(max(float(arr.mean()), lo), hi),
        'median': float(np.median(arr)),
        'std': float(arr.std(ddof=1)) if len(arr) > 1 else None,
        'q25': float(np.quantile(arr, 0.25)),
        'q75': float(np.quantile(arr, 0.75)),
    }


def calculate_date_range(texts: List[str]) -> Dict[str, Optional[str]]:
    """Earliest and latest parseable dates as ISO strings."""
    result = {'min_date': None, 'max_date': None}
    if not texts:
        return result

    series = pd.Series(texts)
    try:
        parsed = pd.to_datetime(series, errors='coerce', format='mixed')
    except (ValueError, TypeError):
        # mixed UTC offsets cannot share one naive dtype
        parsed = pd.to_datetime(series, errors='coerce', format='mixed', utc=True)
    parsed = parsed.dropna()
    if parsed.empty:
        logger.debug(f"No parseable dates among {len(texts)} values")
        return result

    result['min_date'] = parsed.min().isoformat()
    result['max_date'] = parsed.max().isoformat()
    return result
