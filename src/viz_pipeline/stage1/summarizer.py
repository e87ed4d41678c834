"""
Summarizer - Stage 1

Classifies the columns of a dataset and computes per-column statistics:
- Column types (numeric, categorical, date) inferred from a bounded sample
- Missing and unique value counts, frequency tables and modes
- Numeric ranges, central tendency and spread
- Date ranges

Output: ColumnClassification and a list of ColumnSummary objects.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import ColumnClassification, ColumnSummary, ColumnType
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import (
    calculate_date_range,
    calculate_numeric_stats,
    classify_value,
    column_values,
    frequency_table,
    infer_column_type,
    most_frequent,
    top_values,
)

logger = get_logger(__name__)

Row = Mapping[str, Any]


class Summarizer:
    """
    Stage 1: column classification and statistics.

    Example:
        >>> summarizer = Summarizer(config={"sample_size": 50})
        >>> classification = summarizer.classify_columns(rows, ["Month", "Sales"])
        >>> summaries = summarizer.summarize_columns(rows, ["Month", "Sales"], classification)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Summarizer.

        Args:
            config: Configuration dict (the ``summarizer`` section of pipeline_config.yaml)
        """
        self.config = {
            'sample_size': 100,
            'type_threshold': 0.7,
            'top_k_values': 10,
        }

        if config:
            self.config.update(config)

    def classify_columns(
        self,
        rows: Sequence[Row],
        column_names: Sequence[str]
    ) -> ColumnClassification:
        """
        Classify every column using the first ``sample_size`` rows.

        Args:
            rows: Dataset rows
            column_names: Column universe (keys of the first row)

        Returns:
            Disjoint numeric/categorical/date lists covering all columns
        """
        sample = rows[:min(self.config['sample_size'], len(rows))]
        buckets: Dict[str, List[str]] = {'numeric': [], 'categorical': [], 'date': []}

        for column in column_names:
            values = column_values(sample, column)
            col_type = infer_column_type(values, threshold=self.config['type_threshold'])
            buckets[col_type].append(column)
            logger.debug(f"  {column}: {col_type}")

        logger.info(
            f"Classified {len(column_names)} columns from {len(sample)} sample rows: "
            f"{len(buckets['numeric'])} numeric, {len(buckets['categorical'])} categorical, "
            f"{len(buckets['date'])} date"
        )

        return ColumnClassification(**buckets)

    def summarize_columns(
        self,
        rows: Sequence[Row],
        column_names: Sequence[str],
        classification: ColumnClassification
    ) -> List[ColumnSummary]:
        """Summarize each column over the full dataset, in column order."""
        return [
            self.summarize_column(rows, column, classification.type_of(column))
            for column in column_names
        ]

    def summarize_column(
        self,
        rows: Sequence[Row],
        column: str,
        col_type: ColumnType
    ) -> ColumnSummary:
        """
        Summarize a single column.

        Args:
            rows: Full dataset (not just the type-inference sample)
            column: Column name
            col_type: Type assigned by classify_columns

        Returns:
            ColumnSummary; numeric fields are None when no value is usable
        """
        values = column_values(rows, column)
        missing = sum(1 for v in values if v.is_missing)
        frequencies = frequency_table(values)

        summary: Dict[str, Any] = {
            'name': column,
            'type': col_type,
            'unique_values': len(frequencies),
            'missing_values': missing,
            'null_rate': missing / len(rows) if rows else 0.0,
            'most_frequent': self._mode(frequencies, col_type),
            'frequencies': frequencies,
            'top_values': top_values(frequencies, self.config['top_k_values']),
        }

        if col_type is ColumnType.NUMERIC:
            numbers = [v.number for v in values if v.number is not None]
            skipped = len(values) - missing - len(numbers)
            if skipped:
                logger.debug(f"  {column}: ignored {skipped} non-numeric values")
            summary.update(calculate_numeric_stats(numbers))

        elif col_type is ColumnType.DATE:
            summary.update(calculate_date_range([v.text for v in values if not v.is_missing]))

        return ColumnSummary(**summary)

    @staticmethod
    def _mode(frequencies: Dict[str, int], col_type: ColumnType):
        """Most frequent value, as a number for numeric columns when it parses."""
        mode = most_frequent(frequencies)
        if mode is None or col_type is not ColumnType.NUMERIC:
            return mode

        number = classify_value(mode).number
        return number if number is not None else mode
