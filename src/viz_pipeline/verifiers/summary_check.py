"""
Verification: Summary Check

Validates a DataSummary after analysis:
- Column partition (every column typed exactly once)
- Numeric bounds (min <= median, mean <= max)
- Correlation pairs and sample gate
- Recommendation ranking and field bindings
- Missing value warnings
"""

from datetime import datetime
from typing import Any, Dict, Optional

from ..models import ColumnType, DataSummary
from ..stage2.correlator import MIN_PAIRED_SAMPLES
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

# Tolerance for float comparisons of derived statistics
EPSILON = 1e-9


class SummaryChecker:
    """
    Post-analysis consistency checks over a DataSummary.

    Example:
        >>> checker = SummaryChecker()
        >>> report = checker.verify(summary)
        >>> print(report['status'])
        pass
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Summary Checker.

        Args:
            config: Configuration dictionary
        """
        self.config = {
            'check_columns': True,
            'check_numeric_bounds': True,
            'check_correlations': True,
            'check_recommendations': True,
            'warn_missing_values': True,
        }

        if config:
            self.config.update(config)

    def verify(self, summary: DataSummary) -> Dict[str, Any]:
        """
        Verify a DataSummary.

        Args:
            summary: Result of an analysis run

        Returns:
            Verification report with status pass, pass_with_warnings or fail
        """
        report = {
            'timestamp': datetime.now().isoformat(),
            'row_count': summary.row_count,
            'status': 'pass',
            'errors': [],
            'warnings': [],
            'checks': {}
        }

        if self.config['check_columns']:
            self._check_columns(summary, report)

        if self.config['check_numeric_bounds']:
            self._check_numeric_bounds(summary, report)

        if self.config['check_correlations']:
            self._check_correlations(summary, report)

        if self.config['check_recommendations']:
            self._check_recommendations(summary, report)

        if self.config['warn_missing_values']:
            self._check_missing_values(summary, report)

        if report['errors']:
            report['status'] = 'fail'
        elif report['warnings']:
            report['status'] = 'pass_with_warnings'

        logger.info(
            f"Summary check: {report['status']} "
            f"({len(report['errors'])} errors, {len(report['warnings'])} warnings)"
        )

        return report

    def _check_columns(self, summary: DataSummary, report: Dict[str, Any]) -> None:
        """Every summarized column appears in exactly one type bucket."""
        typed = summary.numeric_columns + summary.categorical_columns + summary.date_columns
        names = [c.name for c in summary.column_summaries]
        errors_before = len(report['errors'])

        if len(names) != summary.column_count:
            report['errors'].append({
                'check': 'columns',
                'message': f"column_count is {summary.column_count} but "
                           f"{len(names)} columns were summarized"
            })

        if sorted(typed) != sorted(names):
            report['errors'].append({
                'check': 'columns',
                'message': 'Type buckets do not partition the summarized columns'
            })

        for col in summary.column_summaries:
            if col.type is ColumnType.UNKNOWN:
                report['warnings'].append({
                    'check': 'columns',
                    'message': f"Column '{col.name}' has unknown type"
                })

        failed = len(report['errors']) > errors_before
        report['checks']['columns'] = {'status': 'fail' if failed else 'pass'}

    def _check_numeric_bounds(self, summary: DataSummary, report: Dict[str, Any]) -> None:
        """min <= median <= max and min <= mean <= max."""
        violations = []

        for col in summary.column_summaries:
            if col.type is not ColumnType.NUMERIC or col.min is None:
                continue

            lo, hi = col.min - EPSILON, col.max + EPSILON
            for stat in ('mean', 'median'):
                value = getattr(col, stat)
                if value is None or not lo <= value <= hi:
                    violations.append(col.name)
                    report['errors'].append({
                        'check': 'numeric_bounds',
                        'message': f"{col.name}: {stat}={value} outside [{col.min}, {col.max}]"
                    })

        report['checks']['numeric_bounds'] = {
            'status': 'fail' if violations else 'pass',
            'violations': violations
        }

    def _check_correlations(self, summary: DataSummary, report: Dict[str, Any]) -> None:
        """Pairs unique, both columns numeric, sample gate respected."""
        numeric = set(summary.numeric_columns)
        seen = set()
        problems = 0

        for corr in summary.correlations:
            pair = frozenset((corr.column1, corr.column2))
            label = f"{corr.column1} ~ {corr.column2}"

            if pair in seen:
                problems += 1
                report['errors'].append({
                    'check': 'correlations',
                    'message': f"Duplicate correlation pair: {label}"
                })
            seen.add(pair)

            if not pair <= numeric:
                problems += 1
                report['errors'].append({
                    'check': 'correlations',
                    'message': f"Correlation references non-numeric column: {label}"
                })

            if corr.sample_size < MIN_PAIRED_SAMPLES:
                problems += 1
                report['errors'].append({
                    'check': 'correlations',
                    'message': f"{label} scored on only {corr.sample_size} paired values"
                })

        report['checks']['correlations'] = {
            'status': 'fail' if problems else 'pass',
            'pairs': len(summary.correlations)
        }

    def _check_recommendations(self, summary: DataSummary, report: Dict[str, Any]) -> None:
        """Sorted by non-increasing strength, and every bound field is a column."""
        recs = summary.recommended_visualizations
        columns = {c.name for c in summary.column_summaries}
        problems = 0

        for previous, current in zip(recs, recs[1:]):
            if current.strength > previous.strength:
                problems += 1
                report['errors'].append({
                    'check': 'recommendations',
                    'message': f"'{current.title}' ranked below a weaker recommendation"
                })
                break

        for rec in recs:
            unknown = [f for f in rec.bound_fields if f not in columns]
            if unknown:
                problems += 1
                report['errors'].append({
                    'check': 'recommendations',
                    'message': f"'{rec.title}' binds unknown columns: {unknown}"
                })

        report['checks']['recommendations'] = {
            'status': 'fail' if problems else 'pass',
            'count': len(recs)
        }

    def _check_missing_values(self, summary: DataSummary, report: Dict[str, Any]) -> None:
        with_missing = [c.name for c in summary.column_summaries if c.missing_values > 0]

        if with_missing:
            report['warnings'].append({
                'check': 'missing_values',
                'message': f"{len(with_missing)} columns have missing values: {with_missing}"
            })

        report['checks']['missing_values'] = {
            'status': 'warning' if with_missing else 'pass',
            'columns': with_missing
        }
