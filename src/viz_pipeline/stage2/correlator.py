"""
Correlation Engine - Stage 2

Computes the Pearson correlation coefficient for every unordered pair of
numeric columns, over the rows where both values are present and numeric.
Pairs with too few paired observations are omitted rather than scored.
"""

from itertools import combinations
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np

from ..models import CorrelationResult, CorrelationStrength
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import column_values

logger = get_logger(__name__)

# A pair needs more than 5 paired observations to be scored
MIN_PAIRED_SAMPLES = 6


def label_strength(coefficient: float) -> CorrelationStrength:
    """
    Bucket a coefficient by its absolute value.

    Example:
        >>> label_strength(-0.75)
        <CorrelationStrength.STRONG: 'strong'>
    """
    magnitude = abs(coefficient)
    if magnitude > 0.7:
        return CorrelationStrength.STRONG
    if magnitude > 0.4:
        return CorrelationStrength.MODERATE
    if magnitude > 0.2:
        return CorrelationStrength.WEAK
    return CorrelationStrength.NONE


def pearson_correlation(x: np.ndarray, y: np.ndarray) -> float:
    """
    Pearson correlation of two equal-length arrays.

    Returns 0.0 instead of NaN when either side has zero variance.
    The result is clipped to [-1, 1] to absorb floating point error.
    """
    if len(x) < 2:
        return 0.0

    # exact constant check; mean subtraction can leave rounding residue
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0

    x_diff = x - x.mean()
    y_diff = y - y.mean()

    ss_xy = float(np.dot(x_diff, y_diff))
    ss_xx = float(np.dot(x_diff, x_diff))
    ss_yy = float(np.dot(y_diff, y_diff))

    if ss_xx == 0 or ss_yy == 0:
        return 0.0

    coefficient = ss_xy / np.sqrt(ss_xx * ss_yy)
    return float(np.clip(coefficient, -1.0, 1.0))


class CorrelationEngine:
    """
    Stage 2: pairwise correlation across numeric columns.

    Example:
        >>> engine = CorrelationEngine()
        >>> results = engine.find_correlations(rows, ["Sales", "Profit", "Units"])
        >>> for r in results:
        ...     print(r.column1, r.column2, r.strength)
    """

    def find_correlations(
        self,
        rows: Sequence[Mapping[str, Any]],
        numeric_columns: Sequence[str]
    ) -> List[CorrelationResult]:
        """
        Correlate every unordered pair of numeric columns.

        Each pair is emitted once, as (earlier column, later column) in the
        order of numeric_columns.

        Args:
            rows: Full dataset
            numeric_columns: Columns classified numeric by stage 1

        Returns:
            Correlation results for pairs with enough paired samples
        """
        vectors = self._numeric_vectors(rows, numeric_columns)
        results = []
        skipped = 0

        for column1, column2 in combinations(numeric_columns, 2):
            x, y = vectors[column1], vectors[column2]
            paired = ~np.isnan(x) & ~np.isnan(y)
            sample_size = int(paired.sum())

            if sample_size < MIN_PAIRED_SAMPLES:
                logger.debug(
                    f"  Skipping {column1} ~ {column2}: only {sample_size} paired values"
                )
                skipped += 1
                continue

            coefficient = pearson_correlation(x[paired], y[paired])
            results.append(CorrelationResult(
                column1=column1,
                column2=column2,
                correlation=coefficient,
                strength=label_strength(coefficient),
                sample_size=sample_size
            ))

        logger.info(
            f"Computed {len(results)} correlations across {len(numeric_columns)} numeric columns"
            + (f" ({skipped} pairs below the sample gate)" if skipped else "")
        )

        return results

    @staticmethod
    def _numeric_vectors(
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[str]
    ) -> Dict[str, np.ndarray]:
        """Parse each column once into a float array with NaN for unusable cells."""
        vectors = {}
        for column in columns:
            vectors[column] = np.array(
                [np.nan if v.number is None else v.number for v in column_values(rows, column)],
                dtype=float
            )
        return vectors
