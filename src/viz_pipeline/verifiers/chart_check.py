"""
Verification: Chart Check

Checks that a chart configuration can be rendered against a dataset.
"""

from typing import Any, Mapping, Sequence

from ..models import VisualizationRecommendation


def validate_chart_fields(
    rows: Sequence[Mapping[str, Any]],
    recommendation: VisualizationRecommendation
) -> bool:
    """
    Check that every field a chart binds to exists in the dataset.

    The first row defines the column universe, as in the analysis itself.

    Args:
        rows: Dataset rows
        recommendation: Chart configuration to render

    Returns:
        False for an empty dataset or when a bound field is not a column
    """
    if not rows:
        return False

    columns = rows[0].keys()
    return all(field in columns for field in recommendation.bound_fields)
