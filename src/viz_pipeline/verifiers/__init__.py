"""
Verification checkpoints for the visualization pipeline.

Summary Check: consistency of a DataSummary after analysis
Chart Check: chart field bindings against a dataset
"""

from .summary_check import SummaryChecker
from .chart_check import validate_chart_fields

__all__ = ['SummaryChecker', 'validate_chart_fields']
