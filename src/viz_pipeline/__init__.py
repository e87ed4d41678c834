"""
Visualization pipeline: type inference, column statistics, correlations
and chart recommendations for tabular data.
"""

from .models import (
    ChartType,
    ColumnClassification,
    ColumnSummary,
    ColumnType,
    CorrelationResult,
    CorrelationStrength,
    DataSummary,
    VisualizationRecommendation,
)
from .main import Pipeline, analyze_data

__version__ = '0.1.0'

__all__ = [
    'ChartType',
    'ColumnClassification',
    'ColumnSummary',
    'ColumnType',
    'CorrelationResult',
    'CorrelationStrength',
    'DataSummary',
    'VisualizationRecommendation',
    'Pipeline',
    'analyze_data',
]
