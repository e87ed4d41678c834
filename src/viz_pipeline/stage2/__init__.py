"""
Stage 2: Correlation Engine

Computes pairwise Pearson correlations across numeric columns using
pairwise complete-case deletion.
"""

from .correlator import CorrelationEngine, label_strength, pearson_correlation

__all__ = ['CorrelationEngine', 'label_strength', 'pearson_correlation']
