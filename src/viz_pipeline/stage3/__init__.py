"""
Stage 3: Chart Recommender

Turns column types, column statistics and correlations into a ranked list
of chart configurations, plus optional dedup/top-N post-processing.
"""

from .recommender import ChartRecommender, deduplicate_recommendations, top_recommendations

__all__ = ['ChartRecommender', 'deduplicate_recommendations', 'top_recommendations']
