"""
Chart Recommender - Stage 3

Maps column types, column statistics and correlations onto candidate chart
configurations. Each rule appends independently; no rule suppresses
another. The result is ranked by strength, highest first, with emission
order kept among equal strengths.

Output: ranked list of VisualizationRecommendation.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models import (
    ChartType,
    ColumnClassification,
    ColumnSummary,
    CorrelationResult,
    CorrelationStrength,
    VisualizationRecommendation,
)
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_STRENGTHS = {
    'time_series_line': 0.9,
    'time_series_area': 0.85,
    'bar': 0.8,
    'pie': 0.7,
    'heatmap': 0.65,
    'radar': 0.6,
    'histogram': 0.5,
}


class ChartRecommender:
    """
    Stage 3: rule-based chart recommendation.

    Pure and deterministic: the same inputs always give the same list.

    Example:
        >>> recommender = ChartRecommender(config={'max_bar_categories': 15})
        >>> recs = recommender.recommend(classification, summaries, correlations)
        >>> print(recs[0].title)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Chart Recommender.

        Args:
            config: Configuration dict (the ``recommender`` section of pipeline_config.yaml)
        """
        self.config = {
            'min_bar_categories': 1,
            'max_bar_categories': 20,
            'min_pie_categories': 2,
            'max_pie_categories': 8,
            'heatmap_min_numeric_columns': 4,
            'strengths': dict(DEFAULT_STRENGTHS),
        }

        if config:
            strengths = config.get('strengths')
            self.config.update({k: v for k, v in config.items() if k != 'strengths'})
            if strengths:
                self.config['strengths'].update(strengths)

    def recommend(
        self,
        classification: ColumnClassification,
        column_summaries: Sequence[ColumnSummary],
        correlations: Sequence[CorrelationResult]
    ) -> List[VisualizationRecommendation]:
        """
        Generate ranked chart recommendations.

        Args:
            classification: Column type partition from stage 1
            column_summaries: Column statistics from stage 1
            correlations: Correlation results from stage 2

        Returns:
            Recommendations sorted by non-increasing strength
        """
        summaries = {s.name: s for s in column_summaries}
        recs: List[VisualizationRecommendation] = []

        recs.extend(self._suggest_category_charts(classification, summaries))
        recs.extend(self._suggest_correlation_charts(correlations))
        recs.extend(self._suggest_time_series_charts(classification))
        recs.extend(self._suggest_histograms(classification))
        recs.extend(self._suggest_heatmap(classification))
        recs.extend(self._suggest_radar(classification))

        # sorted() is stable, so equal strengths keep emission order
        ranked = sorted(recs, key=lambda r: -r.strength)

        logger.info(f"Generated {len(ranked)} chart recommendations")

        return ranked

    def _strength(self, rule: str) -> float:
        return float(self.config['strengths'][rule])

    def _suggest_category_charts(
        self,
        classification: ColumnClassification,
        summaries: Dict[str, ColumnSummary]
    ) -> List[VisualizationRecommendation]:
        """
        Bar charts for every readable categorical x numeric pairing, and pie
        charts where the category count is small enough for slices.
        """
        recs = []

        for cat_col in classification.categorical:
            summary = summaries.get(cat_col)
            if summary is None:
                continue

            cardinality = summary.unique_values
            bar_ok = self.config['min_bar_categories'] <= cardinality <= self.config['max_bar_categories']
            pie_ok = self.config['min_pie_categories'] <= cardinality <= self.config['max_pie_categories']

            if not (bar_ok or pie_ok):
                logger.debug(f"  Skipping {cat_col} for bar/pie: {cardinality} categories")
                continue

            for num_col in classification.numeric:
                if bar_ok:
                    recs.append(VisualizationRecommendation(
                        type=ChartType.BAR,
                        title=f"{num_col} by {cat_col}",
                        x_axis=cat_col,
                        y_axis=num_col,
                        description=f"Compare {num_col} across different {cat_col} categories",
                        strength=self._strength('bar')
                    ))

                if pie_ok:
                    recs.append(VisualizationRecommendation(
                        type=ChartType.PIE,
                        title=f"Distribution of {num_col} by {cat_col}",
                        category_field=cat_col,
                        value_field=num_col,
                        description=f"Show proportion of {num_col} across {cat_col} categories",
                        strength=self._strength('pie')
                    ))

        return recs

    def _suggest_correlation_charts(
        self,
        correlations: Sequence[CorrelationResult]
    ) -> List[VisualizationRecommendation]:
        """Scatter plots for correlated pairs, plus trend lines when strong or moderate."""
        recs = []

        for corr in correlations:
            if corr.strength is CorrelationStrength.NONE:
                continue

            strength = abs(corr.correlation)

            recs.append(VisualizationRecommendation(
                type=ChartType.SCATTER,
                title=f"Correlation between {corr.column1} and {corr.column2}",
                x_axis=corr.column1,
                y_axis=corr.column2,
                description=(
                    f"{corr.strength.value} correlation ({corr.correlation:.2f}) "
                    f"between {corr.column1} and {corr.column2}"
                ),
                strength=strength,
                correlation=corr.correlation
            ))

            if corr.strength in (CorrelationStrength.STRONG, CorrelationStrength.MODERATE):
                recs.append(VisualizationRecommendation(
                    type=ChartType.LINE,
                    title=f"Trend of {corr.column2} vs {corr.column1}",
                    x_axis=corr.column1,
                    y_axis=corr.column2,
                    description=(
                        f"Trend line showing relationship between "
                        f"{corr.column1} and {corr.column2}"
                    ),
                    strength=strength,
                    correlation=corr.correlation
                ))

        return recs

    def _suggest_time_series_charts(
        self,
        classification: ColumnClassification
    ) -> List[VisualizationRecommendation]:
        """Line and area charts for every date x numeric pairing."""
        recs = []

        for date_col in classification.date:
            for num_col in classification.numeric:
                recs.append(VisualizationRecommendation(
                    type=ChartType.LINE,
                    title=f"{num_col} over {date_col}",
                    x_axis=date_col,
                    y_axis=num_col,
                    description=f"Track changes in {num_col} over time",
                    strength=self._strength('time_series_line')
                ))
                recs.append(VisualizationRecommendation(
                    type=ChartType.AREA,
                    title=f"{num_col} area chart over {date_col}",
                    x_axis=date_col,
                    y_axis=num_col,
                    description=f"Visualize area under {num_col} curve over time",
                    strength=self._strength('time_series_area')
                ))

        return recs

    def _suggest_histograms(
        self,
        classification: ColumnClassification
    ) -> List[VisualizationRecommendation]:
        return [
            VisualizationRecommendation(
                type=ChartType.HISTOGRAM,
                title=f"Distribution of {num_col}",
                x_axis=num_col,
                description=f"Histogram showing the distribution of values for {num_col}",
                strength=self._strength('histogram')
            )
            for num_col in classification.numeric
        ]

    def _suggest_heatmap(
        self,
        classification: ColumnClassification
    ) -> List[VisualizationRecommendation]:
        """
        One heatmap when there are enough numeric columns.

        Binds the first three numeric columns as placeholders rather than
        the most correlated ones.
        """
        numeric = classification.numeric
        if len(numeric) < self.config['heatmap_min_numeric_columns']:
            return []

        return [VisualizationRecommendation(
            type=ChartType.HEATMAP,
            title="Correlation Heatmap",
            x_axis=numeric[0],
            y_axis=numeric[1],
            value_field=numeric[2],
            description="Heatmap showing correlations between numeric variables",
            strength=self._strength('heatmap')
        )]

    def _suggest_radar(
        self,
        classification: ColumnClassification
    ) -> List[VisualizationRecommendation]:
        """One radar chart over the first categorical and first numeric column."""
        if not classification.categorical or not classification.numeric:
            return []

        cat_col = classification.categorical[0]
        num_col = classification.numeric[0]

        return [VisualizationRecommendation(
            type=ChartType.RADAR,
            title=f"{num_col} by {cat_col} (Radar)",
            category_field=cat_col,
            value_field=num_col,
            description=f"Radar chart showing {num_col} across different {cat_col} categories",
            strength=self._strength('radar')
        )]


def deduplicate_recommendations(
    recommendations: Iterable[VisualizationRecommendation]
) -> List[VisualizationRecommendation]:
    """
    Drop recommendations with the same chart type and field bindings.

    The first occurrence wins, so on a ranked list the highest-strength
    duplicate is kept.
    """
    seen = set()
    unique = []
    for rec in recommendations:
        key = rec.dedup_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(rec)
    return unique


def top_recommendations(
    recommendations: Sequence[VisualizationRecommendation],
    n: int = 9
) -> List[VisualizationRecommendation]:
    """First n recommendations of a ranked list."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return list(recommendations[:n])
