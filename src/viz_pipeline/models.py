"""Value objects produced by the analysis pipeline.

Every analysis run builds a fresh, independent graph of these models
rooted at DataSummary. All models are frozen once constructed.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ColumnType(str, Enum):
    """Inferred type of a column."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    DATE = "date"
    UNKNOWN = "unknown"


class CorrelationStrength(str, Enum):
    """Fixed bucketing of the absolute correlation coefficient."""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    NONE = "none"


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"
    SCATTER = "scatter"
    HISTOGRAM = "histogram"
    HEATMAP = "heatmap"
    RADAR = "radar"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=False)


class ColumnClassification(_FrozenModel):
    """Partition of the column names by inferred type."""
    numeric: List[str] = Field(default_factory=list)
    categorical: List[str] = Field(default_factory=list)
    date: List[str] = Field(default_factory=list)

    def type_of(self, column: str) -> ColumnType:
        if column in self.numeric:
            return ColumnType.NUMERIC
        if column in self.categorical:
            return ColumnType.CATEGORICAL
        if column in self.date:
            return ColumnType.DATE
        return ColumnType.UNKNOWN


class ColumnSummary(_FrozenModel):
    """Descriptive statistics for a single column."""

    name: str
    type: ColumnType
    unique_values: int = Field(description="Distinct non-missing values, compared by string form")
    missing_values: int = Field(description="Rows where the value is None, NaN or empty")
    null_rate: float = 0.0

    # Numeric columns only; None when no usable value exists
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std: Optional[float] = None
    q25: Optional[float] = None
    q75: Optional[float] = None

    # Date columns only
    min_date: Optional[str] = None
    max_date: Optional[str] = None

    most_frequent: Optional[Union[float, str]] = None
    frequencies: Dict[str, int] = Field(default_factory=dict)
    top_values: Dict[str, int] = Field(default_factory=dict)


class CorrelationResult(_FrozenModel):
    """Pearson correlation for one unordered pair of numeric columns."""
    column1: str
    column2: str
    correlation: float = Field(ge=-1.0, le=1.0)
    strength: CorrelationStrength
    sample_size: int


class VisualizationRecommendation(_FrozenModel):
    """A candidate chart configuration."""

    type: ChartType
    title: str
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    category_field: Optional[str] = None
    value_field: Optional[str] = None
    description: str = ""
    strength: float = Field(ge=0.0, le=1.0, description="Ranking priority, higher first")
    correlation: Optional[float] = Field(
        default=None,
        description="Signed coefficient for charts derived from a correlation"
    )

    @property
    def bound_fields(self) -> List[str]:
        """Column names this chart binds to, in binding order."""
        bound = [self.x_axis, self.y_axis, self.category_field, self.value_field]
        return [f for f in bound if f is not None]

    def dedup_key(self) -> tuple:
        return (self.type, self.x_axis, self.y_axis, self.category_field, self.value_field)


class DataSummary(_FrozenModel):
    """Aggregate result of one analysis run."""

    row_count: int = 0
    column_count: int = 0
    numeric_columns: List[str] = Field(default_factory=list)
    categorical_columns: List[str] = Field(default_factory=list)
    date_columns: List[str] = Field(default_factory=list)
    column_summaries: List[ColumnSummary] = Field(default_factory=list)
    correlations: List[CorrelationResult] = Field(default_factory=list)
    recommended_visualizations: List[VisualizationRecommendation] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "DataSummary":
        return cls()

    def get_column(self, name: str) -> Optional[ColumnSummary]:
        return next((c for c in self.column_summaries if c.name == name), None)

    def correlation_between(self, column1: str, column2: str) -> Optional[CorrelationResult]:
        """Look up a pair in either order."""
        for result in self.correlations:
            if {result.column1, result.column2} == {column1, column2}:
                return result
        return None

    def top_recommendations(
        self,
        n: int = 9,
        deduplicate: bool = True
    ) -> List[VisualizationRecommendation]:
        """Highest-ranked recommendations, optionally without duplicates."""
        from .stage3.recommender import deduplicate_recommendations, top_recommendations

        recs = self.recommended_visualizations
        if deduplicate:
            recs = deduplicate_recommendations(recs)
        return top_recommendations(recs, n)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
