"""
Main Pipeline Orchestrator

Runs the three analysis stages in dependency order and assembles the
DataSummary handed to rendering and export collaborators.

Usage:
    # Analyze a file and print the top recommendations
    viz-pipeline --input data/sales.csv

    # Write the full summary and verification report
    viz-pipeline --input data/sales.xlsx --output reports/sales.json

    # Analyze the built-in sample dataset
    viz-pipeline --sample --top 5
"""

import argparse
import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .config import Config, get_config
from .models import DataSummary
from .stage1.summarizer import Summarizer
from .stage2.correlator import CorrelationEngine
from .stage3.recommender import ChartRecommender
from .utils.file_utils import load_rows, save_json
from .utils.logging_utils import configure_logging, get_logger
from .utils.sample_data import generate_sample_rows
from .verifiers.summary_check import SummaryChecker

logger = get_logger(__name__)


class Pipeline:
    """
    Analysis facade.

    Each call to analyze() is independent: nothing from one run is kept
    on the pipeline or shared with the next.

    Example:
        >>> pipeline = Pipeline()
        >>> summary = pipeline.analyze(rows)
        >>> print(summary.recommended_visualizations[0].title)
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the pipeline.

        Args:
            config: Loaded configuration (built-in defaults when omitted)
        """
        self.config = config if config is not None else Config.defaults()

    def analyze(self, rows: Sequence[Mapping[str, Any]]) -> DataSummary:
        """
        Analyze a dataset.

        Columns are the keys of the first row. Never raises on empty input.

        Args:
            rows: Ordered row records

        Returns:
            DataSummary, zero-valued when rows is empty
        """
        rows = list(rows)

        if not rows:
            logger.info("Empty dataset, returning empty summary")
            return DataSummary.empty()

        column_names = list(rows[0].keys())
        logger.info(f"Analyzing {len(rows)} rows, {len(column_names)} columns")

        classification, column_summaries = self.run_stage1(rows, column_names)
        correlations = self.run_stage2(rows, classification.numeric)
        recommendations = self.run_stage3(classification, column_summaries, correlations)

        return DataSummary(
            row_count=len(rows),
            column_count=len(column_names),
            numeric_columns=classification.numeric,
            categorical_columns=classification.categorical,
            date_columns=classification.date,
            column_summaries=column_summaries,
            correlations=correlations,
            recommended_visualizations=recommendations
        )

    def run_stage1(self, rows, column_names):
        """Run Stage 1: type inference and column statistics."""
        summarizer = Summarizer(config=self.config.get_stage_config('summarizer'))

        classification = summarizer.classify_columns(rows, column_names)
        column_summaries = summarizer.summarize_columns(rows, column_names, classification)

        return classification, column_summaries

    def run_stage2(self, rows, numeric_columns):
        """Run Stage 2: pairwise correlations."""
        return CorrelationEngine().find_correlations(rows, numeric_columns)

    def run_stage3(self, classification, column_summaries, correlations):
        """Run Stage 3: chart recommendations."""
        recommender = ChartRecommender(config=self.config.get_stage_config('recommender'))
        return recommender.recommend(classification, column_summaries, correlations)

    def verify(self, summary: DataSummary) -> Dict[str, Any]:
        """Run the summary verification checkpoint."""
        checker = SummaryChecker(config=self.config.get_stage_config('verification'))
        return checker.verify(summary)


def analyze_data(
    rows: Sequence[Mapping[str, Any]],
    config: Optional[Config] = None
) -> DataSummary:
    """
    Analyze a dataset with a fresh pipeline.

    Example:
        >>> summary = analyze_data([{'Month': 'Jan', 'Sales': 100}])
        >>> summary.numeric_columns
        ['Sales']
    """
    return Pipeline(config).analyze(rows)


def _print_summary(summary: DataSummary, top: List) -> None:
    print("\n" + "=" * 80)
    print("DATA SUMMARY")
    print("=" * 80)
    print(f"Rows: {summary.row_count}    Columns: {summary.column_count}")
    print(f"Numeric:     {', '.join(summary.numeric_columns) or '-'}")
    print(f"Categorical: {', '.join(summary.categorical_columns) or '-'}")
    print(f"Date:        {', '.join(summary.date_columns) or '-'}")

    if summary.correlations:
        print("\nCorrelations:")
        for corr in summary.correlations:
            print(f"  {corr.column1} ~ {corr.column2}: "
                  f"{corr.correlation:+.2f} ({corr.strength.value})")

    print(f"\nTop {len(top)} of {len(summary.recommended_visualizations)} recommendations:")
    for i, rec in enumerate(top, 1):
        print(f"[{i}] {rec.type.value.upper()}: {rec.title} (strength {rec.strength:.2f})")
        print(f"    {rec.description}")
    print()


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point for the pipeline.

    Usage:
        viz-pipeline --input data/sales.csv
        viz-pipeline --sample --output reports/sample.json
    """
    parser = argparse.ArgumentParser(
        description="Analyze tabular data and recommend charts",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--input',
        help='CSV, Excel or JSON file to analyze'
    )
    source.add_argument(
        '--sample',
        action='store_true',
        help='Analyze the built-in sample dataset'
    )

    parser.add_argument(
        '--output',
        help='Write the summary and verification report as JSON'
    )
    parser.add_argument(
        '--top',
        type=_non_negative_int,
        default=None,
        help='Number of recommendations to show (default: report.top_n, 9)'
    )
    parser.add_argument(
        '--no-dedupe',
        action='store_true',
        help='Keep duplicate chart configurations in the top list'
    )
    parser.add_argument(
        '--config',
        help='Path to config file (default: config/pipeline_config.yaml)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    config = get_config(args.config)
    configure_logging(config.get_stage_config('logging'), verbose=args.verbose)

    if args.sample:
        rows = generate_sample_rows(seed=config.get('sample.seed', 42))
    else:
        try:
            rows = load_rows(args.input)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Failed to load {args.input}: {e}")
            return 1

    pipeline = Pipeline(config)
    summary = pipeline.analyze(rows)
    report = pipeline.verify(summary)

    top_n = args.top if args.top is not None else config.get('report.top_n', 9)
    dedupe = not args.no_dedupe and config.get('report.deduplicate', True)
    _print_summary(summary, summary.top_recommendations(top_n, deduplicate=dedupe))

    if args.output:
        save_json({'summary': summary.to_dict(), 'verification': report}, args.output)
        print(f"✓ Summary saved to: {args.output}")

    return 0 if report['status'] != 'fail' else 1


if __name__ == '__main__':
    sys.exit(main())
