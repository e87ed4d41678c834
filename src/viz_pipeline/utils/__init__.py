"""
Utility modules for the visualization pipeline.
Provides common functionality for logging, file I/O, and statistics.
"""

from .logging_utils import setup_logger, get_logger, configure_logging
from .file_utils import load_config, load_rows, dataframe_to_rows, save_json
from .stats_utils import (
    Scalar,
    ValueKind,
    classify_value,
    infer_column_type,
    calculate_numeric_stats,
)
from .sample_data import generate_sample_rows

__all__ = [
    'setup_logger',
    'get_logger',
    'configure_logging',
    'load_config',
    'load_rows',
    'dataframe_to_rows',
    'save_json',
    'Scalar',
    'ValueKind',
    'classify_value',
    'infer_column_type',
    'calculate_numeric_stats',
    'generate_sample_rows',
]
