"""
File I/O utilities for the visualization pipeline.
Handles loading YAML config, reading tabular files into row records,
and saving JSON reports.
"""

import json
import yaml
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Union
from .logging_utils import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]

SUPPORTED_SUFFIXES = ('.csv', '.xlsx', '.xls', '.json')


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def _to_python(value: Any) -> Any:
    """Convert a pandas/numpy cell into a plain Python scalar or None."""
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.isoformat()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NA or value is pd.NaT:
        return None
    return value


def dataframe_to_rows(df: pd.DataFrame) -> List[Row]:
    """
    Convert a DataFrame into a list of row records.

    Column order follows the DataFrame so the first row's key order is the
    column order. Column labels are stringified.

    Example:
        >>> rows = dataframe_to_rows(pd.DataFrame({'Sales': [100, None]}))
        >>> rows[1]
        {'Sales': None}
    """
    columns = [str(c) for c in df.columns]
    rows = []
    for record in df.itertuples(index=False, name=None):
        rows.append({col: _to_python(val) for col, val in zip(columns, record)})
    return rows


def load_rows(file_path: Union[str, Path], **kwargs) -> List[Row]:
    """
    Load a CSV, Excel or JSON file into row records.

    Args:
        file_path: Path to the data file
        **kwargs: Additional arguments passed to the pandas reader

    Returns:
        List of row dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file extension is not supported

    Example:
        >>> rows = load_rows("data/sales.csv")
        >>> print(f"Loaded {len(rows)} rows")
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file format: {file_path.suffix}. "
            f"Please use one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    logger.info(f"Loading {suffix[1:].upper()}: {file_path}")

    if suffix == '.csv':
        df = pd.read_csv(file_path, skip_blank_lines=True, **kwargs)
    elif suffix == '.json':
        df = pd.read_json(file_path, **kwargs)
    else:
        # first sheet only
        df = pd.read_excel(file_path, sheet_name=0, **kwargs)

    rows = dataframe_to_rows(df)
    logger.info(f"Loaded {len(rows)} rows, {len(df.columns)} columns")

    return rows


def save_json(
    data: Union[Dict, List],
    file_path: Union[str, Path],
    indent: int = 2
) -> None:
    """
    Save data to JSON file.

    Args:
        data: Data to save (dict or list)
        file_path: Output file path
        indent: JSON indentation (default: 2)

    Example:
        >>> save_json(summary.to_dict(), "reports/sales.summary.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving JSON: {file_path}")

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)

    logger.info(f"Saved JSON to: {file_path}")
