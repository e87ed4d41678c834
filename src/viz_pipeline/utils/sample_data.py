"""Built-in sample dataset for demos and the CLI ``--sample`` flag."""

from typing import Any, Dict, List

import numpy as np

MONTHS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']
CATEGORIES = ['Product A', 'Product B', 'Product C']


def generate_sample_rows(seed: int = 42) -> List[Dict[str, Any]]:
    """
    Monthly sales figures for three products.

    Args:
        seed: Random seed, the same seed always yields the same rows

    Returns:
        36 rows with Month, Category, Sales, Profit and Units
    """
    rng = np.random.default_rng(seed)
    rows = []

    for month in MONTHS:
        for category in CATEGORIES:
            rows.append({
                'Month': month,
                'Category': category,
                'Sales': int(rng.integers(100, 1100)),
                'Profit': int(rng.integers(50, 550)),
                'Units': int(rng.integers(10, 110)),
            })

    return rows
