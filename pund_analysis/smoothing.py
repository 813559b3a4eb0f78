"""
Statistics and smoothing primitives shared by the PUND pipeline stages.
"""

import numpy as np
import pandas as pd


def moving_median(values: np.ndarray, window: int) -> np.ndarray:
    """
    Centered moving median whose window shrinks at both ends of the array.

    Args:
        values: 1-D samples
        window: Window width in samples (odd widths are centered exactly)

    Returns:
        Smoothed array with the same length as ``values``
    """
    values = np.asarray(values, dtype=np.float64)
    if window <= 1 or len(values) == 0:
        return values.copy()
    smoothed = pd.Series(values).rolling(window, center=True, min_periods=1).median()
    return smoothed.to_numpy(dtype=np.float64)


def finite_mean(values: np.ndarray) -> float:
    """Mean over finite samples only; 0.0 when nothing is finite."""
    values = np.asarray(values, dtype=np.float64)
    finite = values[np.isfinite(values)]
    if len(finite) == 0:
        return 0.0
    return float(np.mean(finite))


def sample_std(values: np.ndarray) -> float:
    """Sample standard deviation (ddof=1); 0.0 for fewer than two samples."""
    values = np.asarray(values, dtype=np.float64)
    if len(values) < 2:
        return 0.0
    return float(np.std(values, ddof=1))
