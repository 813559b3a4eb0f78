from typing import Tuple

import numpy as np

from .smoothing import finite_mean


def correct_baseline(current: np.ndarray, n_samples: int = 10) -> Tuple[np.ndarray, float]:
    """Remove the constant leakage offset estimated from the leading samples.

    Returns:
        (corrected_current, offset)
    """
    current = np.asarray(current, dtype=np.float64)
    offset = finite_mean(current[:min(n_samples, len(current))])
    return current - offset, offset
