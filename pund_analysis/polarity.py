import logging
from typing import List, Tuple

import numpy as np

from .errors import InconsistentPolarity
from .segmentation import Pulse

logger = logging.getLogger(__name__)


def count_polarity_mismatches(
    voltage: np.ndarray,
    current: np.ndarray,
    pulses: List[Pulse],
) -> Tuple[int, int]:
    """
    Compare the sign of mean voltage and mean current over each pulse's first half.

    Only the first half is used because the mean over a whole triangular pulse
    is dominated by the capacitive dV/dt current, which averages to ~0.
    Pulses where either mean is zero (or not finite) are not counted.

    Returns:
        (mismatches, total_compared)
    """
    mismatches = 0
    total = 0
    for pulse in pulses:
        window = pulse.first_half
        if window.stop <= window.start:
            continue
        v_avg = float(np.mean(voltage[window]))
        i_avg = float(np.mean(current[window]))
        if abs(v_avg) > 0 and abs(i_avg) > 0:
            total += 1
            if np.sign(v_avg) != np.sign(i_avg):
                mismatches += 1
    return mismatches, total


def align_polarity(
    voltage: np.ndarray,
    current: np.ndarray,
    pulses: List[Pulse],
    debug: bool = False,
) -> Tuple[np.ndarray, bool]:
    """Flip the current sign when every compared pulse disagrees with its voltage.

    Returns:
        (current, flipped) where ``current`` is a new array

    Raises:
        InconsistentPolarity: if only some of the compared pulses are misaligned
    """
    voltage = np.asarray(voltage, dtype=np.float64)
    current = np.asarray(current, dtype=np.float64)
    mismatches, total = count_polarity_mismatches(voltage, current, pulses)
    if debug:
        logger.debug(f"polarity check: {mismatches}/{total} compared pulses misaligned")

    if total > 0 and mismatches == total:
        logger.info(f"Current polarity inverted on all {total} pulses; flipping current sign")
        return -current, True
    if mismatches > 0:
        raise InconsistentPolarity(mismatches, total)
    return current.copy(), False
