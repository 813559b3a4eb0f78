"""
Pulse segmentation for PUND voltage waveforms.

Triangular pulses are located from the smoothed first difference of the
voltage trace:

1. dV is smoothed with a moving median to suppress sample noise
2. samples whose |dV| exceeds a multiple of the leading noise level are marked
3. marks are dilated so the ramp up and ramp down of one triangle form a
   single contiguous run
4. runs that are too short or too small in amplitude are discarded
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from scipy.ndimage import binary_dilation

from .config import PundThresholds
from .errors import NoValidPulses
from .smoothing import finite_mean, moving_median, sample_std

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pulse:
    """Inclusive sample range ``[start, end]`` of one detected voltage pulse."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    @property
    def slice(self):
        return slice(self.start, self.end + 1)

    @property
    def first_half(self):
        return slice(self.start, self.start + len(self) // 2)


def true_runs(mask: np.ndarray) -> List[Pulse]:
    """Return the maximal contiguous runs of True samples in ``mask``."""
    mask = np.asarray(mask, dtype=bool)
    if len(mask) == 0:
        return []
    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    edges = np.diff(padded)
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1) - 1
    return [Pulse(int(s), int(e)) for s, e in zip(starts, ends)]


def smoothed_derivative(voltage: np.ndarray, window: int = 9) -> np.ndarray:
    """First difference of voltage (``dV[0] = 0``) smoothed by a moving median."""
    voltage = np.asarray(voltage, dtype=np.float64)
    if len(voltage) == 0:
        return voltage.copy()
    dv = np.concatenate(([0.0], np.diff(voltage)))
    return moving_median(dv, window)


def expand_mask(mask: np.ndarray, window: int) -> np.ndarray:
    """Mark every non-edge sample that has a marked neighbour within +/- ``window``.

    The first and last ``window`` samples keep their original marks.
    """
    mask = np.asarray(mask, dtype=bool)
    n = len(mask)
    if window <= 0 or n <= 2 * window:
        return mask.copy()
    dilated = binary_dilation(mask, structure=np.ones(2 * window + 1, dtype=bool))
    expanded = mask.copy()
    expanded[window:n - window] = dilated[window:n - window]
    return expanded


def filter_candidates(
    candidates: List[Pulse],
    voltage: np.ndarray,
    min_length: int,
    min_amplitude: float,
) -> List[Pulse]:
    """Keep runs that are long enough and reach the minimum voltage amplitude."""
    voltage = np.asarray(voltage, dtype=np.float64)
    pulses = []
    for pulse in candidates:
        if len(pulse) < min_length:
            continue
        peak = np.max(np.abs(voltage[pulse.slice]))
        if peak >= min_amplitude:
            pulses.append(pulse)
    return pulses


def detect_pulses(
    voltage: np.ndarray,
    thresholds: Optional[PundThresholds] = None,
    debug: bool = False,
) -> List[Pulse]:
    """
    Detect triangular voltage pulses.

    Args:
        voltage: Voltage samples (V)
        thresholds: Detection thresholds; defaults to ``PundThresholds()``
        debug: Log thresholds and candidate counts

    Returns:
        Pulses in sample order

    Raises:
        NoValidPulses: if no candidate survives filtering
    """
    t = thresholds or PundThresholds()
    voltage = np.asarray(voltage, dtype=np.float64)
    n = len(voltage)
    if n == 0:
        raise NoValidPulses("no valid pulses found; voltage trace is empty")

    dv = smoothed_derivative(voltage, t.median_window)
    n_noise = min(max(2, min(t.noise_samples, n // 10)), n)
    noise = sample_std(dv[:n_noise])
    dv_threshold = noise * t.derivative_threshold_factor
    pulse_mask = np.abs(dv) > dv_threshold

    expanded = expand_mask(pulse_mask, t.expansion_window)
    candidates = true_runs(expanded)

    baseline_v = finite_mean(np.abs(voltage[:min(t.amplitude_baseline_samples, n)]))
    min_amplitude = baseline_v * t.amplitude_threshold_factor
    pulses = filter_candidates(candidates, voltage, t.min_pulse_length, min_amplitude)

    if debug:
        logger.debug(
            f"dV noise={noise:.3e} (first {n_noise} samples), threshold={dv_threshold:.3e}, "
            f"marked={int(pulse_mask.sum())}, expanded={int(expanded.sum())}"
        )
        logger.debug(
            f"{len(candidates)} candidate runs; min length={t.min_pulse_length}, "
            f"min amplitude={min_amplitude:.3e} V; kept {len(pulses)}"
        )

    if not pulses:
        raise NoValidPulses()
    return pulses
