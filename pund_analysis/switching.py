"""
Ferroelectric switching current and charge from validated PUND groups.

The switching (P, N) and non-switching (U, D) pulses carry the same
capacitive and leakage current; subtracting them leaves the ferroelectric
switching contribution I_FE, whose time integral is the switched charge Q_FE.
"""

from typing import List, Tuple

import numpy as np

from .grouping import PULSES_PER_GROUP, PulseGroup

# 1-based position of the switching pulses inside a group (poling = 1)
P_ROLE = 2
N_ROLE = 4


def subtract_aligned(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Sample-wise ``a - b``.

    When the pulses differ in length, ``b`` is resampled onto ``len(a)``
    samples by taking the nearest sample at evenly spaced fractional
    positions across ``b``.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if len(a) == len(b):
        return a - b
    if len(b) == 0:
        raise ValueError("cannot align against an empty pulse")
    idx = np.round(np.linspace(0, len(b) - 1, len(a))).astype(int)
    return a - b[idx]


def label_pulses(groups: List[PulseGroup], n_samples: int) -> Tuple[np.ndarray, np.ndarray]:
    """Build the per-sample ``polarity`` (int8) and ``pulse_index`` (int32) columns."""
    polarity = np.zeros(n_samples, dtype=np.int8)
    pulse_index = np.zeros(n_samples, dtype=np.int32)
    for number, group in enumerate(groups, start=1):
        polarity[group.p.slice] = 1
        polarity[group.u.slice] = 1
        polarity[group.n.slice] = -1
        polarity[group.d.slice] = -1
        first = (number - 1) * PULSES_PER_GROUP + 1
        for offset, pulse in enumerate(group):
            pulse_index[pulse.slice] = first + offset
    return polarity, pulse_index


def extract_switching_current(current: np.ndarray, groups: List[PulseGroup]) -> np.ndarray:
    """I_FE = I[P] - I[U] inside P pulses and I[N] - I[D] inside N pulses; 0 elsewhere."""
    current = np.asarray(current, dtype=np.float64)
    i_fe = np.zeros(len(current), dtype=np.float64)
    for group in groups:
        i_fe[group.p.slice] = subtract_aligned(current[group.p.slice], current[group.u.slice])
        i_fe[group.n.slice] = subtract_aligned(current[group.n.slice], current[group.d.slice])
    return i_fe


def switching_mask(pulse_index: np.ndarray) -> np.ndarray:
    """True for samples inside a P or N pulse."""
    role = np.asarray(pulse_index) % PULSES_PER_GROUP
    return (role == P_ROLE) | (role == N_ROLE)


def charge_increments(time: np.ndarray, switching_current: np.ndarray) -> np.ndarray:
    """dQ[i] = I_FE[i] * (t[i] - t[i-1]) with dQ[0] = 0."""
    time = np.asarray(time, dtype=np.float64)
    if len(time) == 0:
        return np.zeros(0, dtype=np.float64)
    dt = np.concatenate(([0.0], np.diff(time)))
    return np.asarray(switching_current, dtype=np.float64) * dt


def integrate_switching_charge(
    time: np.ndarray,
    switching_current: np.ndarray,
    pulse_index: np.ndarray,
) -> np.ndarray:
    """
    Cumulative switching charge, gated to P and N pulses.

    The accumulator only advances inside P/N pulses and is never reset, so the
    charge carries over from one repetition to the next. Samples outside P/N
    pulses are NaN.
    """
    dq = charge_increments(time, switching_current)
    gate = switching_mask(pulse_index)
    q = np.cumsum(np.where(gate, dq, 0.0))
    return np.where(gate, q, np.nan)
