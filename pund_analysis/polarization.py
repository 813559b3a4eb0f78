"""
Remnant charge and polarization from an analysed PUND table.

The cumulative switching charge drifts over a sequence, so it is centred on
its mean before being read as a hysteresis loop. Dividing by the capacitor
area gives polarization.
"""

from typing import Dict, List

import numpy as np
import pandas as pd

from .grouping import PULSES_PER_GROUP
from .switching import N_ROLE, P_ROLE


def center_charge(charge: np.ndarray) -> np.ndarray:
    """Subtract the mean over non-NaN samples; NaN samples stay NaN."""
    charge = np.asarray(charge, dtype=np.float64)
    valid = ~np.isnan(charge)
    if not valid.any():
        return charge.copy()
    return charge - np.mean(charge[valid])


def remnant_polarization(charge: np.ndarray, area: float) -> np.ndarray:
    """Centred charge per unit area (C/m^2 for an area in m^2)."""
    if not area > 0:
        raise ValueError(f"device area must be positive, got {area}")
    return center_charge(charge) / area


def repetition_masks(pulse_index: np.ndarray) -> List[np.ndarray]:
    """One boolean mask per PUND repetition covering its five pulses."""
    pulse_index = np.asarray(pulse_index)
    n_reps = int(pulse_index.max()) // PULSES_PER_GROUP if len(pulse_index) else 0
    masks = []
    for rep in range(n_reps):
        first = rep * PULSES_PER_GROUP + 1
        masks.append((pulse_index >= first) & (pulse_index < first + PULSES_PER_GROUP))
    return masks


def _pulse_charge(charge: np.ndarray, pulse_index: np.ndarray, number: int) -> float:
    in_pulse = np.flatnonzero(pulse_index == number)
    if len(in_pulse) == 0:
        return float("nan")
    # Q_FE is cumulative; charge switched in the pulse is its end minus its entry level
    end = charge[in_pulse[-1]]
    before = charge[:in_pulse[0]]
    before = before[~np.isnan(before)]
    start = before[-1] if len(before) else 0.0
    return float(end - start)


def remnant_charge_per_cycle(table: pd.DataFrame) -> pd.DataFrame:
    """
    Charge switched by the P and N pulses of every repetition.

    Returns:
        DataFrame with columns repetition, q_p, q_n and q_remnant, where
        q_remnant = (q_p - q_n) / 2 is the remnant charge (Pr * area)
    """
    charge = table["cumulative_charge"].to_numpy(dtype=np.float64)
    pulse_index = table["pulse_index"].to_numpy()
    rows: List[Dict[str, float]] = []
    for rep in range(len(repetition_masks(pulse_index))):
        base = rep * PULSES_PER_GROUP
        q_p = _pulse_charge(charge, pulse_index, base + P_ROLE)
        q_n = _pulse_charge(charge, pulse_index, base + N_ROLE)
        rows.append({
            "repetition": rep + 1,
            "q_p": q_p,
            "q_n": q_n,
            "q_remnant": 0.5 * (q_p - q_n),
        })
    return pd.DataFrame(rows, columns=["repetition", "q_p", "q_n", "q_remnant"])
