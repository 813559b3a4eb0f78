"""
Oxide breakdown summary for I-V sweeps.
"""

from typing import Any, Dict

import numpy as np
import pandas as pd


def analyze_breakdown(
    df: pd.DataFrame,
    threshold_current: float = 1e-6,
    current_column: str = "current1",
) -> Dict[str, Any]:
    """
    Find the breakdown point of a voltage sweep.

    Breakdown is the first sample whose |I| exceeds ``threshold_current``.
    Leakage is the mean |I| up to five samples before breakdown, or over the
    whole sweep when the device never breaks down.

    Args:
        df: I-V table with ``voltage`` and ``current_column``
        threshold_current: Breakdown current criterion (A)
        current_column: Column holding the measured current

    Returns:
        dict with breakdown_voltage (NaN if none), leakage_current,
        max_current and voltage_range; empty for an empty table
    """
    if len(df) == 0:
        return {}

    voltage = df["voltage"].to_numpy(dtype=float)
    abs_current = np.abs(df[current_column].to_numpy(dtype=float))

    above = np.flatnonzero(abs_current > threshold_current)
    if len(above):
        idx = int(above[0])
        breakdown_voltage = float(voltage[idx])
        leakage_current = float(np.mean(abs_current[:max(1, idx - 4)]))
    else:
        breakdown_voltage = float("nan")
        leakage_current = float(np.mean(abs_current))

    return {
        "breakdown_voltage": breakdown_voltage,
        "leakage_current": leakage_current,
        "max_current": float(np.max(abs_current)),
        "voltage_range": (float(np.min(voltage)), float(np.max(voltage))),
    }
