import math

import numpy as np
import pandas as pd
import pytest

from pund_analysis.breakdown import analyze_breakdown


def test_breakdown_voltage_and_leakage():
    voltage = np.arange(10, dtype=float)
    current = np.array([1e-9, 1e-9, 3e-9, 3e-9, 1e-8, 1e-8, 1e-8, 1e-8, 5e-6, 1e-3])
    df = pd.DataFrame({"voltage": voltage, "current1": current, "current2": current})

    summary = analyze_breakdown(df)

    assert summary["breakdown_voltage"] == 8.0
    # mean of the samples up to five before breakdown
    assert summary["leakage_current"] == pytest.approx(np.mean(current[:4]))
    assert summary["max_current"] == pytest.approx(1e-3)
    assert summary["voltage_range"] == (0.0, 9.0)


def test_no_breakdown_uses_whole_sweep():
    df = pd.DataFrame({"voltage": [0.0, -1.0, -2.0], "current1": [-1e-9, -2e-9, -3e-9]})

    summary = analyze_breakdown(df)

    assert math.isnan(summary["breakdown_voltage"])
    assert summary["leakage_current"] == pytest.approx(2e-9)
    assert summary["voltage_range"] == (-2.0, 0.0)


def test_immediate_breakdown_keeps_first_sample_as_leakage():
    df = pd.DataFrame({"voltage": [1.0, 2.0], "current1": [1e-3, 2e-3]})

    summary = analyze_breakdown(df)

    assert summary["breakdown_voltage"] == 1.0
    assert summary["leakage_current"] == pytest.approx(1e-3)


def test_empty_table_gives_empty_summary():
    assert analyze_breakdown(pd.DataFrame({"voltage": [], "current1": []})) == {}
