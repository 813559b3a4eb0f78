"""Pytest configuration helpers for the PUND analysis project.

This module ensures that the project root is placed on ``sys.path`` before any
tests execute, and provides a builder for synthetic PUND waveforms.
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest


def _ensure_project_root_on_path() -> None:
    """Insert the repository root at the front of ``sys.path`` if needed."""
    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_ensure_project_root_on_path()

# poling, P, U, N, D
PUND_SIGNS = (-1, 1, 1, -1, -1)


def build_pund_waveform(
    signs=None,
    repetitions: int = 1,
    amplitude: float = 2.0,
    pulse_len: int = 51,
    gap: int = 40,
    dt: float = 1e-6,
    capacitance: float = 1e-9,
    switching_amplitude: float = 5e-5,
    offset: float = 0.0,
    pulse_lens=None,
) -> SimpleNamespace:
    """Triangular pulse train with capacitive current and a switching peak in P and N.

    Returns a namespace with the ``table`` plus ``pulse_starts`` and the
    injected ``switching`` current (non-zero only inside P and N pulses).
    ``pulse_lens`` overrides ``pulse_len`` per pulse.
    """
    if signs is None:
        signs = PUND_SIGNS * repetitions
    if pulse_lens is None:
        pulse_lens = [pulse_len] * len(signs)

    n = gap + sum(length + gap for length in pulse_lens)
    voltage = np.zeros(n)
    switching = np.zeros(n)
    starts = []
    start = gap
    for number, (sign, length) in enumerate(zip(signs, pulse_lens), start=1):
        starts.append(start)
        tri = 1.0 - np.abs(np.linspace(-1.0, 1.0, length))
        voltage[start:start + length] = sign * amplitude * tri
        role = number % 5
        if role in (2, 4) and len(signs) >= 5:
            peak = np.exp(-((np.arange(length) - length // 3) / 4.0) ** 2)
            switching[start:start + length] = sign * switching_amplitude * peak
        start += length + gap

    time = np.arange(n) * dt
    capacitive = capacitance * np.concatenate(([0.0], np.diff(voltage))) / dt
    current = capacitive + switching + offset
    table = pd.DataFrame({"time": time, "voltage": voltage, "current": current})
    return SimpleNamespace(
        table=table,
        pulse_starts=starts,
        pulse_len=pulse_len,
        pulse_lens=list(pulse_lens),
        switching=switching,
        dt=dt,
    )


@pytest.fixture
def pund_waveform():
    """Factory fixture for synthetic PUND waveforms."""
    return build_pund_waveform
