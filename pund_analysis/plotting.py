"""
PUND figures: time series, I-V loop and switching-charge loop.
"""

from pathlib import Path
from typing import Optional

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .polarization import center_charge, remnant_polarization, repetition_masks

matplotlib.rcParams['axes.unicode_minus'] = False

DEFAULT_DPI = 300
FIGSIZE_PUND = (12, 8)


class PlotManager:
    """Small helper for consistent saving and directory handling."""

    def __init__(self, save_dir: Optional[Path] = None, auto_close: bool = True, dpi: int = DEFAULT_DPI):
        self.save_dir = Path(save_dir) if save_dir else None
        if self.save_dir:
            self.save_dir.mkdir(parents=True, exist_ok=True)
        self.auto_close = auto_close
        self.dpi = dpi

    def save(self, fig: plt.Figure, name: str) -> Path:
        if self.save_dir is None:
            raise ValueError("save_dir not set for PlotManager")
        path = self.save_dir / name
        if path.suffix == "":
            path = path.with_suffix(".png")
        fig.savefig(path, dpi=self.dpi, bbox_inches="tight")
        if self.auto_close:
            plt.close(fig)
        return path


def plot_fe_pund(
    table: pd.DataFrame,
    title: str = "FE PUND",
    area: Optional[float] = None,
) -> plt.Figure:
    """
    Plot an analysed PUND table.

    Top: current, switching current and voltage vs time (us).
    Bottom left: I-V loop with the switching current overlaid.
    Bottom right: centred switching charge (pC) vs voltage, or remnant
    polarization (uC/cm^2) when ``area`` (m^2) is given, one line per repetition.
    """
    time_us = table["time"].to_numpy(dtype=float) * 1e6
    voltage = table["voltage"].to_numpy(dtype=float)
    current_ua = table["current"].to_numpy(dtype=float) * 1e6
    i_fe_ua = table["switching_current"].to_numpy(dtype=float) * 1e6
    charge = table["cumulative_charge"].to_numpy(dtype=float)

    fig = plt.figure(figsize=FIGSIZE_PUND)
    gs = fig.add_gridspec(2, 2)
    ax_t = fig.add_subplot(gs[0, :])
    ax_v = ax_t.twinx()
    ax_iv = fig.add_subplot(gs[1, 0])
    ax_q = fig.add_subplot(gs[1, 1])

    l_i, = ax_t.plot(time_us, current_ua, color='tab:blue', linewidth=1.5, label='Current')
    l_fe, = ax_t.plot(time_us, i_fe_ua, color='tab:purple', linewidth=1.5, label='FE Current')
    l_v, = ax_v.plot(time_us, voltage, color='tab:red', linewidth=1.5, linestyle='--', label='Voltage')
    ax_t.set_xlabel('Time (us)')
    ax_t.set_ylabel('Current (uA)', color='tab:blue')
    ax_v.set_ylabel('Voltage (V)', color='tab:red')
    ax_t.set_title(f'{title} - Combined')
    ax_t.legend(handles=[l_i, l_v, l_fe], loc='upper left')

    ax_iv.plot(voltage, current_ua, color='tab:green', linewidth=1.5, label='Current')
    ax_iv.plot(voltage, i_fe_ua, color='tab:purple', linewidth=1.5, label='FE Current')
    ax_iv.set_xlabel('Voltage (V)')
    ax_iv.set_ylabel('Current (uA)')
    ax_iv.set_title(f'{title} - I-V Characteristic')
    ax_iv.legend()

    if area is not None:
        # C/m^2 -> uC/cm^2
        y = remnant_polarization(charge, area) * 100.0
        ax_q.set_ylabel('Polarization (uC/cm^2)')
        ax_q.set_title(f'{title} - Remnant Polarization')
    else:
        y = center_charge(charge) * 1e12
        ax_q.set_ylabel('Charge (pC)')
        ax_q.set_title(f'{title} - Ferroelectric Switching Charge')

    pulse_index = table["pulse_index"].to_numpy()
    for rep, mask in enumerate(repetition_masks(pulse_index), start=1):
        if np.any(mask):
            ax_q.plot(voltage[mask], y[mask], linewidth=1.5, label=str(rep))
    ax_q.set_xlabel('Voltage (V)')
    if ax_q.lines:
        ax_q.legend(title='Repetition')

    for ax in (ax_t, ax_iv, ax_q):
        ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
