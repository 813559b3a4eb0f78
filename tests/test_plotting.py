import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from pund_analysis import analyze_pund
from pund_analysis.plotting import PlotManager, plot_fe_pund


@pytest.fixture
def analysed(pund_waveform):
    return analyze_pund(pund_waveform(repetitions=2).table)


def test_plot_fe_pund_draws_one_charge_loop_per_repetition(analysed):
    fig = plot_fe_pund(analysed, title="device A1")
    try:
        # time series, its voltage twin, I-V loop, charge loop
        assert len(fig.axes) == 4
        ax_q = fig.axes[3]
        assert len(ax_q.lines) == 2
        assert ax_q.get_ylabel() == "Charge (pC)"
        assert "device A1" in fig.axes[0].get_title()
    finally:
        plt.close(fig)


def test_plot_fe_pund_with_area_shows_polarization(analysed):
    fig = plot_fe_pund(analysed, area=1e-8)
    try:
        assert fig.axes[3].get_ylabel() == "Polarization (uC/cm^2)"
    finally:
        plt.close(fig)


def test_plot_manager_saves_png(tmp_path, analysed):
    fig = plot_fe_pund(analysed)

    path = PlotManager(tmp_path / "plots").save(fig, "pund")

    assert path == tmp_path / "plots" / "pund.png"
    assert path.exists()


def test_plot_manager_requires_directory(analysed):
    fig = plot_fe_pund(analysed)
    try:
        with pytest.raises(ValueError):
            PlotManager().save(fig, "pund")
    finally:
        plt.close(fig)
