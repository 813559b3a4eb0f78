import json
import logging

import pandas as pd

from pund_analysis.__main__ import main


def _write_pund_export(path, table):
    lines = ["Setup title,FE PUND", "Time,MeasResult1_value,MeasResult2_value,MeasResult1_time,MeasResult2_time"]
    for t, v, i in zip(table["time"], table["voltage"], table["current"]):
        lines.append(f"{t:.17g},{i:.17g},{v:.17g},{t:.17g},{t:.17g}")
    path.write_text("\n".join(lines) + "\n")


def test_cli_writes_augmented_table_and_plot(tmp_path, pund_waveform):
    source = tmp_path / "FE PUND [dev].csv"
    _write_pund_export(source, pund_waveform().table)
    out_csv = tmp_path / "out.csv"
    out_png = tmp_path / "figures" / "pund.png"

    status = main([str(source), "--output", str(out_csv), "--plot", str(out_png), "--area", "1e-8"])

    assert status == 0
    result = pd.read_csv(out_csv)
    assert {"polarity", "pulse_index", "switching_current", "cumulative_charge"} <= set(result.columns)
    assert result["pulse_index"].max() == 5
    assert out_png.exists()


def test_cli_uses_threshold_file(tmp_path, pund_waveform, caplog):
    source = tmp_path / "FE PUND [dev].csv"
    _write_pund_export(source, pund_waveform().table)
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"min_pulse_length": 500}))

    assert main([str(source), "--thresholds", str(settings)]) == 1
    assert "no valid pulses" in caplog.text


def test_cli_reports_breakdown(tmp_path, caplog):
    source = tmp_path / "Breakdown oxide [dev].csv"
    source.write_text("meta\n0.0,1e-9,1e-9\n1.0,1e-8,1e-8\n2.0,1e-5,1e-5\n")
    caplog.set_level(logging.INFO, logger="pund_analysis")

    assert main([str(source)]) == 0
    assert "Breakdown voltage: 2.000 V" in caplog.text


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.csv")]) == 1


def test_cli_rejects_non_pund_data(tmp_path):
    source = tmp_path / "random.csv"
    source.write_text("x,y\n1,2\n")

    assert main([str(source)]) == 1
