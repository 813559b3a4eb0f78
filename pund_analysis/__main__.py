"""Entry point: python -m pund_analysis FILE [--output CSV] [--plot PNG] [--area M2]"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .analysis import run_pund_pipeline
from .breakdown import analyze_breakdown
from .errors import AnalysisError
from .loader import detect_measurement_type, read_fe_pund, read_iv_sweep
from .polarization import remnant_charge_per_cycle
from .preferences import load_thresholds

logger = logging.getLogger("pund_analysis")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pund_analysis",
        description="PUND ferroelectric switching-charge analysis of parameter-analyzer exports.",
    )
    parser.add_argument('file', type=Path, help="Measurement CSV export")
    parser.add_argument('--output', '-o', type=Path, default=None, help="Write the augmented table to this CSV")
    parser.add_argument('--plot', '-p', type=Path, default=None, help="Save the PUND figure to this image file")
    parser.add_argument('--area', type=float, default=None, help="Capacitor area (m^2) for polarization")
    parser.add_argument('--thresholds', '-t', type=Path, default=None, help="JSON file with detection thresholds")
    parser.add_argument('--debug', action='store_true', help="Log detection thresholds and statistics")
    return parser


def _run_breakdown(path: Path) -> int:
    summary = analyze_breakdown(read_iv_sweep(path))
    if not summary:
        logger.error(f"No I-V data in {path.name}")
        return 1
    logger.info(f"Breakdown voltage: {summary['breakdown_voltage']:.3f} V")
    logger.info(f"Leakage current:   {summary['leakage_current']:.3e} A")
    logger.info(f"Max current:       {summary['max_current']:.3e} A")
    return 0


def _run_pund(args: argparse.Namespace) -> int:
    df = read_fe_pund(args.file)
    if df.empty:
        logger.error(f"No PUND data in {args.file.name}")
        return 1

    thresholds = load_thresholds(args.thresholds) if args.thresholds else None
    try:
        result = run_pund_pipeline(df, debug=args.debug, thresholds=thresholds)
    except AnalysisError as exc:
        logger.error(f"{args.file.name}: {exc}")
        return 1

    logger.info(
        f"{len(result.pulses)} pulses, {result.n_repetitions} PUND repetition(s), "
        f"current offset {result.current_offset:.3e} A"
        + (", current polarity flipped" if result.polarity_flipped else "")
    )
    for row in remnant_charge_per_cycle(result.table).itertuples(index=False):
        logger.info(
            f"Repetition {row.repetition}: Q_P={row.q_p:.3e} C, Q_N={row.q_n:.3e} C, "
            f"Q_r={row.q_remnant:.3e} C"
            + (f", Pr={row.q_remnant / args.area * 100.0:.3f} uC/cm^2" if args.area else "")
        )

    if args.output:
        result.table.to_csv(args.output, index=False)
        logger.info(f"Wrote {args.output}")
    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from .plotting import PlotManager, plot_fe_pund
        fig = plot_fe_pund(result.table, title=args.file.stem, area=args.area)
        path = PlotManager(args.plot.parent).save(fig, args.plot.name)
        logger.info(f"Saved {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.file.exists():
        logger.error(f"File not found: {args.file}")
        return 1
    if args.area is not None and args.area <= 0:
        logger.error("--area must be positive")
        return 1

    if detect_measurement_type(args.file) == "Breakdown":
        return _run_breakdown(args.file)
    return _run_pund(args)


if __name__ == '__main__':
    sys.exit(main())
