"""
Readers for parameter-analyzer CSV exports.

The exports start with a free-form metadata header; numeric data follows
either a known column-header line (PUND) or the first line that parses as
numbers (I-V sweeps).
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PUND_HEADER = "Time,MeasResult1_value,MeasResult2_value"
PUND_COLUMNS = ["time", "current", "voltage", "current_time", "voltage_time"]
IV_COLUMNS = ["voltage", "current1", "current2"]

_NUMBER = r"-?\d+\.?\d*(?:[eE][-+]?\d+)?"
_IV_DATA_LINE = re.compile(rf"^\s*{_NUMBER}\s*,\s*{_NUMBER}\s*,\s*{_NUMBER}")

MEASUREMENT_PATTERNS = (
    ("I-V Sweep", re.compile(r"I_V Sweep")),
    ("FE PUND", re.compile(r"FE PUND")),
    ("Breakdown", re.compile(r"Break.*oxide")),
    ("Wakeup", re.compile(r"Wakeup")),
)


def detect_measurement_type(filename: PathLike) -> Optional[str]:
    """Classify a measurement export by its filename; None if unrecognised."""
    name = Path(filename).name
    for label, pattern in MEASUREMENT_PATTERNS:
        if pattern.search(name):
            return label
    return None


def _read_lines(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.readlines()


def _parse_numeric_block(lines: List[str], columns: List[str]) -> pd.DataFrame:
    """Parse comma-separated rows into float columns, dropping unparseable rows."""
    records = [line.strip().split(",")[:len(columns)] for line in lines]
    records = [r for r in records if len(r) == len(columns)]
    if not records:
        return pd.DataFrame({c: pd.Series(dtype=float) for c in columns})
    raw = pd.DataFrame(records, columns=columns)
    df = raw.apply(lambda col: pd.to_numeric(col.str.strip(), errors="coerce")).dropna(how="any")
    return df.reset_index(drop=True).astype(float)


def read_fe_pund(path: PathLike) -> pd.DataFrame:
    """
    Read a ferroelectric PUND export.

    Args:
        path: CSV file path

    Returns:
        DataFrame with columns time, current, voltage, current_time,
        voltage_time; empty if the data header line is not present
    """
    path = Path(path)
    lines = _read_lines(path)
    start = None
    for i, line in enumerate(lines):
        if PUND_HEADER in line:
            start = i + 1
            break
    if start is None:
        logger.warning(f"No PUND data header found in {path.name}")
        return pd.DataFrame({c: pd.Series(dtype=float) for c in PUND_COLUMNS})

    rows = [l for l in lines[start:] if l.strip()]
    df = _parse_numeric_block(rows, PUND_COLUMNS)
    logger.debug(f"Read {len(df)} PUND samples from {path.name}")
    return df


def read_iv_sweep(path: PathLike) -> pd.DataFrame:
    """Read an I-V sweep export into voltage, current1, current2 columns."""
    path = Path(path)
    lines = _read_lines(path)
    start = next((i for i, line in enumerate(lines) if _IV_DATA_LINE.match(line)), None)
    if start is None:
        logger.warning(f"No I-V data found in {path.name}")
        return pd.DataFrame({c: pd.Series(dtype=float) for c in IV_COLUMNS})

    rows = [l for l in lines[start:] if l.strip()]
    return _parse_numeric_block(rows, IV_COLUMNS)
