"""
PUND (Positive-Up-Negative-Down) switching-charge analysis.

Steps:
    1. offset the current so the leading samples sit at zero
    2. detect the triangular voltage pulses
    3. flip the current sign if it is uniformly inverted against the voltage
    4. group pulses into (poling, P, U, N, D) repetitions and check their signs
    5. subtract I_P - I_U and I_N - I_D to get the switching current I_FE
    6. integrate I_FE over the P and N pulses into the switching charge Q_FE

The result is the input table with four added columns, from which Q_FE(V)
or Q_FE(t) can be read off directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .baseline import correct_baseline
from .config import PundThresholds
from .errors import InsufficientPulses, MissingColumns, NoValidPulses
from .grouping import PULSES_PER_GROUP, PulseGroup, group_pulses, validate_groups
from .polarity import align_polarity
from .segmentation import Pulse, detect_pulses
from .switching import extract_switching_current, integrate_switching_charge, label_pulses

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("time", "voltage", "current")
RESULT_COLUMNS = ("polarity", "pulse_index", "switching_current", "cumulative_charge")

TableLike = Union[pd.DataFrame, Mapping[str, Any]]


@dataclass
class PundAnalysis:
    """Augmented table plus the intermediate products of one analysis run."""
    table: pd.DataFrame
    pulses: List[Pulse] = field(default_factory=list)
    groups: List[PulseGroup] = field(default_factory=list)
    current_offset: float = 0.0
    polarity_flipped: bool = False

    @property
    def n_repetitions(self) -> int:
        return len(self.groups)


def _as_frame(table: TableLike) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        df = table
    else:
        missing = [c for c in REQUIRED_COLUMNS if c not in table]
        if missing:
            raise MissingColumns(missing)
        df = pd.DataFrame(dict(table))
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise MissingColumns(missing)
    return df.copy()


def run_pund_pipeline(
    table: TableLike,
    debug: bool = False,
    thresholds: Optional[PundThresholds] = None,
) -> PundAnalysis:
    """
    Run the full PUND analysis and keep the intermediate pulses and groups.

    Args:
        table: Columns ``time`` (s), ``voltage`` (V) and ``current`` (A)
        debug: Log thresholds and intermediate statistics at DEBUG level
        thresholds: Detection thresholds; defaults to ``PundThresholds()``

    Returns:
        PundAnalysis with the augmented table

    Raises:
        MissingColumns, NoValidPulses, InconsistentPolarity,
        UnexpectedPulseOrdering, InsufficientPulses
    """
    t = thresholds or PundThresholds()
    df = _as_frame(table)
    n = len(df)
    if n == 0:
        raise NoValidPulses("no valid pulses found; table is empty")

    time = df["time"].to_numpy(dtype=np.float64)
    voltage = df["voltage"].to_numpy(dtype=np.float64)
    current, offset = correct_baseline(df["current"].to_numpy(dtype=np.float64), t.baseline_samples)
    if debug:
        logger.debug(f"current offset {offset:.3e} A from first {min(t.baseline_samples, n)} samples")

    pulses = detect_pulses(voltage, t, debug=debug)
    current, flipped = align_polarity(voltage, current, pulses, debug=debug)

    groups = group_pulses(pulses)
    if not groups:
        if t.require_complete_group:
            raise InsufficientPulses(len(pulses), PULSES_PER_GROUP)
        logger.warning(
            f"Only {len(pulses)} pulse(s) detected; no complete PUND group, "
            f"switching current and charge left empty"
        )
    validate_groups(voltage, groups)
    if debug:
        logger.debug(f"{len(pulses)} pulses -> {len(groups)} PUND group(s)")

    polarity, pulse_index = label_pulses(groups, n)
    i_fe = extract_switching_current(current, groups)
    q_fe = integrate_switching_charge(time, i_fe, pulse_index)

    df["time"] = time
    df["voltage"] = voltage
    df["current"] = current
    df["polarity"] = polarity
    df["pulse_index"] = pulse_index
    df["switching_current"] = i_fe
    df["cumulative_charge"] = q_fe

    return PundAnalysis(
        table=df,
        pulses=pulses,
        groups=groups,
        current_offset=offset,
        polarity_flipped=flipped,
    )


def analyze_pund(
    table: TableLike,
    debug: bool = False,
    thresholds: Optional[PundThresholds] = None,
) -> pd.DataFrame:
    """Analyse a PUND measurement and return the augmented table.

    Added columns: ``polarity``, ``pulse_index``, ``switching_current`` (A)
    and ``cumulative_charge`` (C, NaN outside the P and N pulses). The
    ``current`` column is returned offset-corrected and polarity-aligned.
    """
    return run_pund_pipeline(table, debug=debug, thresholds=thresholds).table
