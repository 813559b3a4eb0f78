"""
PUND Analysis
=============

Ferroelectric switching-charge analysis of Positive-Up-Negative-Down pulse
measurements:

- pulse detection on the voltage trace
- polarity alignment and pulse-order validation
- switching current (P-U, N-D) and cumulative switching charge
- readers for parameter-analyzer exports, breakdown summary, PUND figures
"""

__version__ = "1.0.0"

from .analysis import PundAnalysis, analyze_pund, run_pund_pipeline
from .breakdown import analyze_breakdown
from .config import PundThresholds
from .errors import (
    AnalysisError,
    InconsistentPolarity,
    InsufficientPulses,
    MissingColumns,
    NoValidPulses,
    UnexpectedPulseOrdering,
)
from .grouping import PulseGroup
from .loader import detect_measurement_type, read_fe_pund, read_iv_sweep
from .polarization import center_charge, remnant_charge_per_cycle, remnant_polarization
from .preferences import load_thresholds, save_thresholds
from .segmentation import Pulse, detect_pulses

__all__ = [
    'analyze_pund',
    'run_pund_pipeline',
    'PundAnalysis',
    'PundThresholds',
    'Pulse',
    'PulseGroup',
    'detect_pulses',
    'AnalysisError',
    'MissingColumns',
    'NoValidPulses',
    'InconsistentPolarity',
    'UnexpectedPulseOrdering',
    'InsufficientPulses',
    'read_fe_pund',
    'read_iv_sweep',
    'detect_measurement_type',
    'analyze_breakdown',
    'center_charge',
    'remnant_polarization',
    'remnant_charge_per_cycle',
    'load_thresholds',
    'save_thresholds',
]
