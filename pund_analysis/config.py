from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PundThresholds:
    # Baseline correction
    baseline_samples: int = 10  # leading current samples averaged as offset

    # Derivative-based pulse detection
    median_window: int = 9
    noise_samples: int = 10  # capped at N // 10
    derivative_threshold_factor: float = 5.0
    expansion_window: int = 5  # +/- samples merged into a marked run

    # Candidate filtering
    min_pulse_length: int = 20  # ~100 for slow, densely sampled sweeps
    amplitude_baseline_samples: int = 9
    amplitude_threshold_factor: float = 5.0

    # Grouping
    require_complete_group: bool = False  # raise instead of returning an empty analysis
