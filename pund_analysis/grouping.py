"""
Grouping of detected pulses into PUND repetitions.

A repetition is five consecutive pulses: a poling pulse followed by the
P (switching), U (non-switching), N (switching) and D (non-switching) pulses.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List

import numpy as np

from .errors import UnexpectedPulseOrdering
from .segmentation import Pulse

logger = logging.getLogger(__name__)

PULSES_PER_GROUP = 5


@dataclass(frozen=True)
class PulseGroup:
    poling: Pulse
    p: Pulse
    u: Pulse
    n: Pulse
    d: Pulse

    def __iter__(self) -> Iterator[Pulse]:
        return iter((self.poling, self.p, self.u, self.n, self.d))


def group_pulses(pulses: List[Pulse]) -> List[PulseGroup]:
    """Split pulses into consecutive quintuples; an incomplete tail is dropped."""
    n_groups = len(pulses) // PULSES_PER_GROUP
    if len(pulses) % PULSES_PER_GROUP:
        logger.debug(
            f"Discarding {len(pulses) % PULSES_PER_GROUP} trailing pulse(s) "
            f"that do not complete a PUND group"
        )
    return [
        PulseGroup(*pulses[k * PULSES_PER_GROUP:(k + 1) * PULSES_PER_GROUP])
        for k in range(n_groups)
    ]


def _voltage_sign(voltage: np.ndarray, pulse: Pulse) -> float:
    return float(np.sign(np.sum(voltage[pulse.slice])))


def is_valid_group(voltage: np.ndarray, group: PulseGroup) -> bool:
    """Check the poling/P/U/N/D sign pattern of summed pulse voltages."""
    s_p = _voltage_sign(voltage, group.p)
    return (
        _voltage_sign(voltage, group.poling) == -s_p
        and _voltage_sign(voltage, group.u) == s_p
        and _voltage_sign(voltage, group.n) == -s_p
        and _voltage_sign(voltage, group.d) == -s_p
    )


def validate_groups(voltage: np.ndarray, groups: List[PulseGroup]) -> None:
    """Raise UnexpectedPulseOrdering for the first group breaking the sign pattern."""
    voltage = np.asarray(voltage, dtype=np.float64)
    for number, group in enumerate(groups, start=1):
        if not is_valid_group(voltage, group):
            raise UnexpectedPulseOrdering(number)
