"""
Exceptions raised by the PUND analysis pipeline.

Every error describes a data-quality problem with one input table. None of
them are transient, so callers should report them rather than retry.
"""

from typing import Iterable


class AnalysisError(Exception):
    """Base class for PUND analysis failures."""


class MissingColumns(AnalysisError):
    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"missing required columns: {', '.join(self.missing)}")


class NoValidPulses(AnalysisError):
    def __init__(self, message: str = "no valid pulses found; adjust derivative threshold or filtering parameters"):
        super().__init__(message)


class InconsistentPolarity(AnalysisError):
    def __init__(self, mismatches: int, total: int):
        self.mismatches = mismatches
        self.total = total
        super().__init__(f"inconsistent polarity: {mismatches}/{total} pulses misaligned")


class UnexpectedPulseOrdering(AnalysisError):
    def __init__(self, group: int):
        self.group = group
        super().__init__(f"unexpected pulse ordering in PUND group {group}")


class InsufficientPulses(AnalysisError):
    def __init__(self, found: int, required: int = 5):
        self.found = found
        self.required = required
        super().__init__(f"found {found} pulses, at least {required} needed for one PUND group")
