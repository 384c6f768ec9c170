"""Reduction settings.

The Lovász parameter ``delta`` is kept as an exact ``Fraction``. Resolution
order: CLI flag, then the ``LLL_DELTA`` environment variable, then 3/4.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from fractions import Fraction

DEFAULT_DELTA = Fraction(3, 4)
DELTA_ENV_VAR = "LLL_DELTA"


def parse_delta(text: str | int | float | Fraction) -> Fraction:
    """Parse ``"3/4"``, ``"0.75"`` or a number into an exact Fraction.

    Decimal strings are converted exactly (``"0.99"`` -> 99/100), not via a
    binary float.
    """
    if isinstance(text, Fraction):
        return text
    if isinstance(text, bool):
        raise ValueError(f"invalid delta value: {text!r}")
    if isinstance(text, (int, float)):
        return Fraction(str(text))
    try:
        return Fraction(str(text).strip())
    except (ValueError, ZeroDivisionError) as exc:
        raise ValueError(f"invalid delta value: {text!r} (expected e.g. 3/4 or 0.75)") from exc


def validate_delta(delta: Fraction) -> Fraction:
    if not Fraction(1, 4) < delta <= 1:
        raise ValueError(f"delta must satisfy 1/4 < delta <= 1, got {delta}")
    return delta


@dataclass
class ReductionSettings:
    """
    Parameters of a single reduction run.
    """
    delta: Fraction = DEFAULT_DELTA
    verify: bool = False

    def __post_init__(self):
        self.delta = validate_delta(parse_delta(self.delta))

    @classmethod
    def from_env(cls, delta: str | None = None, verify: bool = False) -> "ReductionSettings":
        """Build settings from an explicit delta, falling back to ``LLL_DELTA``."""
        raw = delta if delta is not None else os.environ.get(DELTA_ENV_VAR)
        if raw is None or not str(raw).strip():
            return cls(verify=verify)
        return cls(delta=parse_delta(raw), verify=verify)
