"""Basis quality metrics.

All quantities are derived from the exact Gram-Schmidt data; logarithms are
taken of the exact integers/fractions (``math.log`` accepts ints of any size),
so entries far beyond the float range do not overflow.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from fractions import Fraction
from typing import Any, Sequence

import numba
import numpy as np

from lll.config import DEFAULT_DELTA
from lll.reduction import GramSchmidt, gram_schmidt, is_lll_reduced
from lll.vector import norm_sq

# largest x with exp(x) representable as a float64
_MAX_EXP = 709.0


@dataclass
class BasisReport:
    """Summary of a basis for logging/JSON."""

    rank: int
    dimension: int
    log_volume: float
    first_norm: float
    log_orthogonality_defect: float
    root_hermite_factor: float
    gso_slope: float
    is_reduced: bool

    def to_dict(self) -> dict[str, Any]:
        """Return the dataclass as a regular dictionary for logging/JSON."""
        return asdict(self)


def _log_fraction(value: Fraction) -> float:
    return math.log(value.numerator) - math.log(value.denominator)


def _safe_exp(value: float) -> float:
    return math.exp(value) if value < _MAX_EXP else math.inf


def gso_log_profile(gso: GramSchmidt) -> np.ndarray:
    """Return ``log |b*_i|`` for each row as a float64 array."""
    return np.array([0.5 * _log_fraction(b) for b in gso.b_norms], dtype=np.float64)


@numba.njit(fastmath=True)
def profile_slope(profile: np.ndarray) -> float:
    """Least-squares slope of the log-GSO profile against the row index."""
    n = profile.shape[0]
    if n < 2:
        return 0.0
    mean_x = (n - 1) / 2.0
    mean_y = 0.0
    for i in range(n):
        mean_y += profile[i]
    mean_y /= n
    num = 0.0
    den = 0.0
    for i in range(n):
        dx = i - mean_x
        num += dx * (profile[i] - mean_y)
        den += dx * dx
    return num / den


def basis_report(
    basis: Sequence[Sequence[int]],
    delta=DEFAULT_DELTA,
    gso: GramSchmidt | None = None,
) -> BasisReport:
    """Compute quality metrics for ``basis``; ``gso`` may be passed to skip recomputation."""
    rows = [list(row) for row in basis]
    if not rows:
        return BasisReport(
            rank=0,
            dimension=0,
            log_volume=0.0,
            first_norm=0.0,
            log_orthogonality_defect=0.0,
            root_hermite_factor=1.0,
            gso_slope=0.0,
            is_reduced=True,
        )
    if gso is None:
        gso = gram_schmidt(rows)

    rank = len(rows)
    profile = gso_log_profile(gso)
    log_volume = float(profile.sum())
    log_norms = np.array([0.5 * math.log(norm_sq(row)) for row in rows], dtype=np.float64)
    log_first = float(log_norms[0])

    return BasisReport(
        rank=rank,
        dimension=len(rows[0]),
        log_volume=log_volume,
        first_norm=_safe_exp(log_first),
        log_orthogonality_defect=max(float(log_norms.sum()) - log_volume, 0.0),
        root_hermite_factor=_safe_exp((log_first - log_volume / rank) / rank),
        gso_slope=float(profile_slope(profile)),
        is_reduced=is_lll_reduced(rows, delta),
    )


__all__ = ["BasisReport", "basis_report", "gso_log_profile", "profile_slope"]
