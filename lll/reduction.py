"""Exact LLL lattice-basis reduction.

Basis rows are lists of Python ints. The Gram-Schmidt data (``mu`` and the
squared norms ``B_i = |b*_i|^2``) are kept as ``Fraction`` so every size
reduction and every Lovász test is decided exactly, whatever the size of the
entries.

After a swap only the affected ``mu``/``B`` entries are updated (Cohen,
Algorithm 2.6.3); the Gram-Schmidt vectors themselves are never materialized.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import List, Sequence

from loguru import logger

from lll.basis_io import validate_basis
from lll.common.errors import LinearlyDependentBasisError
from lll.config import DEFAULT_DELTA, parse_delta, validate_delta
from lll.vector import axpy, dot, norm_sq

Basis = List[List[int]]

HALF = Fraction(1, 2)


@dataclass
class GramSchmidt:
    """Gram-Schmidt coefficients of a basis.

    ``mu[i][j]`` is only meaningful for ``j < i``; ``b_norms[i]`` is
    ``|b*_i|^2`` and is strictly positive for a basis.
    """
    mu: List[List[Fraction]]
    b_norms: List[Fraction]


@dataclass
class ReductionResult:
    basis: Basis
    delta: Fraction = DEFAULT_DELTA
    swaps: int = 0
    size_reductions: int = 0
    iterations: int = 0
    gso: GramSchmidt | None = field(default=None, repr=False)


def round_half_away(value: Fraction) -> int:
    """Round to the nearest integer, ties away from zero (1.5 -> 2, -2.5 -> -3)."""
    rounded = math.floor(abs(value) + HALF)
    return rounded if value >= 0 else -rounded


def gram_schmidt(basis: Sequence[Sequence[int]]) -> GramSchmidt:
    """Compute the exact Gram-Schmidt coefficients from inner products.

    Raises:
        LinearlyDependentBasisError: if some ``b*_i`` is the zero vector.
    """
    n = len(basis)
    mu = [[Fraction(0)] * n for _ in range(n)]
    b_norms: List[Fraction] = []
    for i in range(n):
        for j in range(i):
            acc = Fraction(dot(basis[i], basis[j]))
            for l in range(j):
                acc -= mu[j][l] * mu[i][l] * b_norms[l]
            mu[i][j] = acc / b_norms[j]
        b_i = Fraction(norm_sq(basis[i]))
        for l in range(i):
            b_i -= mu[i][l] * mu[i][l] * b_norms[l]
        if b_i == 0:
            raise LinearlyDependentBasisError(i)
        b_norms.append(b_i)
    return GramSchmidt(mu=mu, b_norms=b_norms)


def _size_reduce(rows: Basis, mu: List[List[Fraction]], k: int) -> int:
    """Make ``|mu[k][j]| <= 1/2`` for all ``j < k``; returns the number of row updates."""
    updates = 0
    for j in range(k - 1, -1, -1):
        if abs(mu[k][j]) <= HALF:
            continue
        q = round_half_away(mu[k][j])
        rows[k] = axpy(q, rows[j], rows[k])
        mu_k, mu_j = mu[k], mu[j]
        for i in range(j):
            mu_k[i] -= q * mu_j[i]
        mu_k[j] -= q
        updates += 1
    return updates


def _swap(rows: Basis, mu: List[List[Fraction]], b_norms: List[Fraction], k: int) -> None:
    """Exchange rows ``k-1`` and ``k`` and update the GSO data in place."""
    n = len(rows)
    rows[k], rows[k - 1] = rows[k - 1], rows[k]
    for j in range(k - 1):
        mu[k][j], mu[k - 1][j] = mu[k - 1][j], mu[k][j]

    m = mu[k][k - 1]
    new_norm = b_norms[k] + m * m * b_norms[k - 1]
    mu[k][k - 1] = m * b_norms[k - 1] / new_norm
    b_norms[k] = b_norms[k - 1] * b_norms[k] / new_norm
    b_norms[k - 1] = new_norm

    for i in range(k + 1, n):
        t = mu[i][k]
        mu[i][k] = mu[i][k - 1] - m * t
        mu[i][k - 1] = t + mu[k][k - 1] * mu[i][k]


def lll_reduce(basis: Sequence[Sequence[int]], delta=DEFAULT_DELTA) -> ReductionResult:
    """LLL-reduce ``basis`` with Lovász parameter ``delta``.

    The input is left untouched; the reduced rows come back in the result
    together with counters describing the run.

    Raises:
        BasisFormatError: ragged rows or non-integer entries.
        LinearlyDependentBasisError: the rows do not form a basis.
        ValueError: ``delta`` outside ``(1/4, 1]``.
    """
    delta = validate_delta(parse_delta(delta))
    rows: Basis = [list(row) for row in validate_basis(basis)]
    n = len(rows)
    if n == 0:
        return ReductionResult(basis=[], delta=delta, gso=GramSchmidt(mu=[], b_norms=[]))

    gso = gram_schmidt(rows)
    mu, b_norms = gso.mu, gso.b_norms
    result = ReductionResult(basis=rows, delta=delta, gso=gso)

    k = 1
    while k < n:
        result.iterations += 1
        result.size_reductions += _size_reduce(rows, mu, k)
        # Lovász condition
        if b_norms[k] >= (delta - mu[k][k - 1] * mu[k][k - 1]) * b_norms[k - 1]:
            k += 1
        else:
            _swap(rows, mu, b_norms, k)
            result.swaps += 1
            k = max(k - 1, 1)

    logger.debug(
        "LLL reduced {}x{} basis (delta={}): {} swaps, {} size reductions, {} iterations",
        n,
        len(rows[0]),
        delta,
        result.swaps,
        result.size_reductions,
        result.iterations,
    )
    return result


def lll(basis: Sequence[Sequence[int]], delta=DEFAULT_DELTA) -> Basis:
    """Return only the reduced basis of :func:`lll_reduce`."""
    return lll_reduce(basis, delta).basis


def is_lll_reduced(basis: Sequence[Sequence[int]], delta=DEFAULT_DELTA) -> bool:
    """Check size reduction and the Lovász condition for every row.

    Dependent rows are not a basis and raise ``LinearlyDependentBasisError``.
    """
    delta = validate_delta(parse_delta(delta))
    rows = validate_basis(basis)
    if not rows:
        return True
    gso = gram_schmidt(rows)
    mu, b_norms = gso.mu, gso.b_norms
    for i in range(1, len(rows)):
        if any(abs(mu[i][j]) > HALF for j in range(i)):
            return False
        if b_norms[i] < (delta - mu[i][i - 1] * mu[i][i - 1]) * b_norms[i - 1]:
            return False
    return True


__all__ = [
    "GramSchmidt",
    "ReductionResult",
    "gram_schmidt",
    "is_lll_reduced",
    "lll",
    "lll_reduce",
    "round_half_away",
]
