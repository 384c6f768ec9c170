"""Exact integer/rational vector helpers.

The reduction itself only needs ``dot``, ``norm_sq`` and ``axpy``; ``sub`` and
``scale`` are kept as public helpers for callers working with basis rows.
"""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction
from typing import Union

Scalar = Union[int, Fraction]
Vector = Sequence[Scalar]


def _check_len(v1: Vector, v2: Vector) -> None:
    if len(v1) != len(v2):
        raise ValueError(f"vector length mismatch: {len(v1)} != {len(v2)}")


def dot(v1: Vector, v2: Vector) -> Scalar:
    _check_len(v1, v2)
    return sum((x * y for x, y in zip(v1, v2)), 0)


def norm_sq(v: Vector) -> Scalar:
    return dot(v, v)


def sub(v1: Vector, v2: Vector) -> list[Scalar]:
    _check_len(v1, v2)
    return [a - b for a, b in zip(v1, v2)]


def scale(scalar: Scalar, v: Vector) -> list[Scalar]:
    return [scalar * x for x in v]


def axpy(q: Scalar, x: Vector, y: Vector) -> list[Scalar]:
    """Return ``y - q * x`` without building the intermediate scaled vector."""
    _check_len(x, y)
    return [b - q * a for a, b in zip(x, y)]
