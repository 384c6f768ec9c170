"""Exact LLL lattice basis reduction."""

import sys

# decimal conversion of very large ints is capped by default (Python 3.11+)
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)

from lll.config import DEFAULT_DELTA, ReductionSettings  # noqa: E402 - after the int limit is lifted
from lll.reduction import (  # noqa: E402
    GramSchmidt,
    ReductionResult,
    gram_schmidt,
    is_lll_reduced,
    lll,
    lll_reduce,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_DELTA",
    "GramSchmidt",
    "ReductionResult",
    "ReductionSettings",
    "gram_schmidt",
    "is_lll_reduced",
    "lll",
    "lll_reduce",
]
