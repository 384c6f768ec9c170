"""Shared logging and error helpers for the lll package."""

from lll.common.errors import (
    BasisFormatError,
    LinearlyDependentBasisError,
    LLLError,
    raise_fatal_with_remedy,
)
from lll.common.logging import configure_logging

__all__ = [
    "BasisFormatError",
    "LLLError",
    "LinearlyDependentBasisError",
    "configure_logging",
    "raise_fatal_with_remedy",
]
