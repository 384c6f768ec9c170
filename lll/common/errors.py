"""Error handling policy helpers and exception types for lattice input.

Input problems surface as ``LLLError`` subclasses (``ValueError`` underneath)
carrying optional advice; missing resources use ``raise_fatal_with_remedy``.
"""

from __future__ import annotations


class LLLError(ValueError):
    """Base class for errors raised while loading or reducing a basis."""

    def __init__(self, message: str, *, advice: str | None = None) -> None:
        super().__init__(message)
        self.advice = advice

    def to_dict(self) -> dict[str, object]:
        """Structured representation suitable for logging or JSON responses."""

        payload: dict[str, object] = {
            "error": type(self).__name__,
            "message": str(self),
        }
        if self.advice is not None:
            payload["advice"] = self.advice
        return payload


class BasisFormatError(LLLError):
    """Raised when basis input cannot be parsed into integer rows of equal length."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        advice: str | None = None,
    ) -> None:
        super().__init__(message, advice=advice)
        self.line = line

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        if self.line is not None:
            payload["line"] = self.line
        return payload


class LinearlyDependentBasisError(LLLError):
    """Raised when a Gram-Schmidt vector vanishes, i.e. the rows are dependent."""

    def __init__(self, row: int) -> None:
        if row == 0:
            detail = "row 0 is the zero vector"
        else:
            detail = f"row {row} lies in the span of rows 0..{row - 1}"
        super().__init__(
            f"basis rows are linearly dependent ({detail})",
            advice="Remove redundant rows so the input is a basis of full row rank.",
        )
        self.row = row

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["row"] = self.row
        return payload


def raise_fatal_with_remedy(msg: str, remedy: str) -> None:
    """Raise a RuntimeError with an actionable remediation message.

    Parameters
    ----------
    msg : str
        Primary error description
    remedy : str
        Concrete steps to fix the issue
    """
    full_msg = f"{msg}\n\nRemediation: {remedy}"
    raise RuntimeError(full_msg)


__all__ = [
    "BasisFormatError",
    "LLLError",
    "LinearlyDependentBasisError",
    "raise_fatal_with_remedy",
]
