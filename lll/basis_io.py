"""Loading and formatting of lattice bases.

Supported inputs:
- inline data strings: ``[["11","3","4"],["2","11","5"]]`` (quoted or bare integers)
- CSV files: one basis row per line, comma separated
- JSONL batch files: one basis per line, either a bare array or
  ``{"id": ..., "basis": [...]}``

Output is a compact JSON array of decimal strings so integers of any size
survive JSON consumers that would otherwise round them to floats.
"""

from __future__ import annotations

import csv
import json
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any, List, Tuple

from lll.common.errors import BasisFormatError, raise_fatal_with_remedy

Basis = List[List[int]]

DATA_FORMAT_HINT = 'String data must be in the format [["num1","num2"],["num3","num4"]]'

# ASCII digits only; int() would also take "1_000" and non-ASCII digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_int(entry: Any, *, line: int | None = None) -> int:
    # bool is an int subclass; true/false in the data is a format error
    if isinstance(entry, int) and not isinstance(entry, bool):
        return entry
    if isinstance(entry, str):
        text = entry.strip().strip('"').strip()
        if _INT_PATTERN.fullmatch(text):
            return int(text)
    where = f" on line {line}" if line is not None else ""
    raise BasisFormatError(f"invalid integer {entry!r}{where}", line=line)


def validate_basis(basis: Sequence[Sequence[Any]]) -> Basis:
    """Return ``basis`` as a list of int rows, rejecting ragged or non-integer input."""
    rows: Basis = []
    width: int | None = None
    for index, row in enumerate(basis):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise BasisFormatError(f"row {index} is not a sequence: {row!r}")
        parsed = [_parse_int(entry) for entry in row]
        if not parsed:
            raise BasisFormatError(f"row {index} has no entries")
        if width is None:
            width = len(parsed)
        elif len(parsed) != width:
            raise BasisFormatError(
                f"row {index} has {len(parsed)} entries, expected {width}",
                advice="All basis vectors must have the same dimension.",
            )
        rows.append(parsed)
    return rows


def _rows_from_json(data: Any, *, line: int | None = None) -> Basis:
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise BasisFormatError(DATA_FORMAT_HINT, line=line)
    rows = [[_parse_int(entry, line=line) for entry in row] for row in data]
    try:
        return validate_basis(rows)
    except BasisFormatError as exc:
        raise BasisFormatError(str(exc), line=line, advice=exc.advice) from exc


def load_basis_from_string(data_str: str) -> Basis:
    trimmed = data_str.strip()
    if trimmed == "[]":
        return []
    try:
        data = json.loads(trimmed)
    except ValueError as exc:
        raise BasisFormatError(DATA_FORMAT_HINT) from exc
    return _rows_from_json(data)


def load_basis_from_csv(path: str | Path) -> Basis:
    path = Path(path)
    if not path.is_file():
        raise_fatal_with_remedy(
            f"Basis file not found: {path}",
            "Pass an existing CSV file with one comma-separated basis row per line.",
        )
    rows: Basis = []
    with path.open("r", encoding="utf-8", newline="") as f:
        for line_no, record in enumerate(csv.reader(f), start=1):
            if not record or all(not cell.strip() for cell in record):
                continue
            rows.append([_parse_int(cell, line=line_no) for cell in record])
    return validate_basis(rows)


def read_bases_jsonl(path: str | Path) -> List[Tuple[str, Basis]]:
    """Read a batch of bases; entries without an ``id`` are named ``line-<n>``."""
    path = Path(path)
    if not path.is_file():
        raise_fatal_with_remedy(
            f"Batch file not found: {path}",
            "Pass a JSONL file with one basis (array or {\"id\", \"basis\"} object) per line.",
        )
    entries: List[Tuple[str, Basis]] = []
    with path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except ValueError as exc:
                raise BasisFormatError(f"malformed JSON on line {line_no}", line=line_no) from exc
            entry_id = f"line-{line_no}"
            if isinstance(record, dict):
                if "basis" not in record:
                    raise BasisFormatError(f"missing 'basis' on line {line_no}", line=line_no)
                entry_id = str(record.get("id", entry_id))
                record = record["basis"]
            entries.append((entry_id, _rows_from_json(record, line=line_no)))
    return entries


def format_basis_as_json(basis: Sequence[Sequence[int]]) -> str:
    return json.dumps([[str(x) for x in row] for row in basis], separators=(",", ":"))


def format_basis_as_csv(basis: Sequence[Sequence[int]]) -> str:
    return "\n".join(",".join(str(x) for x in row) for row in basis)


__all__ = [
    "DATA_FORMAT_HINT",
    "format_basis_as_csv",
    "format_basis_as_json",
    "load_basis_from_csv",
    "load_basis_from_string",
    "read_bases_jsonl",
    "validate_basis",
]
