"""Command line entrypoint for exact LLL reduction.

Examples::

    lll --data '[["11","3","4"],["2","11","5"],["6","1","9"]]'
    lll --file basis.csv --delta 0.99 --report
    lll --batch bases.jsonl --out reduced.jsonl
    lll --test

The reduced basis is the only thing written to stdout; diagnostics, reports
and errors go to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from contextlib import nullcontext
from typing import List

from loguru import logger
from tqdm import tqdm

from lll.basis_io import (
    format_basis_as_csv,
    format_basis_as_json,
    load_basis_from_csv,
    load_basis_from_string,
    read_bases_jsonl,
)
from lll.common.errors import LLLError
from lll.common.logging import configure_logging
from lll.config import DEFAULT_DELTA, ReductionSettings
from lll.metrics import basis_report
from lll.reduction import is_lll_reduced, lll, lll_reduce

TEST_BASIS = [[1, 1, 1], [-1, 0, 2], [3, 5, 6]]

NO_INPUT_MESSAGE = "Please specify input with --test, --file <path>, --data <array> or --batch <path>"


def _format(basis, fmt: str) -> str:
    if fmt == "csv":
        return format_basis_as_csv(basis)
    return format_basis_as_json(basis)


def _handle_test(_args) -> int:
    basis = [list(row) for row in TEST_BASIS]
    print(f"Original basis: {basis}")
    reduced = lll(basis, DEFAULT_DELTA)
    print(f"\nReduced basis (LLL): {reduced}")
    return 0


def _load_single(args):
    if args.file:
        logger.debug("Loading basis from CSV {}", args.file)
        return load_basis_from_csv(args.file)
    return load_basis_from_string(args.data)


def _handle_single(args, settings: ReductionSettings) -> int:
    try:
        basis = _load_single(args)
        if not basis:
            print("[]")
            return 0
        result = lll_reduce(basis, settings.delta)
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(_format(result.basis, args.format))

    if args.report:
        report = basis_report(result.basis, settings.delta, gso=result.gso)
        payload = {"swaps": result.swaps, "size_reductions": result.size_reductions}
        payload.update(report.to_dict())
        print(json.dumps(payload, indent=2), file=sys.stderr)

    if settings.verify and not is_lll_reduced(result.basis, settings.delta):
        logger.error("Output basis failed the LLL check (delta={})", settings.delta)
        return 1
    return 0


def _batch_record(entry_id: str, basis, settings: ReductionSettings) -> dict:
    try:
        result = lll_reduce(basis, settings.delta)
    except LLLError as e:
        logger.warning("Skipping {}: {}", entry_id, e)
        return {"id": entry_id, "error": e.to_dict()}
    record = {
        "id": entry_id,
        "basis": [[str(x) for x in row] for row in result.basis],
        "swaps": result.swaps,
        "size_reductions": result.size_reductions,
    }
    if settings.verify:
        record["verified"] = is_lll_reduced(result.basis, settings.delta)
    return record


def _handle_batch(args, settings: ReductionSettings) -> int:
    try:
        entries = read_bases_jsonl(args.batch)
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    failures = 0
    try:
        sink = open(args.out, "w", encoding="utf-8") if args.out else nullcontext(sys.stdout)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    with sink as out:
        for entry_id, basis in tqdm(
            entries, unit="basis", file=sys.stderr, disable=bool(args.quiet)
        ):
            record = _batch_record(entry_id, basis, settings)
            if "error" in record or record.get("verified") is False:
                failures += 1
            out.write(json.dumps(record) + "\n")

    if args.out and not args.quiet:
        print(json.dumps({"wrote": args.out, "bases": len(entries), "failures": failures}), file=sys.stderr)
    return 0 if failures == 0 else 1


def _base_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="lll", description="Exact LLL lattice basis reduction over arbitrary-precision integers"
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file", help="Path to a CSV file with one basis vector per line")
    parser.add_argument("--test", action="store_true", help="Run the built-in example")
    parser.add_argument(
        "--data",
        help='Basis given inline as [["11","3","4"],["2","11","5"]...]',
    )
    parser.add_argument(
        "--batch",
        help="JSONL file with one basis per line (array or {\"id\", \"basis\"} object)",
    )


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--delta",
        default=None,
        help="Lovász parameter in (1/4, 1], e.g. 3/4 or 0.99 (default: $LLL_DELTA or 3/4)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format for the reduced basis (not used with --batch, which writes JSONL)",
    )
    parser.add_argument("--report", action="store_true", help="Print basis metrics to stderr")
    parser.add_argument(
        "--verify", action="store_true", help="Check the output is LLL-reduced (exit 1 if not)"
    )
    parser.add_argument("--out", default=None, help="Output JSONL path (requires --batch; default stdout)")
    parser.add_argument("--quiet", action="store_true", help="Disable batch progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def _configure_parser() -> argparse.ArgumentParser:
    parser = _base_parser()
    _add_input_arguments(parser)
    _add_option_arguments(parser)
    return parser


def cli_main(argv: List[str] | None = None) -> int:
    parser = _configure_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose))

    if args.test:
        return _handle_test(args)

    try:
        settings = ReductionSettings.from_env(args.delta, verify=bool(args.verify))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.batch:
        if args.format != "json":
            print(
                "Error: --format applies to single-basis output; --batch always writes JSONL",
                file=sys.stderr,
            )
            return 2
        return _handle_batch(args, settings)
    if args.out:
        print("Error: --out is only used together with --batch", file=sys.stderr)
        return 2
    if args.file or args.data is not None:
        return _handle_single(args, settings)

    print(NO_INPUT_MESSAGE, file=sys.stderr)
    return 2


def main() -> None:  # pragma: no cover - thin wrapper
    raise SystemExit(cli_main())


__all__ = ["cli_main", "main"]
