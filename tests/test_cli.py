from __future__ import annotations

import json
from math import prod
from pathlib import Path

import pytest

from lll.cli import cli_main
from lll.common.logging import configure_logging
from lll.reduction import gram_schmidt

EXAMPLE_DATA = '[["1","1","1"],["-1","0","2"],["3","5","6"]]'
EXAMPLE_REDUCED_JSON = '[["0","1","0"],["1","0","1"],["-1","0","2"]]'


def test_cli_test_mode(capsys):
    rc = cli_main(["--test"])
    captured = capsys.readouterr()
    assert rc == 0
    assert captured.out == (
        "Original basis: [[1, 1, 1], [-1, 0, 2], [3, 5, 6]]\n"
        "\n"
        "Reduced basis (LLL): [[0, 1, 0], [1, 0, 1], [-1, 0, 2]]\n"
    )


def test_cli_data(capsys):
    rc = cli_main(["--data", EXAMPLE_DATA])
    captured = capsys.readouterr()
    assert rc == 0, captured.err
    assert captured.out.strip() == EXAMPLE_REDUCED_JSON


def test_cli_file(tmp_path: Path, capsys):
    path = tmp_path / "basis.csv"
    path.write_text("1,1,1\n-1,0,2\n3,5,6\n", encoding="utf-8")
    rc = cli_main(["--file", str(path)])
    assert rc == 0
    assert capsys.readouterr().out.strip() == EXAMPLE_REDUCED_JSON


def test_cli_file_takes_precedence_over_data(tmp_path: Path, capsys):
    path = tmp_path / "basis.csv"
    path.write_text("1,0\n0,1\n", encoding="utf-8")
    rc = cli_main(["--file", str(path), "--data", EXAMPLE_DATA])
    assert rc == 0
    assert capsys.readouterr().out.strip() == '[["1","0"],["0","1"]]'


def test_cli_csv_format(capsys):
    rc = cli_main(["--data", EXAMPLE_DATA, "--format", "csv"])
    assert rc == 0
    assert capsys.readouterr().out == "0,1,0\n1,0,1\n-1,0,2\n"


def test_cli_empty_basis(capsys):
    rc = cli_main(["--data", "[]"])
    assert rc == 0
    assert capsys.readouterr().out == "[]\n"


def test_cli_without_input_fails(capsys):
    rc = cli_main([])
    captured = capsys.readouterr()
    assert rc == 2
    assert "--test" in captured.err
    assert captured.out == ""


def test_cli_malformed_data(capsys):
    rc = cli_main(["--data", "1,2,3"])
    captured = capsys.readouterr()
    assert rc == 2
    assert captured.err.startswith("Error:")


def test_cli_missing_file(tmp_path: Path, capsys):
    rc = cli_main(["--file", str(tmp_path / "nope.csv")])
    assert rc == 2
    assert "Remediation" in capsys.readouterr().err


def test_cli_dependent_basis(capsys):
    rc = cli_main(["--data", "[[1,2],[2,4]]"])
    assert rc == 2
    assert "linearly dependent" in capsys.readouterr().err


def test_cli_invalid_delta(capsys):
    rc = cli_main(["--data", EXAMPLE_DATA, "--delta", "0.2"])
    assert rc == 2
    assert "delta" in capsys.readouterr().err


def test_cli_delta_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("LLL_DELTA", "5")
    rc = cli_main(["--data", EXAMPLE_DATA])
    assert rc == 2
    assert "delta" in capsys.readouterr().err


def test_cli_report_and_verify(capsys):
    rc = cli_main(["--data", EXAMPLE_DATA, "--report", "--verify", "--delta", "0.99"])
    captured = capsys.readouterr()
    assert rc == 0
    report = json.loads(captured.err)
    assert report["is_reduced"] is True
    assert report["rank"] == 3
    assert report["swaps"] >= 1


def test_cli_big_integers_round_trip(capsys):
    big = 10**60
    data = json.dumps([[str(1), str(0), str(big)], [str(0), str(1), str(2 * big + 1)], ["0", "0", "7"]])
    rc = cli_main(["--data", data])
    captured = capsys.readouterr()
    assert rc == 0, captured.err
    rows = json.loads(captured.out)
    assert all(isinstance(x, str) for row in rows for x in row)
    reduced = [[int(x) for x in row] for row in rows]
    # Gram determinant is det(B)^2 = 7^2
    assert prod(gram_schmidt(reduced).b_norms) == 49


def _write_batch(tmp_path: Path) -> Path:
    path = tmp_path / "bases.jsonl"
    lines = [
        json.dumps({"id": "example", "basis": json.loads(EXAMPLE_DATA)}),
        json.dumps([[1, 2], [2, 4]]),
        "",
        json.dumps([[1, 1], [1, 2]]),
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_cli_batch_to_file(tmp_path: Path, capsys):
    out = tmp_path / "reduced.jsonl"
    rc = cli_main(["--batch", str(_write_batch(tmp_path)), "--out", str(out), "--quiet"])
    assert rc == 1  # one dependent basis in the batch
    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [r["id"] for r in records] == ["example", "line-2", "line-4"]
    assert json.dumps(records[0]["basis"], separators=(",", ":")) == EXAMPLE_REDUCED_JSON
    assert records[1]["error"]["error"] == "LinearlyDependentBasisError"
    assert records[2]["basis"] == [["-1", "0"], ["0", "1"]]
    assert capsys.readouterr().out == ""


def test_cli_batch_to_stdout_with_verify(tmp_path: Path, capsys):
    path = tmp_path / "ok.jsonl"
    path.write_text('[[1,1],[1,2]]\n[[3,0],[0,2]]\n', encoding="utf-8")
    rc = cli_main(["--batch", str(path), "--verify", "--quiet"])
    captured = capsys.readouterr()
    assert rc == 0
    records = [json.loads(line) for line in captured.out.splitlines()]
    assert len(records) == 2
    assert all(r["verified"] for r in records)
    assert records[1]["basis"] == [["0", "2"], ["3", "0"]]


def test_cli_batch_missing_file(tmp_path: Path, capsys):
    rc = cli_main(["--batch", str(tmp_path / "none.jsonl"), "--quiet"])
    assert rc == 2
    assert "Error:" in capsys.readouterr().err


def test_cli_batch_unwritable_out(tmp_path: Path, capsys):
    out = tmp_path / "missing" / "dir" / "reduced.jsonl"
    rc = cli_main(["--batch", str(_write_batch(tmp_path)), "--out", str(out), "--quiet"])
    captured = capsys.readouterr()
    assert rc == 2
    assert captured.err.startswith("Error:")
    assert not out.exists()


def test_cli_out_requires_batch(tmp_path: Path, capsys):
    rc = cli_main(["--data", EXAMPLE_DATA, "--out", str(tmp_path / "x.jsonl")])
    captured = capsys.readouterr()
    assert rc == 2
    assert "--out" in captured.err
    assert captured.out == ""


def test_cli_batch_rejects_csv_format(tmp_path: Path, capsys):
    rc = cli_main(["--batch", str(_write_batch(tmp_path)), "--format", "csv", "--quiet"])
    captured = capsys.readouterr()
    assert rc == 2
    assert "--format" in captured.err
    assert captured.out == ""


@pytest.fixture
def quiet_logging_after():
    yield
    configure_logging(verbose=False)


def test_cli_normal_run_keeps_stderr_empty(capsys):
    rc = cli_main(["--data", EXAMPLE_DATA])
    captured = capsys.readouterr()
    assert rc == 0
    assert captured.err == ""
    assert captured.out.strip() == EXAMPLE_REDUCED_JSON


def test_cli_verbose_logs_reduction_summary(capsys, quiet_logging_after):
    rc = cli_main(["--data", EXAMPLE_DATA, "--verbose"])
    captured = capsys.readouterr()
    assert rc == 0
    assert "DEBUG" in captured.err
    assert "LLL reduced 3x3 basis" in captured.err
    assert "2 swaps" in captured.err
    # logs never leak into the machine-readable output
    assert captured.out.strip() == EXAMPLE_REDUCED_JSON
