"""Tests for basis quality metrics."""

import math

import numpy as np
from pytest import approx

from lll.metrics import basis_report, gso_log_profile, profile_slope
from lll.reduction import gram_schmidt, lll_reduce


def test_profile_slope_of_line():
    assert profile_slope(np.array([0.0, 1.0, 2.0, 3.0])) == approx(1.0)
    assert profile_slope(np.array([4.0, 2.0, 0.0])) == approx(-2.0)


def test_profile_slope_degenerate():
    assert profile_slope(np.array([5.0])) == 0.0
    assert profile_slope(np.zeros(0)) == 0.0


def test_gso_log_profile(example_basis):
    profile = gso_log_profile(gram_schmidt(example_basis))
    assert profile.dtype == np.float64
    assert profile[0] == approx(0.5 * math.log(3))
    assert profile.sum() == approx(math.log(3))


def test_identity_report():
    report = basis_report([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    assert report.rank == 3
    assert report.dimension == 3
    assert report.log_volume == approx(0.0)
    assert report.first_norm == approx(1.0)
    assert report.log_orthogonality_defect == approx(0.0)
    assert report.root_hermite_factor == approx(1.0)
    assert report.gso_slope == approx(0.0)
    assert report.is_reduced


def test_report_of_reduced_example(example_basis):
    result = lll_reduce(example_basis)
    report = basis_report(result.basis, gso=result.gso)
    # |det| of the example lattice is 3
    assert report.log_volume == approx(math.log(3))
    assert report.first_norm == approx(1.0)
    assert report.is_reduced
    original = basis_report(example_basis)
    assert not original.is_reduced
    assert report.log_orthogonality_defect < original.log_orthogonality_defect


def test_empty_report():
    report = basis_report([])
    assert report.rank == 0
    assert report.is_reduced
    assert report.to_dict()["root_hermite_factor"] == 1.0


def test_huge_entries_do_not_overflow():
    report = basis_report([[10**400, 0], [0, 1]])
    assert report.log_volume == approx(400 * math.log(10))
    assert math.isinf(report.first_norm)
    assert math.isfinite(report.root_hermite_factor)
    assert not report.is_reduced
