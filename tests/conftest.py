"""Shared fixtures for the lll test suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_delta_env(monkeypatch):
    """Keep a developer's LLL_DELTA from leaking into tests."""
    monkeypatch.delenv("LLL_DELTA", raising=False)


@pytest.fixture
def example_basis() -> list[list[int]]:
    return [[1, 1, 1], [-1, 0, 2], [3, 5, 6]]


@pytest.fixture
def example_reduced() -> list[list[int]]:
    return [[0, 1, 0], [1, 0, 1], [-1, 0, 2]]
