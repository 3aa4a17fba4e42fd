"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from structcopy import Copier, CopierSettings


@pytest.fixture
def copier():
    """Copier with default settings, independent of the environment."""
    return Copier(CopierSettings(init_all_embedded=False, max_depth=100))


@pytest.fixture
def init_all_copier():
    """Copier that allocates every null embedded pointer."""
    return Copier(CopierSettings(init_all_embedded=True))


@pytest.fixture
def reset_default_copier(monkeypatch):
    """Forget the process-wide copier for the duration of a test."""
    monkeypatch.setattr("structcopy.copier.copier._copier", None)
