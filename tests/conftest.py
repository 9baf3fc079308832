"""Shared pytest fixtures."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stellare_types.interop import disable, enabled_capabilities


@pytest.fixture(autouse=True)
def reset_capabilities():
    """Leave every test with no interop capability enabled."""
    yield
    for capability in enabled_capabilities():
        disable(capability)
