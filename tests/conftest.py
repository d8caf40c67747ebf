"""Shared pytest fixtures for the modelframe test suite.

No test starts the native webframe; the command channel is exercised
against a local WebSocket server on an ephemeral port.
"""

import pytest

from modelframe import build_registry


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "part.STL"
    path.write_bytes(b"solid part\nendsolid part\n")
    return path


@pytest.fixture
def registry(model_file):
    return build_registry([str(model_file)])
