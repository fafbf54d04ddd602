import stat
from unittest.mock import Mock

import pytest
from web3.providers import BaseProvider


def write_script(path, body):
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


@pytest.fixture
def sleeping_executable(tmp_path):
    """Stand-in for the anvil binary which runs until killed."""
    return write_script(tmp_path.joinpath("anvil-sleep"), "exec sleep 60")


@pytest.fixture
def exiting_executable(tmp_path):
    """Stand-in for the anvil binary which exits right away with status 0."""
    return write_script(tmp_path.joinpath("anvil-exit"), "exit 0")


@pytest.fixture
def crashing_executable(tmp_path):
    """Stand-in for the anvil binary which exits right away with status 3."""
    return write_script(tmp_path.joinpath("anvil-crash"), "exit 3")


@pytest.fixture
def mock_provider():
    provider = Mock(spec=BaseProvider)
    provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": None}
    return provider


@pytest.fixture
def minimal_definition_dict():
    """A dictionary with the minimum required keys for instantiating a NodeConfig."""
    return {"node": {"options": {"port": 8545}}}


@pytest.fixture
def signalled_executable(tmp_path):
    """Stand-in for the anvil binary which is killed by SIGKILL right away."""
    return write_script(tmp_path.joinpath("anvil-killed"), "kill -9 $$")
