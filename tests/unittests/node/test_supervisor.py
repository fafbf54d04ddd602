from unittest.mock import patch

import pytest

from anvil_harness.exceptions import AlreadyRunning, ProcessNotFound
from anvil_harness.node import Node, NodeState
from anvil_harness.node.options import with_chain_id, with_port
from anvil_harness.utils.configuration.nodes import NodeConfig

WAIT_TIMEOUT = 10


@pytest.fixture
def node(sleeping_executable):
    node = Node(with_port(8545), executable=sleeping_executable)
    yield node
    if node.state is NodeState.RUNNING:
        node.stop()


class TestNodeStart:
    def test_new_node_is_not_started(self, node):
        assert node.state is NodeState.NOT_STARTED
        assert node.is_running is False
        assert node.pid is None

    def test_start_spawns_process_and_marks_node_running(self, node):
        node.start()
        assert node.state is NodeState.RUNNING
        assert node.is_running
        assert node.pid is not None

    def test_node_stays_running_after_start_returns(self, node):
        node.start()
        assert node.wait(timeout=0.2) is None
        assert node.is_running

    def test_second_start_raises_already_running_without_spawning(self, node):
        node.start()
        pid = node.pid
        with patch.object(node._executor, "start", wraps=node._executor.start) as spy:
            with pytest.raises(AlreadyRunning):
                node.start()
        spy.assert_not_called()
        assert node.pid == pid
        assert node.is_running

    def test_spawn_failure_is_raised_unchanged_and_marks_node_crashed(self, tmp_path):
        node = Node(executable=str(tmp_path.joinpath("does-not-exist")))
        with pytest.raises(FileNotFoundError):
            node.start()
        assert node.state is NodeState.CRASHED

    def test_command_is_executable_followed_by_options(self, sleeping_executable):
        node = Node(with_port(8547), with_chain_id(13451), executable=sleeping_executable)
        assert node.command == [sleeping_executable, "--port", "8547", "--chain-id", "13451"]


class TestNodeStop:
    def test_stop_on_never_started_node_raises_process_not_found(self, node):
        with pytest.raises(ProcessNotFound):
            node.stop()

    def test_process_not_found_is_a_process_lookup_error(self):
        assert issubclass(ProcessNotFound, ProcessLookupError)

    def test_stop_kills_process_and_marks_node_stopped(self, node):
        node.start()
        node.stop()
        assert node.state is NodeState.STOPPED
        assert node.returncode is not None

    def test_stop_always_leaves_node_stopped(self, node):
        with pytest.raises(ProcessNotFound):
            node.stop()
        assert node.state is NodeState.STOPPED

    def test_second_stop_raises_process_not_found(self, node):
        node.start()
        node.stop()
        with pytest.raises(ProcessNotFound):
            node.stop()

    def test_node_can_be_restarted_after_stop(self, node):
        node.start()
        first_pid = node.pid
        node.stop()
        node.start()
        assert node.is_running
        assert node.pid != first_pid


class TestNodeWatcher:
    def test_clean_exit_marks_node_stopped(self, exiting_executable):
        node = Node(executable=exiting_executable)
        node.start()
        assert node.wait(timeout=WAIT_TIMEOUT) == 0
        assert node.state is NodeState.STOPPED
        assert node.is_running is False

    def test_non_zero_exit_marks_node_crashed(self, crashing_executable):
        node = Node(executable=crashing_executable)
        node.start()
        assert node.wait(timeout=WAIT_TIMEOUT) == 3
        assert node.state is NodeState.CRASHED

    def test_stop_after_process_exited_raises_process_not_found(self, exiting_executable):
        node = Node(executable=exiting_executable)
        node.start()
        node.wait(timeout=WAIT_TIMEOUT)
        with pytest.raises(ProcessNotFound):
            node.stop()

    def test_crashed_node_can_be_started_again(self, crashing_executable):
        node = Node(executable=crashing_executable)
        node.start()
        node.wait(timeout=WAIT_TIMEOUT)
        node.start()
        assert node.wait(timeout=WAIT_TIMEOUT) == 3

    def test_deliberate_stop_is_not_reported_as_crash(self, node):
        node.start()
        node.stop()
        node.wait(timeout=WAIT_TIMEOUT)
        assert node.state is NodeState.STOPPED


class TestNodeRun:
    def test_run_blocks_until_exit_and_returns_exit_code(self, crashing_executable):
        assert Node(executable=crashing_executable).run() == 3

    def test_wait_on_never_started_node_raises_process_not_found(self, node):
        with pytest.raises(ProcessNotFound):
            node.wait()


def test_context_manager_starts_and_stops_node(node):
    with node as running:
        assert running is node
        assert node.is_running
    assert node.state is NodeState.STOPPED


def test_context_manager_tolerates_process_that_already_exited(exiting_executable):
    with Node(executable=exiting_executable) as node:
        node.wait(timeout=WAIT_TIMEOUT)
    assert node.state is NodeState.STOPPED


def test_from_config_uses_configured_executable_and_options(sleeping_executable):
    config = NodeConfig(
        {"node": {"executable": sleeping_executable, "options": {"port": 8545, "silent": True}}}
    )
    node = Node.from_config(config)
    assert node.command == [sleeping_executable, "--port", "8545", "--silent"]
