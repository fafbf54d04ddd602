import subprocess
from unittest.mock import patch

from anvil_harness.node.executor import AnvilExecutor
from anvil_harness.node.options import with_chain_id, with_port, with_silent


def test_command_line_is_executable_followed_by_flattened_options():
    executor = AnvilExecutor([with_port(8545), with_silent(), with_chain_id(1)], executable="anvil")
    assert executor.command_line == ["anvil", "--port", "8545", "--silent", "--chain-id", "1"]


def test_no_options_runs_the_bare_executable():
    assert AnvilExecutor(executable="/opt/anvil").command_line == ["/opt/anvil"]


@patch("mirakuru.base.subprocess.Popen", autospec=True)
def test_output_is_discarded_by_default(mock_popen):
    AnvilExecutor(executable="anvil").start()
    kwargs = mock_popen.call_args[1]
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stderr"] is subprocess.DEVNULL
    assert kwargs["stdin"] is subprocess.DEVNULL


@patch("mirakuru.base.subprocess.Popen", autospec=True)
def test_output_can_be_redirected(mock_popen, tmp_path):
    with tmp_path.joinpath("anvil.out").open("w") as out:
        AnvilExecutor(executable="anvil", stdout=out, stderr=subprocess.STDOUT).start()
    kwargs = mock_popen.call_args[1]
    assert kwargs["stdout"] is out
    assert kwargs["stderr"] == subprocess.STDOUT


def test_pid_is_none_until_started_and_set_while_running(sleeping_executable):
    executor = AnvilExecutor(executable=sleeping_executable)
    assert executor.pid is None
    executor.start()
    try:
        assert executor.running()
        assert executor.pid == executor.process.pid
    finally:
        executor.kill()
    assert executor.pid is None
