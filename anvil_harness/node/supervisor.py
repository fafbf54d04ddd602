import enum
import subprocess
import threading
from typing import TYPE_CHECKING, List, Optional

import structlog

from anvil_harness.constants import DEFAULT_ANVIL_BINARY
from anvil_harness.exceptions.node import AlreadyRunning, ProcessNotFound
from anvil_harness.node.executor import AnvilExecutor, Redirect
from anvil_harness.node.options import Option

if TYPE_CHECKING:
    from anvil_harness.utils.configuration.nodes import NodeConfig

log = structlog.get_logger(__name__)


class NodeState(enum.Enum):
    NOT_STARTED = "not-started"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    CRASHED = "crashed"


#: States in which :meth:`Node.start` refuses to spawn another process.
ACTIVE_STATES = frozenset({NodeState.STARTING, NodeState.RUNNING})


class Node:
    """Supervisor for a single anvil process.

    All state transitions happen under one lock, so concurrent calls to
    :meth:`start` and :meth:`stop` never observe a half-spawned process.

    Once started, a daemon thread waits on the process and moves the node to
    :attr:`NodeState.STOPPED` or :attr:`NodeState.CRASHED` when it exits on
    its own. :attr:`state` therefore reflects whether anvil is actually alive.

    The node does not probe the RPC endpoint: callers must wait for it to
    accept connections before sending requests.
    """

    def __init__(
        self,
        *options: Option,
        executable: str = DEFAULT_ANVIL_BINARY,
        stdout: Redirect = subprocess.DEVNULL,
        stderr: Redirect = subprocess.DEVNULL,
    ):
        self._executor = AnvilExecutor(
            options, executable=executable, stdout=stdout, stderr=stderr
        )
        self._lock = threading.Lock()
        self._state = NodeState.NOT_STARTED
        self._process: Optional[subprocess.Popen] = None
        self._watcher: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config: "NodeConfig", **kwargs) -> "Node":
        kwargs.setdefault("executable", config.executable)
        return cls(*config.options, **kwargs)

    def __enter__(self) -> "Node":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.stop()
        except ProcessNotFound:
            log.debug("Node exited before leaving context", returncode=self.returncode)

    def __repr__(self):
        return f"<{self.__class__.__qualname__} state={self.state.value} pid={self.pid}>"

    @property
    def state(self) -> NodeState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is NodeState.RUNNING

    @property
    def command(self) -> List[str]:
        return self._executor.command_line

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode if self._process is not None else None

    def start(self) -> "Node":
        """Spawn the anvil process.

        :raises AlreadyRunning: if the node is starting or running already.
        :raises OSError: as raised by the OS if the binary cannot be spawned.
        """
        with self._lock:
            if self._state in ACTIVE_STATES:
                raise AlreadyRunning(f"Node is {self._state.value} (pid={self.pid})")

            if self._executor.process is not None:
                # Reap the leftovers of a process that exited on its own.
                self._executor.kill()

            self._state = NodeState.STARTING
            log.info("Starting anvil node", command=self.command)
            try:
                self._executor.start()
            except Exception:
                self._state = NodeState.CRASHED
                raise

            self._process = self._executor.process
            self._state = NodeState.RUNNING
            self._watcher = threading.Thread(
                target=self._watch,
                args=(self._process,),
                name=f"anvil-watcher-{self._process.pid}",
                daemon=True,
            )
            self._watcher.start()
            log.debug("Anvil node started", pid=self._process.pid)
        return self

    def stop(self) -> None:
        """Kill the anvil process.

        The node is left in :attr:`NodeState.STOPPED` whatever the outcome.

        :raises ProcessNotFound: if no process was spawned, or it already exited.
        """
        with self._lock:
            previous = self._state
            self._state = NodeState.STOPPING
            try:
                if self._process is None or not self._executor.running():
                    raise ProcessNotFound(f"No running anvil process (node was {previous.value})")
                log.info("Stopping anvil node", pid=self._process.pid)
                self._executor.kill()
            finally:
                self._state = NodeState.STOPPED

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Block until the process exits and return its exit code.

        Returns None if `timeout` expires first.
        """
        watcher = self._watcher
        if watcher is None:
            raise ProcessNotFound("Node was never started")
        watcher.join(timeout)
        if watcher.is_alive():
            return None
        return self.returncode

    def run(self) -> Optional[int]:
        """Start the node and block until its process exits."""
        self.start()
        return self.wait()

    def _watch(self, process: subprocess.Popen) -> None:
        returncode = process.wait()
        with self._lock:
            if process is not self._process or self._state is not NodeState.RUNNING:
                # Stopped (or restarted) deliberately, nothing to report.
                return
            if returncode == 0:
                self._state = NodeState.STOPPED
                log.info("Anvil node exited", pid=process.pid)
            else:
                self._state = NodeState.CRASHED
                log.error("Anvil node crashed", pid=process.pid, returncode=returncode)
