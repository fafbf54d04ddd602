"""Helper module for starting and stopping the anvil binary.

This uses the :mod:`mirakuru` library to spawn and kill the subprocess. Mirakuru
starts the process in its own session, so killing it also takes down any
children anvil may have spawned.
"""
import subprocess
from typing import IO, Any, Iterable, List, Optional, Union

import mirakuru

from anvil_harness.constants import DEFAULT_ANVIL_BINARY
from anvil_harness.node.options import Option, flatten

Redirect = Union[None, int, IO[Any]]


class AnvilExecutor(mirakuru.SimpleExecutor):
    """Mirakuru Executor subclass running ``anvil`` with the given options.

    stdout and stderr of the node are discarded unless redirected by passing
    `stdout` and `stderr`, respectively. stdin is never attached.
    """

    def __init__(
        self,
        options: Iterable[Option] = (),
        executable: str = DEFAULT_ANVIL_BINARY,
        stdout: Redirect = subprocess.DEVNULL,
        stderr: Redirect = subprocess.DEVNULL,
        **kwargs,
    ):
        self.executable = str(executable)
        self.options = tuple(options)
        super().__init__(
            self.command_line,
            stdin=subprocess.DEVNULL,
            stdout=stdout,
            stderr=stderr,
            **kwargs,
        )

    @property
    def command_line(self) -> List[str]:
        return [self.executable, *flatten(self.options)]

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process is not None else None
