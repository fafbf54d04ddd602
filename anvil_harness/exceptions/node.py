class NodeError(RuntimeError):
    """There was a problem with a :class:`anvil_harness.node.Node` instance."""


class AlreadyRunning(NodeError):
    """:meth:`Node.start` was called while the node was starting or running.

    The existing process is left untouched.
    """


class ProcessNotFound(NodeError, ProcessLookupError):
    """There is no live anvil process to act upon.

    Raised by :meth:`Node.stop` if the node was never started, or if its
    process has already exited.
    """
