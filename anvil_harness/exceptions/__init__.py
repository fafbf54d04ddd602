from anvil_harness.exceptions.config import (
    ConfigurationError,
    NodeConfigurationError,
    UnknownOptionError,
)
from anvil_harness.exceptions.node import AlreadyRunning, NodeError, ProcessNotFound
from anvil_harness.exceptions.rpc import AnvilRPCError

__all__ = [
    "AlreadyRunning",
    "AnvilRPCError",
    "ConfigurationError",
    "NodeConfigurationError",
    "NodeError",
    "ProcessNotFound",
    "UnknownOptionError",
]
