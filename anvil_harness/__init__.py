"""Anvil Harness.

Launch, supervise and administer a local ``anvil`` development node.
"""
from anvil_harness.node import Node, NodeState
from anvil_harness.rpc import AnvilClient, NodeInfo

__version__ = "0.1.0"

__all__ = ["AnvilClient", "Node", "NodeInfo", "NodeState", "__version__"]
