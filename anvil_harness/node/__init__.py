"""Anvil node process utilities.

Usage::

    node = Node(with_port(8545), with_chain_id(13451), with_silent())
    node.start()
    ...
    node.stop()

or, from a configuration file::

    config = NodeConfig.from_file("node.yaml")
    with Node.from_config(config) as node:
        ...
"""
from anvil_harness.node.executor import AnvilExecutor
from anvil_harness.node.options import OPTION_BUILDERS, OPTION_TYPE, Option, flatten
from anvil_harness.node.supervisor import Node, NodeState

__all__ = [
    "AnvilExecutor",
    "Node",
    "NodeState",
    "OPTION_BUILDERS",
    "OPTION_TYPE",
    "Option",
    "flatten",
]
