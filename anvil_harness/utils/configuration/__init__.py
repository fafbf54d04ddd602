from anvil_harness.utils.configuration.base import ConfigMapping
from anvil_harness.utils.configuration.nodes import NodeConfig

__all__ = ["ConfigMapping", "NodeConfig"]
