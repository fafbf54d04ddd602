"""Client for anvil's debug and admin JSON-RPC extensions.

Anvil exposes a set of ``anvil_*`` methods next to the standard ``eth_*``
API, allowing tests to rewrite chain state directly::

    anvil_setBalance        [address, "0x<wei>"]
    anvil_setNonce          [address, "0x<nonce>"]
    anvil_setCode           [address, "0x<bytecode>"]
    anvil_setStorageAt      [address, "0x<32 byte slot>", "0x<32 byte value>"]
    anvil_setMinGasPrice    ["0x<wei>"]
    anvil_setNextBlockBaseFeePerGas ["0x<wei>"]
    anvil_setChainId        ["0x<id>"]
    anvil_setCoinbase       [address]
    anvil_setLoggingEnabled [true|false]
    anvil_reset             [] or [{"forking": {"jsonRpcUrl": <str>, "blockNumber": <str>}}]
    anvil_dumpState         [] -> "0x<state>"
    anvil_loadState         ["0x<state>"]
    anvil_nodeInfo          [] -> {...}

:class:`AnvilClient` maps each of these to one method. It does not own a
connection: it is layered on top of a :mod:`web3` provider the caller
created, and the same provider serves regular ``eth_*`` queries.
"""
from anvil_harness.rpc.client import AnvilClient
from anvil_harness.rpc.types import NodeInfo

__all__ = ["AnvilClient", "NodeInfo"]
