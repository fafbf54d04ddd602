from typing import Any, Optional, Union

import structlog
from eth_typing import AnyAddress
from hexbytes import HexBytes
from web3 import HTTPProvider, IPCProvider, Web3
from web3.providers import BaseProvider
from web3.types import RPCEndpoint

from anvil_harness.constants import RPC_REQUEST_TIMEOUT
from anvil_harness.exceptions.rpc import AnvilRPCError
from anvil_harness.rpc.encoding import (
    Data,
    Word,
    encode_address,
    encode_data,
    encode_quantity,
    encode_word,
)
from anvil_harness.rpc.types import NodeInfo

log = structlog.get_logger(__name__)


class AnvilClient:
    """Client for the ``anvil_*`` debug and admin JSON-RPC methods.

    Wraps a transport owned by the caller: any :mod:`web3` provider, or a
    :class:`web3.Web3` instance whose provider is then used. Every method is
    a single request on that transport. Transport errors propagate as
    raised; error responses from the node raise :exc:`AnvilRPCError`.

    Regular chain queries are out of scope, use :class:`web3.Web3` on the
    same provider for those::

        provider = HTTPProvider("http://127.0.0.1:8545")
        anvil = AnvilClient(provider)
        anvil.set_balance(address, 53 * 10**18)
        Web3(provider).eth.get_balance(address)
    """

    def __init__(self, transport: Union[BaseProvider, Web3]):
        if isinstance(transport, Web3):
            transport = transport.provider
        self.provider = transport

    @classmethod
    def from_url(cls, endpoint: str, timeout: float = RPC_REQUEST_TIMEOUT) -> "AnvilClient":
        """Build a client for an HTTP url or an IPC socket path.

        :raises ValueError: if `endpoint` is a url with any scheme but http(s).
        """
        scheme, separator, _ = endpoint.partition("://")
        if scheme in ("http", "https"):
            provider = HTTPProvider(endpoint, request_kwargs={"timeout": timeout})
        elif separator:
            raise ValueError(
                f"Unsupported endpoint scheme {scheme!r}, expected http, https or an IPC path"
            )
        else:
            provider = IPCProvider(endpoint, timeout=timeout)
        return cls(provider)

    def __repr__(self):
        return f"{self.__class__.__qualname__}({self.provider!r})"

    def request(self, method: str, *params: Any) -> Any:
        """Send `method` with `params` and return the result of the response."""
        log.debug("Sending anvil RPC request", method=method, params=params)
        response = self.provider.make_request(RPCEndpoint(method), list(params))
        if response.get("error") is not None:
            log.debug("Anvil RPC request failed", method=method, error=response["error"])
            raise AnvilRPCError(method, response["error"])
        return response.get("result")

    def set_balance(self, address: AnyAddress, balance: int) -> None:
        self.request("anvil_setBalance", encode_address(address), encode_quantity(balance))

    def set_nonce(self, address: AnyAddress, nonce: int) -> None:
        self.request("anvil_setNonce", encode_address(address), encode_quantity(nonce))

    def set_code(self, address: AnyAddress, code: Data) -> None:
        self.request("anvil_setCode", encode_address(address), encode_data(code))

    def set_storage_at(self, address: AnyAddress, slot: Word, value: Word) -> None:
        """Write `value` to the storage `slot` of the account at `address`."""
        self.request(
            "anvil_setStorageAt", encode_address(address), encode_word(slot), encode_word(value)
        )

    def set_min_gas_price(self, price: int) -> None:
        """Set the minimum gas price. Anvil refuses this once EIP-1559 is active."""
        self.request("anvil_setMinGasPrice", encode_quantity(price))

    def set_next_block_base_fee_per_gas(self, fee: int) -> None:
        self.request("anvil_setNextBlockBaseFeePerGas", encode_quantity(fee))

    def set_chain_id(self, chain_id: int) -> None:
        self.request("anvil_setChainId", encode_quantity(chain_id))

    def set_coinbase(self, address: AnyAddress) -> None:
        self.request("anvil_setCoinbase", encode_address(address))

    def set_logging_enabled(self, enabled: bool) -> None:
        self.request("anvil_setLoggingEnabled", bool(enabled))

    def reset(self, fork_url: str = "", block_number: Optional[int] = None) -> None:
        """Reset the chain.

        Without `fork_url` the node returns to the state it was started in.
        Otherwise it forks `fork_url`, at `block_number` if given and at the
        latest block if not.
        """
        if not fork_url:
            self.request("anvil_reset")
            return

        forking = {"jsonRpcUrl": fork_url}
        if block_number is not None:
            forking["blockNumber"] = str(block_number)
        self.request("anvil_reset", {"forking": forking})

    def dump_state(self) -> HexBytes:
        """Return the node state as the opaque blob accepted by :meth:`load_state`."""
        return HexBytes(self.request("anvil_dumpState"))

    def load_state(self, state: Data) -> None:
        """Merge a blob produced by :meth:`dump_state` into the current state."""
        self.request("anvil_loadState", encode_data(state))

    def node_info(self) -> NodeInfo:
        return NodeInfo.from_dict(self.request("anvil_nodeInfo"))
