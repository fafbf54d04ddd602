"""Command line options for the anvil binary.

Each ``with_*`` function returns an :class:`Option`, the exact token sequence
anvil expects for one flag. Options are combined in caller order::

    node = Node(with_port(8545), with_chain_id(13451), with_silent())

Values are formatted, never validated: anvil itself rejects bad values when
the process starts.
"""
import enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Union


class Option(tuple):
    """A single anvil flag, optionally followed by its value."""

    def __new__(cls, flag: str, value: Optional[Union[int, str]] = None):
        tokens = (flag,) if value is None else (flag, str(value))
        return super().__new__(cls, tokens)

    @property
    def flag(self) -> str:
        return self[0]

    @property
    def value(self) -> Optional[str]:
        return self[1] if len(self) > 1 else None

    def __getnewargs__(self):
        return tuple(self)

    def __repr__(self):
        return f"{self.__class__.__qualname__}{tuple(self)!r}"


def flatten(options: Iterable[Option]) -> List[str]:
    """Concatenate the tokens of `options`, in order, into an argument list."""
    return [token for option in options for token in option]


def with_block_time(seconds: int) -> Option:
    """Block time in seconds for interval mining (``-b, --block-time``)."""
    return Option("--block-time", seconds)


def with_balance(balance: int) -> Option:
    """Initial balance of the dev accounts, in ether (``--balance``)."""
    return Option("--balance", balance)


def with_accounts(count: int) -> Option:
    """Number of dev accounts to generate (``-a, --accounts``)."""
    return Option("--accounts", count)


def with_derivation_path(path: str) -> Option:
    """Derivation path of the generated HD wallet accounts (``--derivation-path``)."""
    return Option("--derivation-path", path)


def with_help() -> Option:
    return Option("--help")


def with_hardfork(name: str) -> Option:
    """EVM hardfork to run (``--hardfork``)."""
    return Option("--hardfork", name)


def with_init(path: str) -> Option:
    """Initialize the genesis block from a ``genesis.json`` file (``--init``)."""
    return Option("--init", path)


def with_mnemonic(mnemonic: str) -> Option:
    """BIP39 mnemonic used to generate the dev accounts (``-m, --mnemonic``)."""
    return Option("--mnemonic", mnemonic)


def with_no_mining() -> Option:
    """Disable both auto and interval mining (``--no-mining``)."""
    return Option("--no-mining")


def with_order(order: str) -> Option:
    """Transaction ordering in the mempool, e.g. ``fees`` or ``fifo`` (``--order``)."""
    return Option("--order", order)


def with_port(port: int) -> Option:
    return Option("--port", port)


def with_steps_tracing() -> Option:
    """Enable steps tracing for geth style traces (``--steps-tracing``)."""
    return Option("--steps-tracing")


def with_ipc(path: str = "") -> Option:
    """Serve an IPC endpoint (``--ipc [PATH]``).

    An empty `path` emits the bare flag, letting anvil pick its default
    socket location.
    """
    if not path:
        return Option("--ipc")
    return Option("--ipc", path)


def with_silent() -> Option:
    """Don't print anything on startup (``--silent``)."""
    return Option("--silent")


def with_timestamp(timestamp: int) -> Option:
    """Timestamp of the genesis block (``--timestamp``)."""
    return Option("--timestamp", timestamp)


def with_version() -> Option:
    return Option("--version")


def with_disable_default_create2_deployer() -> Option:
    return Option("--disable-default-create2-deployer")


def with_fork_url(url: str) -> Option:
    """Fork state from a remote endpoint (``-f, --fork-url``)."""
    return Option("--fork-url", url)


def with_fork_block_number(block: int) -> Option:
    return Option("--fork-block-number", block)


def with_fork_retry_backoff(backoff: int) -> Option:
    """Initial retry backoff on fork errors (``--fork-retry-backoff``)."""
    return Option("--fork-retry-backoff", backoff)


def with_fork_transaction_hash(tx_hash: str) -> Option:
    """Fork state as of a specific transaction (``--fork-transaction-hash``)."""
    return Option("--fork-transaction-hash", tx_hash)


def with_retries(count: int) -> Option:
    """Number of retry attempts anvil makes for spurious network errors (``--retries``)."""
    return Option("--retries", count)


def with_timeout(ms: int) -> Option:
    """Request timeout in forking mode, in milliseconds (``--timeout``)."""
    return Option("--timeout", ms)


def with_compute_units_per_second(cups: int) -> Option:
    return Option("--compute-units-per-second", cups)


def with_no_rate_limit() -> Option:
    return Option("--no-rate-limit")


def with_no_storage_caching() -> Option:
    """Disable RPC caching of storage slots (``--no-storage-caching``)."""
    return Option("--no-storage-caching")


def with_base_fee(fee: int) -> Option:
    return Option("--base-fee", fee)


def with_block_base_fee_per_gas(fee: int) -> Option:
    return Option("--block-base-fee-per-gas", fee)


def with_chain_id(chain_id: int) -> Option:
    return Option("--chain-id", chain_id)


def with_code_size_limit(limit: int) -> Option:
    """EIP-170 contract code size limit in bytes (``--code-size-limit``)."""
    return Option("--code-size-limit", limit)


def with_gas_limit(limit: int) -> Option:
    return Option("--gas-limit", limit)


def with_gas_price(price: int) -> Option:
    return Option("--gas-price", price)


def with_allow_origin(origin: str) -> Option:
    """CORS ``allow_origin`` header value (``--allow-origin``)."""
    return Option("--allow-origin", origin)


def with_no_cors() -> Option:
    return Option("--no-cors")


def with_host(host: str) -> Option:
    """Address the RPC server listens on (``--host``)."""
    return Option("--host", host)


def with_config_out(path: str) -> Option:
    """Write the startup information (accounts, keys, fees) to `path` as JSON.

    The file can be loaded with :meth:`anvil_harness.rpc.NodeInfo.from_config_out`.
    """
    return Option("--config-out", path)


def with_prune_history() -> Option:
    """Don't keep full chain history (``--prune-history``)."""
    return Option("--prune-history")


def with_no_request_size_limit() -> Option:
    """Disable the default 2MB request body limit (``--no-request-size-limit``)."""
    return Option("--no-request-size-limit")


class OPTION_TYPE(enum.Enum):
    SWITCH = "switch"
    VALUE = "value"
    #: The flag may be given with or without a value (``--ipc [PATH]``).
    OPTIONAL_VALUE = "optional-value"


class OptionSpec(NamedTuple):
    builder: Callable[..., Option]
    kind: OPTION_TYPE
    value_type: Optional[type] = None


#: Registry mapping anvil option names (without the leading dashes) to their builders.
OPTION_BUILDERS: Dict[str, OptionSpec] = {
    "accounts": OptionSpec(with_accounts, OPTION_TYPE.VALUE, int),
    "allow-origin": OptionSpec(with_allow_origin, OPTION_TYPE.VALUE, str),
    "balance": OptionSpec(with_balance, OPTION_TYPE.VALUE, int),
    "base-fee": OptionSpec(with_base_fee, OPTION_TYPE.VALUE, int),
    "block-base-fee-per-gas": OptionSpec(with_block_base_fee_per_gas, OPTION_TYPE.VALUE, int),
    "block-time": OptionSpec(with_block_time, OPTION_TYPE.VALUE, int),
    "chain-id": OptionSpec(with_chain_id, OPTION_TYPE.VALUE, int),
    "code-size-limit": OptionSpec(with_code_size_limit, OPTION_TYPE.VALUE, int),
    "compute-units-per-second": OptionSpec(
        with_compute_units_per_second, OPTION_TYPE.VALUE, int
    ),
    "config-out": OptionSpec(with_config_out, OPTION_TYPE.VALUE, str),
    "derivation-path": OptionSpec(with_derivation_path, OPTION_TYPE.VALUE, str),
    "disable-default-create2-deployer": OptionSpec(
        with_disable_default_create2_deployer, OPTION_TYPE.SWITCH
    ),
    "fork-block-number": OptionSpec(with_fork_block_number, OPTION_TYPE.VALUE, int),
    "fork-retry-backoff": OptionSpec(with_fork_retry_backoff, OPTION_TYPE.VALUE, int),
    "fork-transaction-hash": OptionSpec(with_fork_transaction_hash, OPTION_TYPE.VALUE, str),
    "fork-url": OptionSpec(with_fork_url, OPTION_TYPE.VALUE, str),
    "gas-limit": OptionSpec(with_gas_limit, OPTION_TYPE.VALUE, int),
    "gas-price": OptionSpec(with_gas_price, OPTION_TYPE.VALUE, int),
    "hardfork": OptionSpec(with_hardfork, OPTION_TYPE.VALUE, str),
    "help": OptionSpec(with_help, OPTION_TYPE.SWITCH),
    "host": OptionSpec(with_host, OPTION_TYPE.VALUE, str),
    "init": OptionSpec(with_init, OPTION_TYPE.VALUE, str),
    "ipc": OptionSpec(with_ipc, OPTION_TYPE.OPTIONAL_VALUE, str),
    "mnemonic": OptionSpec(with_mnemonic, OPTION_TYPE.VALUE, str),
    "no-cors": OptionSpec(with_no_cors, OPTION_TYPE.SWITCH),
    "no-mining": OptionSpec(with_no_mining, OPTION_TYPE.SWITCH),
    "no-rate-limit": OptionSpec(with_no_rate_limit, OPTION_TYPE.SWITCH),
    "no-request-size-limit": OptionSpec(with_no_request_size_limit, OPTION_TYPE.SWITCH),
    "no-storage-caching": OptionSpec(with_no_storage_caching, OPTION_TYPE.SWITCH),
    "order": OptionSpec(with_order, OPTION_TYPE.VALUE, str),
    "port": OptionSpec(with_port, OPTION_TYPE.VALUE, int),
    "prune-history": OptionSpec(with_prune_history, OPTION_TYPE.SWITCH),
    "retries": OptionSpec(with_retries, OPTION_TYPE.VALUE, int),
    "silent": OptionSpec(with_silent, OPTION_TYPE.SWITCH),
    "steps-tracing": OptionSpec(with_steps_tracing, OPTION_TYPE.SWITCH),
    "timeout": OptionSpec(with_timeout, OPTION_TYPE.VALUE, int),
    "timestamp": OptionSpec(with_timestamp, OPTION_TYPE.VALUE, int),
    "version": OptionSpec(with_version, OPTION_TYPE.SWITCH),
}
