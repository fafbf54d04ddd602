import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from eth_typing import ChecksumAddress, HexStr
from eth_utils import to_checksum_address, to_int


def _to_int(value: Union[None, int, str]) -> Optional[int]:
    """Parse an integer sent either as a JSON number, a decimal string or a hex string."""
    if value is None or isinstance(value, int):
        return value
    if value.lower().startswith("0x"):
        return to_int(hexstr=HexStr(value))
    return int(value)


@dataclass(frozen=True)
class NodeInfo:
    """Snapshot of a node's configuration.

    Built from either of the two documents anvil produces:

        * the JSON file written on startup when run with ``--config-out``
          (snake_case keys, includes accounts, keys and the HD wallet),
        * the result of ``anvil_nodeInfo`` (camelCase keys, fee settings
          nested under ``environment``, no account information).

    Whatever is missing from the source document is left empty. The
    untouched document is available as :attr:`raw`.
    """

    available_accounts: List[ChecksumAddress] = field(default_factory=list)
    private_keys: List[HexStr] = field(default_factory=list)
    base_fee: Optional[int] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
    chain_id: Optional[int] = None
    derivation_path: Optional[str] = None
    mnemonic: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "NodeInfo":
        environment = payload.get("environment") or {}
        wallet = payload.get("wallet") or {}

        def pick(snake_key, camel_key):
            if snake_key in payload:
                return payload[snake_key]
            return environment.get(camel_key)

        return cls(
            available_accounts=[
                to_checksum_address(account) for account in payload.get("available_accounts", [])
            ],
            private_keys=list(payload.get("private_keys", [])),
            base_fee=_to_int(pick("base_fee", "baseFee")),
            gas_limit=_to_int(pick("gas_limit", "gasLimit")),
            gas_price=_to_int(pick("gas_price", "gasPrice")),
            chain_id=_to_int(pick("chain_id", "chainId")),
            derivation_path=wallet.get("derivation_path"),
            mnemonic=wallet.get("mnemonic"),
            raw=dict(payload),
        )

    @classmethod
    def from_config_out(cls, path: Union[str, Path]) -> "NodeInfo":
        """Load the file anvil writes when started with ``--config-out``."""
        return cls.from_dict(json.loads(Path(path).read_text()))
