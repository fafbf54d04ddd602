"""Parameter encoding for the anvil JSON-RPC extensions.

Quantities are sent the way ``eth_*`` quantities are: ``0x`` prefixed
lowercase hex without leading zeros (``0`` becomes ``0x0``). Binary data is
``0x`` prefixed lowercase hex. Addresses go out checksummed, and storage
slots and values as 32 byte words.
"""
from typing import Union

from eth_typing import AnyAddress, ChecksumAddress, HexStr
from eth_utils import decode_hex, encode_hex, is_hexstr, to_checksum_address, to_hex

Data = Union[bytes, bytearray, str]
Word = Union[int, bytes, bytearray, str]

WORD_SIZE = 32


def encode_quantity(value: int) -> HexStr:
    return to_hex(int(value))


def encode_data(data: Data) -> HexStr:
    if isinstance(data, str):
        if not is_hexstr(data):
            raise ValueError(f"Expected a hex string, got {data!r}")
        data = decode_hex(data)
    return encode_hex(bytes(data))


def encode_address(address: AnyAddress) -> ChecksumAddress:
    return to_checksum_address(address)


def encode_word(value: Word) -> HexStr:
    """Encode `value` as a left-padded 32 byte word (storage slots, storage values, hashes)."""
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Expected a non-negative integer, got {value}")
        try:
            raw = value.to_bytes(WORD_SIZE, "big")
        except OverflowError:
            raise ValueError(f"Value does not fit into {WORD_SIZE} bytes: {value:#x}") from None
    else:
        raw = decode_hex(encode_data(value))
        if len(raw) > WORD_SIZE:
            raise ValueError(f"Value does not fit into {WORD_SIZE} bytes: {len(raw)} bytes given")
        raw = raw.rjust(WORD_SIZE, b"\x00")
    return encode_hex(raw)
