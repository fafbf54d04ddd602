import pytest
from eth_utils import to_checksum_address

from anvil_harness.rpc.encoding import encode_address, encode_data, encode_quantity, encode_word


@pytest.mark.parametrize(
    "value, expected",
    argvalues=[(0, "0x0"), (1, "0x1"), (255, "0xff"), (53 * 10**18, "0x2df85d331a7b40000")],
    ids=["zero", "one", "byte", "53 ether"],
)
def test_quantities_are_unpadded_lowercase_hex(value, expected):
    assert encode_quantity(value) == expected


def test_quantity_of_large_integer_is_not_truncated():
    assert encode_quantity(2**256 - 1) == "0x" + "f" * 64


@pytest.mark.parametrize(
    "data, expected",
    argvalues=[
        (b"", "0x"),
        (b"\x60\x80", "0x6080"),
        (bytearray(b"\xab\xcd"), "0xabcd"),
        ("0xABCD", "0xabcd"),
        ("abcd", "0xabcd"),
    ],
)
def test_data_is_prefixed_lowercase_hex(data, expected):
    assert encode_data(data) == expected


def test_data_rejects_non_hex_strings():
    with pytest.raises(ValueError):
        encode_data("not hex")


def test_address_is_checksummed():
    address = "0xc0de000000000000000000000000000000000000"
    assert encode_address(address) == to_checksum_address(address)


class TestEncodeWord:
    def test_integer_is_left_padded_to_32_bytes(self):
        assert encode_word(1) == "0x" + "00" * 31 + "01"

    def test_short_bytes_are_left_padded_to_32_bytes(self):
        assert encode_word(b"\x12\x34") == "0x" + "00" * 30 + "1234"

    def test_full_word_hex_string_is_passed_through(self):
        word = "0x" + "ab" * 32
        assert encode_word(word) == word

    def test_values_wider_than_32_bytes_are_rejected(self):
        with pytest.raises(ValueError):
            encode_word(b"\x01" * 33)

    @pytest.mark.parametrize("value", [2 ** 256, 2 ** 264 + 1])
    def test_integers_wider_than_32_bytes_are_rejected(self, value):
        with pytest.raises(ValueError):
            encode_word(value)

    def test_largest_integer_word_is_accepted(self):
        assert encode_word(2 ** 256 - 1) == "0x" + "ff" * 32

    def test_negative_integers_are_rejected(self):
        with pytest.raises(ValueError):
            encode_word(-1)
