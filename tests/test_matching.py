"""
Tests for address filtering.
"""

import pytest

from xds_address.matching import AddressType, SegWitAddress, WitnessAddress, match

PUBKEY = WitnessAddress(
    address="bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4",
    address_type=AddressType.PUBKEY_HASH,
)
SCRIPT = WitnessAddress(
    address="bc1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3qccfmv3",
    address_type=AddressType.SCRIPT_HASH,
)


class TestMatch:
    """Tests for match."""

    def test_none_passes_through(self) -> None:
        assert match(None) is None
        assert match(None, PUBKEY.address, AddressType.PUBKEY_HASH) is None

    def test_no_filter(self) -> None:
        assert match(PUBKEY) is PUBKEY

    def test_same_address_match_all(self) -> None:
        assert match(PUBKEY, PUBKEY.address, AddressType.MATCH_ALL) is PUBKEY

    def test_same_address_same_type(self) -> None:
        assert match(SCRIPT, SCRIPT.address, AddressType.SCRIPT_HASH) is SCRIPT

    def test_same_address_other_type(self) -> None:
        assert match(SCRIPT, SCRIPT.address, AddressType.PUBKEY_HASH) is None

    @pytest.mark.parametrize(
        "address_type",
        [AddressType.MATCH_ALL, AddressType.PUBKEY_HASH, AddressType.SCRIPT_HASH],
    )
    def test_other_address(self, address_type: AddressType) -> None:
        assert match(PUBKEY, "other", address_type) is None

    def test_empty_filter_text_is_a_filter(self) -> None:
        assert match(PUBKEY, "") is None

    def test_type_only(self) -> None:
        assert match(PUBKEY, address_type=AddressType.PUBKEY_HASH) is PUBKEY
        assert match(PUBKEY, address_type=AddressType.SCRIPT_HASH) is None
        assert match(SCRIPT, address_type=AddressType.SCRIPT_HASH) is SCRIPT

    def test_filter_over_collection(self) -> None:
        addresses = [PUBKEY, SCRIPT, None]
        selected = [a for a in addresses if match(a, address_type=AddressType.SCRIPT_HASH)]
        assert selected == [SCRIPT]

    def test_protocol_conformance(self) -> None:
        class Stored:
            def __init__(self, address: str, address_type: AddressType) -> None:
                self.address = address
                self.address_type = address_type

        stored = Stored(PUBKEY.address, AddressType.PUBKEY_HASH)
        assert isinstance(stored, SegWitAddress)
        assert match(stored, PUBKEY.address) is stored
