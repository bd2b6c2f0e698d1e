"""
Network parameters for address encoding.

A network supplies one bech32 encoder per witness address kind. Each
encoder knows its human-readable part (HRP); the checksum itself is
computed by the ``bech32`` reference implementation.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple, Union

import bech32


class Bech32Type(IntEnum):
    """Index of an encoder in a network's encoder table."""

    WITNESS_PUBKEY_ADDRESS = 0
    WITNESS_SCRIPT_ADDRESS = 1


@dataclass(frozen=True)
class Bech32Encoder:
    """Bech32 encoder bound to one human-readable part."""

    human_readable_part: bytes

    def __init__(self, human_readable_part: Union[str, bytes]) -> None:
        if isinstance(human_readable_part, str):
            human_readable_part = human_readable_part.encode("ascii")
        # Encoded addresses are always lower case
        object.__setattr__(self, "human_readable_part", bytes(human_readable_part).lower())

    @property
    def hrp(self) -> str:
        return self.human_readable_part.decode("ascii")

    def encode(self, witness_version: int, program: bytes) -> str:
        """Encode a witness version and program as an address."""
        address = bech32.encode(self.hrp, witness_version, program)
        if address is None:
            raise ValueError(
                f"Cannot encode witness v{witness_version} program of {len(program)} bytes"
            )
        return address

    def decode(self, address: str) -> Tuple[bytes, int]:
        """
        Decode an address.

        Returns:
            (witness_program, witness_version)

        Raises:
            ValueError: bad checksum, wrong HRP or malformed payload
        """
        witness_version, program = bech32.decode(self.hrp, address)
        if witness_version is None or program is None:
            raise ValueError(f"Not a valid '{self.hrp}' bech32 address")
        return bytes(program), witness_version


@dataclass(frozen=True)
class Network:
    """Ledger parameters relevant to addresses."""

    name: str
    bech32_encoders: Tuple[Bech32Encoder, ...]

    def encoder(self, bech32_type: Bech32Type) -> Bech32Encoder:
        return self.bech32_encoders[int(bech32_type)]


def make_network(name: str, pubkey_hrp: str, script_hrp: Optional[str] = None) -> Network:
    """Create a network; the script encoder shares the pubkey HRP unless given."""
    encoders = [None, None]
    encoders[Bech32Type.WITNESS_PUBKEY_ADDRESS] = Bech32Encoder(pubkey_hrp)
    encoders[Bech32Type.WITNESS_SCRIPT_ADDRESS] = Bech32Encoder(script_hrp or pubkey_hrp)
    return Network(name=name, bech32_encoders=tuple(encoders))


NETWORKS: Dict[str, Network] = {
    "xds": make_network("xds", "xds"),
    "bitcoin": make_network("bitcoin", "bc"),
    "testnet": make_network("testnet", "tb"),
    "regtest": make_network("regtest", "bcrt"),
}


def get_network(name: str) -> Network:
    """Look up a known network by name."""
    try:
        return NETWORKS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown network '{name}' (known: {', '.join(sorted(NETWORKS))})"
        ) from None
