"""
SegWit address <-> scriptPubKey codec.

An ``AddressCodec`` is built once from network parameters and shared
read-only by every caller:

    codec = AddressCodec.from_network(get_network("xds"))
    script = codec.get_script_pubkey("xds1q...")
    address = codec.get_address_from_script_pubkey(script)
"""

from dataclasses import dataclass

import structlog

from .errors import InvalidAddressError, InvalidScriptError, check_bytes
from .matching import AddressType, SegWitAddress, WitnessAddress
from .network import Bech32Encoder, Bech32Type, Network
from .opcodes import to_asm
from .script import (
    PUBKEY_HASH_LENGTH,
    SCRIPT_HASH_LENGTH,
    UNSPENDABLE,
    ScriptClass,
    classify_script,
    witness_script,
)

logger = structlog.get_logger()

# Separator between the human-readable part and the data part
SEPARATOR = "1"

# Data part: 5-bit groups for the witness version, the program and a 6 char checksum
_VERSION_CHARS = 1
_CHECKSUM_CHARS = 6


def address_length(prefix: str, program_length: int) -> int:
    """Length of a bech32 address with ``prefix`` (HRP + separator)."""
    program_chars = (program_length * 8 + 4) // 5
    return len(prefix) + _VERSION_CHARS + program_chars + _CHECKSUM_CHARS


@dataclass(frozen=True)
class AddressCodec:
    """Address codec for one network."""

    pubkey_address_encoder: Bech32Encoder
    script_address_encoder: Bech32Encoder
    pubkey_address_prefix: str
    script_address_prefix: str
    pubkey_hash_address_length: int
    script_address_length: int

    @classmethod
    def from_network(cls, network: Network) -> "AddressCodec":
        pubkey_encoder = network.encoder(Bech32Type.WITNESS_PUBKEY_ADDRESS)
        script_encoder = network.encoder(Bech32Type.WITNESS_SCRIPT_ADDRESS)
        pubkey_prefix = pubkey_encoder.human_readable_part.decode("ascii") + SEPARATOR
        script_prefix = script_encoder.human_readable_part.decode("ascii") + SEPARATOR

        codec = cls(
            pubkey_address_encoder=pubkey_encoder,
            script_address_encoder=script_encoder,
            pubkey_address_prefix=pubkey_prefix,
            script_address_prefix=script_prefix,
            pubkey_hash_address_length=address_length(pubkey_prefix, PUBKEY_HASH_LENGTH),
            script_address_length=address_length(script_prefix, SCRIPT_HASH_LENGTH),
        )
        logger.debug(
            "Address codec initialized",
            network=network.name,
            pubkey_prefix=pubkey_prefix,
            script_prefix=script_prefix,
        )
        return codec

    # ------------------------------------------------------------------
    # Address -> scriptPubKey
    # ------------------------------------------------------------------

    def get_script_pubkey(self, address: str) -> bytes:
        """
        Convert a P2WPKH or P2WSH address to its scriptPubKey.

        Raises:
            InvalidAddressError: wrong length or prefix, bad checksum,
                or a witness version other than 0
        """
        if address is None:
            raise InvalidAddressError(None)

        if len(address) == self.pubkey_hash_address_length and address.startswith(
            self.pubkey_address_prefix
        ):
            hash160, witness_version = self._decode(self.pubkey_address_encoder, address)
            check_bytes(hash160, PUBKEY_HASH_LENGTH)
            if witness_version != 0:
                raise InvalidAddressError(address)
            return witness_script(hash160)

        if len(address) == self.script_address_length and address.startswith(
            self.script_address_prefix
        ):
            hash256, witness_version = self._decode(self.script_address_encoder, address)
            check_bytes(hash256, SCRIPT_HASH_LENGTH)
            if witness_version != 0:
                raise InvalidAddressError(address)
            return witness_script(hash256)

        raise InvalidAddressError(address)

    def get_script_pubkey_for(self, segwit_address: SegWitAddress) -> bytes:
        return self.get_script_pubkey(segwit_address.address)

    def parse_address(self, address: str) -> WitnessAddress:
        """Validate an address and tag it with its kind."""
        script_pubkey = self.get_script_pubkey(address)
        return WitnessAddress(address=address, address_type=self.address_type_of(script_pubkey))

    @staticmethod
    def address_type_of(script_pubkey: bytes) -> AddressType:
        """Kind of a scriptPubKey returned by ``get_script_pubkey``."""
        script_class, _ = classify_script(script_pubkey)
        if script_class is ScriptClass.PUBKEY_HASH:
            return AddressType.PUBKEY_HASH
        return AddressType.SCRIPT_HASH

    @staticmethod
    def _decode(encoder: Bech32Encoder, address: str) -> tuple[bytes, int]:
        try:
            return encoder.decode(address)
        except ValueError as e:
            raise InvalidAddressError(address) from e

    # ------------------------------------------------------------------
    # scriptPubKey / witness program -> address
    # ------------------------------------------------------------------

    def get_address_from_script_pubkey(self, script_pubkey: bytes) -> str:
        """
        Return a P2WPKH or P2WSH address, or "unspendable" for any other script.

        Raises:
            InvalidScriptError: the script is absent or empty
        """
        if script_pubkey is None or len(script_pubkey) == 0:
            raise InvalidScriptError(script_pubkey)

        script_class, program = classify_script(script_pubkey)

        if script_class is ScriptClass.PUBKEY_HASH:
            return self.to_pubkey_hash_address(program)
        if script_class is ScriptClass.SCRIPT_HASH:
            return self.to_script_address(program)

        logger.debug("Unspendable scriptPubKey", script=to_asm(script_pubkey))
        return UNSPENDABLE

    def to_pubkey_hash_address(self, hash160: bytes) -> str:
        check_bytes(hash160, PUBKEY_HASH_LENGTH)
        return self.pubkey_address_encoder.encode(0, hash160)

    def to_script_address(self, hash256: bytes) -> str:
        check_bytes(hash256, SCRIPT_HASH_LENGTH)
        return self.script_address_encoder.encode(0, hash256)
