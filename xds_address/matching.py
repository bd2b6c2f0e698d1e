"""
Address filtering.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Protocol, TypeVar, runtime_checkable


class AddressType(IntEnum):
    """Kind of a SegWit address. MATCH_ALL is only meaningful as a filter."""

    MATCH_ALL = -1
    PUBKEY_HASH = 0
    SCRIPT_HASH = 1


@runtime_checkable
class SegWitAddress(Protocol):
    """Anything that carries an address string and its kind."""

    address: str
    address_type: AddressType


@dataclass(frozen=True)
class WitnessAddress:
    """A plain address value."""

    address: str
    address_type: AddressType


A = TypeVar("A", bound=SegWitAddress)


def match(
    segwit_address: Optional[A],
    address: Optional[str] = None,
    address_type: AddressType = AddressType.MATCH_ALL,
) -> Optional[A]:
    """
    Return ``segwit_address`` if it passes the filter, else None.

    Args:
        segwit_address: candidate (None is passed through)
        address: exact address text to require, or None to skip
        address_type: required kind, or MATCH_ALL
    """
    if segwit_address is None:
        return None

    if address is not None:
        if segwit_address.address != address:
            return None

    if address_type == AddressType.MATCH_ALL or address_type == segwit_address.address_type:
        return segwit_address

    return None
