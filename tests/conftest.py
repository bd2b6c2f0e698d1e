"""
Shared fixtures.
"""

import pytest

from xds_address.codec import AddressCodec
from xds_address.network import get_network
from xds_address.transaction import NULL_INDEX, NULL_TXID, OutPoint, Transaction, TxIn, TxOut

HASH160 = bytes.fromhex("751e76e8199196d454941c45d1b3a323f1433bd6")
P2WPKH = b"\x00\x14" + HASH160
WITNESS_COMMITMENT = bytes.fromhex("6a24aa21a9ed") + bytes(32)


@pytest.fixture
def xds_codec() -> AddressCodec:
    return AddressCodec.from_network(get_network("xds"))


@pytest.fixture
def coinbase_tx() -> Transaction:
    """PoS-block coinbase: empty output, reward, witness commitment."""
    return Transaction(
        version=1,
        inputs=[TxIn(prevout=OutPoint(NULL_TXID, NULL_INDEX), script_sig=b"\x03\x40\x0d\x03")],
        outputs=[
            TxOut(value=0, script_pubkey=b""),
            TxOut(value=50_0000_0000, script_pubkey=P2WPKH),
            TxOut(value=0, script_pubkey=WITNESS_COMMITMENT),
        ],
    )


@pytest.fixture
def coinstake_tx() -> Transaction:
    """Coinstake: empty marker, OP_RETURN public key, reward."""
    return Transaction(
        version=1,
        inputs=[
            TxIn(
                prevout=OutPoint(bytes([0x11]) * 32, 1),
                witness=[bytes(71), bytes(33)],
            )
        ],
        outputs=[
            TxOut(value=0, script_pubkey=b""),
            TxOut(value=0, script_pubkey=b"\x6a\x21" + bytes([0x02]) + bytes(32)),
            TxOut(value=1000_0000, script_pubkey=P2WPKH),
        ],
    )


@pytest.fixture
def payment_tx() -> Transaction:
    return Transaction(
        version=2,
        inputs=[TxIn(prevout=OutPoint(bytes([0x22]) * 32, 0))],
        outputs=[TxOut(value=12345, script_pubkey=P2WPKH)],
        lock_time=100,
    )
