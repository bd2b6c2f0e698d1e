"""
XDS Address

SegWit address codec and transaction output classifier.

Converts between bech32 addresses and P2WPKH / P2WSH scriptPubKeys, and
tells structural coinbase / coinstake outputs apart from payments.

Usage:
    # Address to scriptPubKey
    xds-address decode xds1q...

    # scriptPubKey to address
    xds-address encode 0014...

    # Classify the outputs of a raw transaction
    xds-address outputs 0100000001...
"""

__version__ = "0.1.0"

from .codec import AddressCodec
from .errors import CodecError, InvalidAddressError, InvalidScriptError, WitnessProgramLengthError
from .matching import AddressType, SegWitAddress, WitnessAddress, match
from .network import Bech32Encoder, Bech32Type, Network, get_network, make_network
from .outputs import is_protocol_output
from .script import UNSPENDABLE, ScriptClass, classify_script, is_empty, is_op_return
from .transaction import OutPoint, Transaction, TxIn, TxOut

__all__ = [
    "__version__",
    "AddressCodec",
    "CodecError",
    "InvalidAddressError",
    "InvalidScriptError",
    "WitnessProgramLengthError",
    "AddressType",
    "SegWitAddress",
    "WitnessAddress",
    "match",
    "Bech32Encoder",
    "Bech32Type",
    "Network",
    "get_network",
    "make_network",
    "is_protocol_output",
    "UNSPENDABLE",
    "ScriptClass",
    "classify_script",
    "is_empty",
    "is_op_return",
    "OutPoint",
    "Transaction",
    "TxIn",
    "TxOut",
]
