"""
scriptPubKey primitives.

Scripts are plain ``bytes``. Only the shapes needed for address
derivation are recognized:

- P2WPKH: OP_0 <20 bytes>
- P2WSH:  OP_0 <32 bytes>

Everything else is "unspendable" from the point of view of this package.
"""

from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidScriptError
from .opcodes import (
    OP_0,
    OP_PUSHDATA1,
    OP_PUSHDATA2,
    OP_PUSHDATA4,
    OP_RETURN,
    to_asm,
)

PUBKEY_HASH_LENGTH = 20
SCRIPT_HASH_LENGTH = 32

UNSPENDABLE = "unspendable"


class ScriptClass(Enum):
    """Result of positional scriptPubKey classification."""

    PUBKEY_HASH = "p2wpkh"
    SCRIPT_HASH = "p2wsh"
    UNSPENDABLE = UNSPENDABLE


def push_op(data: bytes) -> bytes:
    """Serialize a minimal push of ``data``."""
    length = len(data)
    if length == 0:
        return bytes([OP_0])
    if length <= 75:
        return bytes([length]) + data
    if length <= 0xFF:
        return bytes([OP_PUSHDATA1, length]) + data
    if length <= 0xFFFF:
        return bytes([OP_PUSHDATA2]) + length.to_bytes(2, "little") + data
    return bytes([OP_PUSHDATA4]) + length.to_bytes(4, "little") + data


def witness_script(program: bytes) -> bytes:
    """Build a version 0 witness scriptPubKey: OP_0 <push program>."""
    return bytes([OP_0]) + push_op(program)


def is_op_return(script: Optional[bytes]) -> bool:
    """
    True for OP_RETURN scripts.

    This can be the witness commitment in a coinbase transaction or any burn.
    """
    if script is None:
        raise InvalidScriptError(None)
    return len(script) > 0 and script[0] == OP_RETURN


def is_empty(script: Optional[bytes]) -> bool:
    """
    True for zero-length scripts.

    This can be the non-witness-commitment output in a coinbase transaction.
    """
    if script is None:
        raise InvalidScriptError(None)
    return len(script) == 0


def classify_script(script: bytes) -> Tuple[ScriptClass, Optional[bytes]]:
    """
    Classify a scriptPubKey by its byte layout.

    Returns:
        (script_class, witness_program) where witness_program is None
        for unspendable scripts
    """
    length = len(script)

    # P2WPKH: OP_0 <20 bytes>
    if length == 22 and script[0] == OP_0 and script[1] == PUBKEY_HASH_LENGTH:
        return ScriptClass.PUBKEY_HASH, bytes(script[2:22])

    # P2WSH: OP_0 <32 bytes>
    if length == 34 and script[0] == OP_0 and script[1] == SCRIPT_HASH_LENGTH:
        return ScriptClass.SCRIPT_HASH, bytes(script[2:34])

    return ScriptClass.UNSPENDABLE, None
