"""
Output purpose classification.
"""

from dataclasses import dataclass
from typing import List, Optional

from .codec import AddressCodec
from .script import is_empty, is_op_return
from .transaction import Transaction, TxOut


def is_protocol_output(tx_out: TxOut, transaction: Transaction) -> bool:
    """
    True if ``tx_out`` is structural data rather than a payment.

    Only coinbase and coinstake transactions carry protocol outputs, and
    only empty or OP_RETURN scripts qualify.
    """
    if transaction.is_coinbase:
        if is_empty(tx_out.script_pubkey):
            return True  # in a PoS block the first output of the coinbase tx is empty
        if is_op_return(tx_out.script_pubkey):
            return True  # witness commitment

    elif transaction.is_coinstake:
        if is_empty(tx_out.script_pubkey):
            return True  # the empty first output (PoS marker)
        if is_op_return(tx_out.script_pubkey):
            return True  # public key output at index 1

    return False


@dataclass
class OutputDescription:
    """An output with its derived address and purpose."""

    index: int
    value: int
    script_pubkey: bytes
    address: Optional[str]  # None for empty scripts
    is_protocol_output: bool


def describe_outputs(codec: AddressCodec, transaction: Transaction) -> List[OutputDescription]:
    """Derive address and purpose for every output of ``transaction``."""
    described = []
    for index, tx_out in enumerate(transaction.outputs):
        address = None
        if not is_empty(tx_out.script_pubkey):
            address = codec.get_address_from_script_pubkey(tx_out.script_pubkey)
        described.append(
            OutputDescription(
                index=index,
                value=tx_out.value,
                script_pubkey=tx_out.script_pubkey,
                address=address,
                is_protocol_output=is_protocol_output(tx_out, transaction),
            )
        )
    return described
