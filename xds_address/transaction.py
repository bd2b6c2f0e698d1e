"""
Transaction structures needed to classify outputs.

Only what the codec consumes is modelled: outpoints, inputs, outputs and
the coinbase / coinstake flags derived from them.
"""

import hashlib
from dataclasses import dataclass, field
from typing import List, Tuple

NULL_TXID = bytes(32)
NULL_INDEX = 0xFFFFFFFF


def sha256d(data: bytes) -> bytes:
    """Double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def _take(data: bytes, offset: int, size: int) -> Tuple[bytes, int]:
    end = offset + size
    if end > len(data):
        raise ValueError(f"Transaction truncated: need {end} bytes, have {len(data)}")
    return data[offset:end], end


def parse_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Parse Bitcoin VarInt.
    Returns (value, new_offset).
    """
    first, offset = _take(data, offset, 1)
    if first[0] < 0xFD:
        return first[0], offset
    size = {0xFD: 2, 0xFE: 4, 0xFF: 8}[first[0]]
    value, offset = _take(data, offset, size)
    return int.from_bytes(value, "little"), offset


def encode_varint(value: int) -> bytes:
    """Serialize a Bitcoin VarInt."""
    if value < 0xFD:
        return bytes([value])
    if value <= 0xFFFF:
        return b"\xfd" + value.to_bytes(2, "little")
    if value <= 0xFFFFFFFF:
        return b"\xfe" + value.to_bytes(4, "little")
    return b"\xff" + value.to_bytes(8, "little")


@dataclass(frozen=True)
class OutPoint:
    """Reference to a previous output."""

    txid: bytes  # 32 bytes, internal byte order
    n: int

    @property
    def is_null(self) -> bool:
        return self.txid == NULL_TXID and self.n == NULL_INDEX


@dataclass
class TxIn:
    """Transaction input."""

    prevout: OutPoint
    script_sig: bytes = b""
    sequence: int = 0xFFFFFFFF
    witness: List[bytes] = field(default_factory=list)


@dataclass
class TxOut:
    """Transaction output."""

    value: int  # satoshis
    script_pubkey: bytes

    @property
    def is_empty(self) -> bool:
        return self.value == 0 and len(self.script_pubkey) == 0


@dataclass
class Transaction:
    """A transaction, parsed far enough to classify its outputs."""

    version: int
    inputs: List[TxIn]
    outputs: List[TxOut]
    lock_time: int = 0

    @property
    def is_coinbase(self) -> bool:
        return len(self.inputs) == 1 and self.inputs[0].prevout.is_null

    @property
    def is_coinstake(self) -> bool:
        """
        Proof-of-stake marker transaction: spends a real output and starts
        with an empty output.
        """
        return (
            len(self.inputs) > 0
            and not self.inputs[0].prevout.is_null
            and len(self.outputs) >= 2
            and self.outputs[0].is_empty
        )

    @property
    def has_witness(self) -> bool:
        return any(txin.witness for txin in self.inputs)

    @classmethod
    def from_bytes(cls, raw_tx: bytes) -> "Transaction":
        """Parse a serialized transaction (with or without witness data)."""
        version_bytes, offset = _take(raw_tx, 0, 4)
        version = int.from_bytes(version_bytes, "little")

        # Witness marker and flag
        segwit = False
        if len(raw_tx) > offset + 1 and raw_tx[offset] == 0x00 and raw_tx[offset + 1] != 0x00:
            segwit = True
            offset += 2

        inputs = []
        input_count, offset = parse_varint(raw_tx, offset)
        for _ in range(input_count):
            txid, offset = _take(raw_tx, offset, 32)
            n_bytes, offset = _take(raw_tx, offset, 4)
            script_len, offset = parse_varint(raw_tx, offset)
            script_sig, offset = _take(raw_tx, offset, script_len)
            sequence_bytes, offset = _take(raw_tx, offset, 4)
            inputs.append(
                TxIn(
                    prevout=OutPoint(txid=txid, n=int.from_bytes(n_bytes, "little")),
                    script_sig=script_sig,
                    sequence=int.from_bytes(sequence_bytes, "little"),
                )
            )

        outputs = []
        output_count, offset = parse_varint(raw_tx, offset)
        for _ in range(output_count):
            value_bytes, offset = _take(raw_tx, offset, 8)
            script_len, offset = parse_varint(raw_tx, offset)
            script_pubkey, offset = _take(raw_tx, offset, script_len)
            outputs.append(
                TxOut(value=int.from_bytes(value_bytes, "little"), script_pubkey=script_pubkey)
            )

        if segwit:
            for txin in inputs:
                item_count, offset = parse_varint(raw_tx, offset)
                for _ in range(item_count):
                    item_len, offset = parse_varint(raw_tx, offset)
                    item, offset = _take(raw_tx, offset, item_len)
                    txin.witness.append(item)

        lock_time_bytes, offset = _take(raw_tx, offset, 4)
        if offset != len(raw_tx):
            raise ValueError(f"Trailing data after transaction: {len(raw_tx) - offset} bytes")

        return cls(
            version=version,
            inputs=inputs,
            outputs=outputs,
            lock_time=int.from_bytes(lock_time_bytes, "little"),
        )

    @classmethod
    def from_hex(cls, raw_hex: str) -> "Transaction":
        if raw_hex.startswith("0x"):
            raw_hex = raw_hex[2:]
        return cls.from_bytes(bytes.fromhex(raw_hex))

    def to_bytes(self, include_witness: bool = True) -> bytes:
        """Serialize; witness data is written only if present and requested."""
        with_witness = include_witness and self.has_witness

        parts = [self.version.to_bytes(4, "little")]
        if with_witness:
            parts.append(b"\x00\x01")

        parts.append(encode_varint(len(self.inputs)))
        for txin in self.inputs:
            parts.append(txin.prevout.txid)
            parts.append(txin.prevout.n.to_bytes(4, "little"))
            parts.append(encode_varint(len(txin.script_sig)))
            parts.append(txin.script_sig)
            parts.append(txin.sequence.to_bytes(4, "little"))

        parts.append(encode_varint(len(self.outputs)))
        for txout in self.outputs:
            parts.append(txout.value.to_bytes(8, "little"))
            parts.append(encode_varint(len(txout.script_pubkey)))
            parts.append(txout.script_pubkey)

        if with_witness:
            for txin in self.inputs:
                parts.append(encode_varint(len(txin.witness)))
                for item in txin.witness:
                    parts.append(encode_varint(len(item)))
                    parts.append(item)

        parts.append(self.lock_time.to_bytes(4, "little"))
        return b"".join(parts)

    def txid(self) -> str:
        """Transaction ID in display format (reversed hex)."""
        return sha256d(self.to_bytes(include_witness=False))[::-1].hex()
