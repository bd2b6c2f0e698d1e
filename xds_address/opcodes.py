"""
Script opcodes and their human-readable rendering.
"""

OP_0 = 0x00
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_PUSHDATA4 = 0x4E
OP_1NEGATE = 0x4F
OP_1 = 0x51
OP_16 = 0x60
OP_RETURN = 0x6A

# Names for opcodes that show up in scripts we render for diagnostics
OPCODE_NAMES = {
    0x61: "OP_NOP",
    0x63: "OP_IF",
    0x64: "OP_NOTIF",
    0x67: "OP_ELSE",
    0x68: "OP_ENDIF",
    0x69: "OP_VERIFY",
    OP_RETURN: "OP_RETURN",
    0x75: "OP_DROP",
    0x76: "OP_DUP",
    0x87: "OP_EQUAL",
    0x88: "OP_EQUALVERIFY",
    0xA9: "OP_HASH160",
    0xAA: "OP_HASH256",
    0xAC: "OP_CHECKSIG",
    0xAD: "OP_CHECKSIGVERIFY",
    0xAE: "OP_CHECKMULTISIG",
    0xAF: "OP_CHECKMULTISIGVERIFY",
    0xB1: "OP_CHECKLOCKTIMEVERIFY",
    0xB2: "OP_CHECKSEQUENCEVERIFY",
}


def _opcode_name(op: int) -> str:
    if op == OP_0:
        return "0"
    if op == OP_1NEGATE:
        return "-1"
    if OP_1 <= op <= OP_16:
        return str(op - OP_1 + 1)
    return OPCODE_NAMES.get(op, f"OP_UNKNOWN(0x{op:02x})")


def to_asm(script: bytes) -> str:
    """Render a script as space separated opcodes and hex pushes."""
    parts = []
    offset = 0
    while offset < len(script):
        op = script[offset]
        offset += 1

        if 0x01 <= op <= 0x4B:
            size = op
        elif op == OP_PUSHDATA1:
            size = int.from_bytes(script[offset : offset + 1], "little")
            offset += 1
        elif op == OP_PUSHDATA2:
            size = int.from_bytes(script[offset : offset + 2], "little")
            offset += 2
        elif op == OP_PUSHDATA4:
            size = int.from_bytes(script[offset : offset + 4], "little")
            offset += 4
        else:
            parts.append(_opcode_name(op))
            continue

        if offset + size > len(script):
            parts.append("[error]")
            break
        parts.append(script[offset : offset + size].hex())
        offset += size

    return " ".join(parts)
