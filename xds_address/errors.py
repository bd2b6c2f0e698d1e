"""
Errors surfaced to callers of the address codec.

All codec failures are client-input errors: they carry an HTTP-style
Bad Request status and the offending value for diagnostics.
"""

from http import HTTPStatus
from typing import Any, Optional

from .opcodes import to_asm


class CodecError(Exception):
    """Base error for address and script failures."""

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.value = value


class InvalidAddressError(CodecError):
    """Malformed address text or witness program."""

    def __init__(self, address: Optional[str]) -> None:
        super().__init__(f"Invalid address '{address if address is not None else 'null'}'.", address)


class WitnessProgramLengthError(InvalidAddressError):
    """A witness program does not have the length its address kind requires."""

    def __init__(self, program: bytes, expected_length: int) -> None:
        super().__init__(program.hex())
        self.expected_length = expected_length
        self.message = (
            f"Invalid address '{program.hex()}'. "
            f"Expected {expected_length} bytes, got {len(program)}."
        )
        self.args = (self.message,)


class InvalidScriptError(CodecError):
    """Absent or empty scriptPubKey where one is required."""

    def __init__(self, script: Optional[bytes]) -> None:
        rendered = to_asm(script) if script is not None else "null"
        super().__init__(f"Invalid ScriptPubKey '{rendered}'.", script)


def check_bytes(data: Optional[bytes], expected_length: int) -> bytes:
    """Require a witness program of exactly ``expected_length`` bytes."""
    if data is None:
        raise InvalidAddressError(None)
    if len(data) != expected_length:
        raise WitnessProgramLengthError(bytes(data), expected_length)
    return bytes(data)
