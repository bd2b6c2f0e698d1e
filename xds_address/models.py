"""
Pydantic models for API requests and responses.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _strip_hex(value: str) -> str:
    value = value.strip()
    if value.startswith("0x"):
        value = value[2:]
    try:
        bytes.fromhex(value)
    except ValueError:
        raise ValueError("must be a hex string") from None
    return value.lower()


# ============================================================================
# Health
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Package version")
    network: str = Field(..., description="Configured network name")
    pubkey_address_prefix: str = Field(..., description="P2WPKH address prefix")
    script_address_prefix: str = Field(..., description="P2WSH address prefix")


# ============================================================================
# Address -> scriptPubKey
# ============================================================================

class ScriptPubKeyResponse(BaseModel):
    """scriptPubKey for an address."""

    address: str = Field(..., description="Input address")
    address_type: str = Field(..., description="PUBKEY_HASH or SCRIPT_HASH")
    script_pubkey: str = Field(..., description="scriptPubKey (hex)")


# ============================================================================
# scriptPubKey -> address
# ============================================================================

class AddressRequest(BaseModel):
    """Request to derive an address from a scriptPubKey."""

    script_pubkey: str = Field(..., description="scriptPubKey (hex)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"script_pubkey": "0014751e76e8199196d454941c45d1b3a323f1433bd6"}
            ]
        }
    }

    @field_validator("script_pubkey")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        return _strip_hex(v)


class AddressResponse(BaseModel):
    """Address derived from a scriptPubKey."""

    script_pubkey: str = Field(..., description="Input scriptPubKey (hex)")
    script_class: str = Field(..., description="p2wpkh, p2wsh or unspendable")
    address: str = Field(..., description="Address, or 'unspendable'")


# ============================================================================
# Transaction outputs
# ============================================================================

class TxOutputsRequest(BaseModel):
    """Request to classify the outputs of a raw transaction."""

    raw_tx: str = Field(..., description="Serialized transaction (hex)")

    @field_validator("raw_tx")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        return _strip_hex(v)


class TxOutputInfo(BaseModel):
    """One classified output."""

    index: int = Field(..., description="Output index (vout)")
    value: int = Field(..., description="Amount in satoshis")
    script_pubkey: str = Field(..., description="scriptPubKey (hex)")
    address: Optional[str] = Field(None, description="Address, 'unspendable', or None if empty")
    is_protocol_output: bool = Field(..., description="Structural coinbase/coinstake output")


class TxOutputsResponse(BaseModel):
    """Classified outputs of a transaction."""

    txid: str = Field(..., description="Transaction ID (display format)")
    is_coinbase: bool
    is_coinstake: bool
    outputs: list[TxOutputInfo]
