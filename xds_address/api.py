"""
XDS Address API - HTTP surface for the address codec.

Provides REST endpoints for:
- Address to scriptPubKey (GET /address/{address}/script-pubkey)
- scriptPubKey to address (POST /script-pubkey/address)
- Transaction output classification (POST /tx/outputs)
- Health checks (GET /health)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from . import __version__
from .codec import AddressCodec
from .config import Settings, get_codec, get_settings
from .errors import CodecError
from .log import configure_logging
from .models import (
    AddressRequest,
    AddressResponse,
    HealthResponse,
    ScriptPubKeyResponse,
    TxOutputInfo,
    TxOutputsRequest,
    TxOutputsResponse,
)
from .outputs import describe_outputs
from .script import classify_script
from .transaction import Transaction

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    codec = get_codec()

    logger.info(
        "API started",
        version=__version__,
        network=settings.network,
        pubkey_prefix=codec.pubkey_address_prefix,
        script_prefix=codec.script_address_prefix,
    )

    yield

    logger.info("API stopped")


app = FastAPI(
    title="XDS Address API",
    description="SegWit address codec and output classifier",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(CodecError)
async def codec_error_handler(request: Request, exc: CodecError) -> JSONResponse:
    logger.warning("Rejected input", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=int(exc.status_code), content={"detail": exc.message})


# ============================================================================
# Health
# ============================================================================


@app.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    codec: AddressCodec = Depends(get_codec),
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=__version__,
        network=settings.network,
        pubkey_address_prefix=codec.pubkey_address_prefix,
        script_address_prefix=codec.script_address_prefix,
    )


# ============================================================================
# Address -> scriptPubKey
# ============================================================================


@app.get(
    "/address/{address}/script-pubkey",
    response_model=ScriptPubKeyResponse,
)
async def get_script_pubkey(
    address: str,
    codec: AddressCodec = Depends(get_codec),
) -> ScriptPubKeyResponse:
    """Convert a P2WPKH or P2WSH address to its scriptPubKey."""
    script_pubkey = codec.get_script_pubkey(address)
    return ScriptPubKeyResponse(
        address=address,
        address_type=codec.address_type_of(script_pubkey).name,
        script_pubkey=script_pubkey.hex(),
    )


# ============================================================================
# scriptPubKey -> address
# ============================================================================


@app.post(
    "/script-pubkey/address",
    response_model=AddressResponse,
)
async def get_address(
    request: AddressRequest,
    codec: AddressCodec = Depends(get_codec),
) -> AddressResponse:
    """Derive the address of a scriptPubKey ("unspendable" if it has none)."""
    script_pubkey = bytes.fromhex(request.script_pubkey)
    address = codec.get_address_from_script_pubkey(script_pubkey)
    script_class, _ = classify_script(script_pubkey)
    return AddressResponse(
        script_pubkey=request.script_pubkey,
        script_class=script_class.value,
        address=address,
    )


# ============================================================================
# Transaction outputs
# ============================================================================


@app.post(
    "/tx/outputs",
    response_model=TxOutputsResponse,
)
async def get_tx_outputs(
    request: TxOutputsRequest,
    codec: AddressCodec = Depends(get_codec),
) -> TxOutputsResponse:
    """Classify every output of a raw transaction."""
    try:
        transaction = Transaction.from_hex(request.raw_tx)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid transaction: {e}") from e

    outputs = [
        TxOutputInfo(
            index=described.index,
            value=described.value,
            script_pubkey=described.script_pubkey.hex(),
            address=described.address,
            is_protocol_output=described.is_protocol_output,
        )
        for described in describe_outputs(codec, transaction)
    ]

    return TxOutputsResponse(
        txid=transaction.txid(),
        is_coinbase=transaction.is_coinbase,
        is_coinstake=transaction.is_coinstake,
        outputs=outputs,
    )


# ============================================================================
# Entry Point
# ============================================================================


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "xds_address.api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
