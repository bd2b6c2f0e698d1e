"""
CLI for the XDS address codec.
"""

import json

import typer
from dotenv import load_dotenv

from .config import get_codec, get_settings
from .errors import CodecError
from .log import configure_logging
from .outputs import describe_outputs
from .opcodes import to_asm
from .script import classify_script
from .transaction import Transaction

app = typer.Typer(
    name="xds-address",
    help="SegWit address codec and transaction output classifier",
)


def main() -> None:
    """Entry point."""
    load_dotenv()
    app()


@app.callback()
def setup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    try:
        get_codec()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _hex_arg(value: str) -> bytes:
    if value.startswith("0x"):
        value = value[2:]
    try:
        return bytes.fromhex(value)
    except ValueError:
        typer.echo(f"Error: '{value}' is not a hex string", err=True)
        raise typer.Exit(1)


@app.command()
def decode(
    address: str = typer.Argument(..., help="P2WPKH or P2WSH address"),
) -> None:
    """
    Print the scriptPubKey (hex) of an address.

    Example:
        xds-address decode xds1q...
    """
    try:
        script_pubkey = get_codec().get_script_pubkey(address)
    except CodecError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)

    typer.echo(script_pubkey.hex())


@app.command()
def encode(
    script_pubkey: str = typer.Argument(..., help="scriptPubKey (hex)"),
) -> None:
    """
    Print the address of a scriptPubKey, or "unspendable".
    """
    script = _hex_arg(script_pubkey)
    try:
        address = get_codec().get_address_from_script_pubkey(script)
    except CodecError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)

    typer.echo(address)


@app.command()
def outputs(
    raw_tx: str = typer.Argument(..., help="Serialized transaction (hex)"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """
    Classify the outputs of a raw transaction.
    """
    try:
        transaction = Transaction.from_bytes(_hex_arg(raw_tx))
        described = describe_outputs(get_codec(), transaction)
    except (ValueError, CodecError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "txid": transaction.txid(),
                    "isCoinbase": transaction.is_coinbase,
                    "isCoinstake": transaction.is_coinstake,
                    "outputs": [
                        {
                            "index": d.index,
                            "value": d.value,
                            "scriptPubKey": d.script_pubkey.hex(),
                            "address": d.address,
                            "isProtocolOutput": d.is_protocol_output,
                        }
                        for d in described
                    ],
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Transaction {transaction.txid()}")
    typer.echo(f"  Coinbase: {transaction.is_coinbase}")
    typer.echo(f"  Coinstake: {transaction.is_coinstake}")
    for d in described:
        script_class, _ = classify_script(d.script_pubkey)
        marker = " [protocol]" if d.is_protocol_output else ""
        typer.echo(f"  Output {d.index}: {d.value} sats {script_class.value}{marker}")
        typer.echo(f"    script: {to_asm(d.script_pubkey) or '(empty)'}")
        if d.address is not None:
            typer.echo(f"    address: {d.address}")


@app.command()
def serve() -> None:
    """
    Run the HTTP API.
    """
    from .api import run

    run()


if __name__ == "__main__":
    main()
