"""
Configuration for the XDS address codec.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .codec import AddressCodec
from .network import Bech32Type, Network, get_network, make_network


class Settings(BaseSettings):
    """
    Codec configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Network parameters
    network: str = Field(
        default="xds",
        description="Network name (xds, bitcoin, testnet, regtest)",
        alias="NETWORK",
    )
    pubkey_hrp: Optional[str] = Field(
        default=None,
        description="Override the HRP of P2WPKH addresses",
        alias="PUBKEY_HRP",
    )
    script_hrp: Optional[str] = Field(
        default=None,
        description="Override the HRP of P2WSH addresses",
        alias="SCRIPT_HRP",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, description="Render logs as JSON", alias="LOG_JSON")

    # API Server
    host: str = Field(default="127.0.0.1", description="API host", alias="HOST")
    port: int = Field(default=8000, description="API port", alias="PORT")
    debug: bool = Field(default=False, description="Enable debug mode")

    def build_network(self) -> Network:
        """Resolve the configured network, applying HRP overrides."""
        network = get_network(self.network)
        if self.pubkey_hrp is None and self.script_hrp is None:
            return network

        pubkey_hrp = self.pubkey_hrp or network.encoder(Bech32Type.WITNESS_PUBKEY_ADDRESS).hrp
        script_hrp = self.script_hrp or network.encoder(Bech32Type.WITNESS_SCRIPT_ADDRESS).hrp
        return make_network(network.name, pubkey_hrp, script_hrp)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_codec() -> AddressCodec:
    """Get the codec for the configured network."""
    return AddressCodec.from_network(get_settings().build_network())
