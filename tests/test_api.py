"""
Tests for the address API endpoints.
"""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from xds_address.api import app
from xds_address.codec import AddressCodec
from xds_address.config import Settings, get_codec, get_settings
from xds_address.network import get_network
from xds_address.transaction import Transaction

BC_P2WPKH = "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"
BC_P2WPKH_SCRIPT = "0014751e76e8199196d454941c45d1b3a323f1433bd6"
BC_P2WSH = "bc1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3qccfmv3"
BC_P2WSH_SCRIPT = "00201863143c14c5166804bd19203356da136c985678cd4d27a1b8c6329604903262"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, network="bitcoin", **overrides)


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create test client bound to the bitcoin network."""
    app.dependency_overrides[get_settings] = lambda: _settings()
    app.dependency_overrides[get_codec] = lambda: AddressCodec.from_network(get_network("bitcoin"))
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthCheck:
    """Tests for /health endpoint."""

    def test_health_check_returns_status(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["network"] == "bitcoin"
        assert data["pubkey_address_prefix"] == "bc1"
        assert data["script_address_prefix"] == "bc1"
        assert "version" in data


class TestScriptPubKeyEndpoint:
    """Tests for GET /address/{address}/script-pubkey."""

    def test_p2wpkh(self, client: TestClient) -> None:
        response = client.get(f"/address/{BC_P2WPKH}/script-pubkey")
        assert response.status_code == 200
        data = response.json()
        assert data["script_pubkey"] == BC_P2WPKH_SCRIPT
        assert data["address_type"] == "PUBKEY_HASH"

    def test_p2wsh(self, client: TestClient) -> None:
        response = client.get(f"/address/{BC_P2WSH}/script-pubkey")
        assert response.status_code == 200
        assert response.json()["script_pubkey"] == BC_P2WSH_SCRIPT
        assert response.json()["address_type"] == "SCRIPT_HASH"

    def test_invalid_address_is_bad_request(self, client: TestClient) -> None:
        response = client.get("/address/notanaddress/script-pubkey")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid address 'notanaddress'."

    def test_address_decoded_once(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        decoded = []
        original = AddressCodec._decode

        def counting_decode(encoder, address):
            decoded.append(address)
            return original(encoder, address)

        monkeypatch.setattr(AddressCodec, "_decode", staticmethod(counting_decode))

        response = client.get(f"/address/{BC_P2WSH}/script-pubkey")

        assert response.status_code == 200
        assert decoded == [BC_P2WSH]


class TestAddressEndpoint:
    """Tests for POST /script-pubkey/address."""

    def test_p2wpkh(self, client: TestClient) -> None:
        response = client.post("/script-pubkey/address", json={"script_pubkey": BC_P2WPKH_SCRIPT})
        assert response.status_code == 200
        data = response.json()
        assert data["address"] == BC_P2WPKH
        assert data["script_class"] == "p2wpkh"

    def test_0x_prefix(self, client: TestClient) -> None:
        response = client.post(
            "/script-pubkey/address", json={"script_pubkey": "0x" + BC_P2WSH_SCRIPT}
        )
        assert response.status_code == 200
        assert response.json()["address"] == BC_P2WSH

    def test_unspendable(self, client: TestClient) -> None:
        response = client.post("/script-pubkey/address", json={"script_pubkey": "6a0401020304"})
        assert response.status_code == 200
        assert response.json()["address"] == "unspendable"
        assert response.json()["script_class"] == "unspendable"

    def test_empty_script_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/script-pubkey/address", json={"script_pubkey": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid ScriptPubKey ''."

    def test_not_hex(self, client: TestClient) -> None:
        response = client.post("/script-pubkey/address", json={"script_pubkey": "zz"})
        assert response.status_code == 422


class TestTxOutputsEndpoint:
    """Tests for POST /tx/outputs."""

    def test_coinbase(self, client: TestClient, coinbase_tx: Transaction) -> None:
        response = client.post("/tx/outputs", json={"raw_tx": coinbase_tx.to_bytes().hex()})
        assert response.status_code == 200
        data = response.json()
        assert data["is_coinbase"] is True
        assert data["is_coinstake"] is False
        assert data["txid"] == coinbase_tx.txid()
        assert [o["is_protocol_output"] for o in data["outputs"]] == [True, False, True]
        assert [o["address"] for o in data["outputs"]] == [None, BC_P2WPKH, "unspendable"]

    def test_coinstake(self, client: TestClient, coinstake_tx: Transaction) -> None:
        response = client.post("/tx/outputs", json={"raw_tx": coinstake_tx.to_bytes().hex()})
        assert response.status_code == 200
        data = response.json()
        assert data["is_coinstake"] is True
        assert [o["is_protocol_output"] for o in data["outputs"]] == [True, True, False]

    def test_truncated_transaction(self, client: TestClient, payment_tx: Transaction) -> None:
        raw = payment_tx.to_bytes()[:-2]
        response = client.post("/tx/outputs", json={"raw_tx": raw.hex()})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid transaction")
