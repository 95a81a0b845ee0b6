# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

from unittest.mock import MagicMock

import pytest
from fastapi import status

from bracket_scorer.core.dependencies import get_contest_reader
from bracket_scorer.core.exceptions import DataUnavailableException
from bracket_scorer.main import app



# ROOT / HEALTH ENDPOINT TESTS


class TestRootEndpoint:
    """Tests for GET / endpoint."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["service"] == "Bracket Pool Scorer"
        assert data["status"] == "running"
        assert data["docs"]["swagger"] == "/docs"


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["dependencies"]["fee_basis_points"] == "500"
        assert data["dependencies"]["chain"] in ("sepolia", "mainnet")



# ROUND WEIGHTS ENDPOINT TESTS


class TestRoundWeightsEndpoint:
    """Tests for GET /api/v1/scoring/weights endpoint."""

    def test_get_weights_success(self, client):
        response = client.get("/api/v1/scoring/weights")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["game_count"] == 67
        assert data["perfect_score"] == 1940
        assert len(data["rounds"]) == 7

    def test_weights_match_table(self, client):
        data = client.get("/api/v1/scoring/weights").json()
        assert [r["points"] for r in data["rounds"]] == [5, 10, 20, 40, 80, 160, 320]
        assert data["rounds"][0]["round"] == "first_four"
        assert data["rounds"][-1]["first_index"] == 66
        assert sum(r["points"] * r["game_count"] for r in data["rounds"]) == data["perfect_score"]



# SETTLEMENT ENDPOINT TESTS


class TestSettleSnapshotEndpoint:
    """Tests for POST /api/v1/settlements endpoint."""

    def test_settle_success(self, client, sample_settlement_body):
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["totalEntries"] == 3
        assert data["prizePool"] == "28500001"
        assert [e["prizeAmount"] for e in data["entries"]] == ["14250001", "14250000", "0"]
        assert data["merkleRoot"].startswith("0x")
        assert len(data["merkleRoot"]) == 66
        assert set(data["proofs"]) == {"0", "1"}

    def test_settle_is_deterministic(self, client, sample_settlement_body):
        first = client.post("/api/v1/settlements", json=sample_settlement_body)
        second = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert first.content == second.content

    def test_missing_tiebreaker(self, client, sample_settlement_body):
        del sample_settlement_body["actualTiebreaker"]
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_invalid_owner(self, client, sample_settlement_body):
        sample_settlement_body["entries"][0]["owner"] = "0xnotanaddress"
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_length_mismatch_rejected(self, client, sample_settlement_body):
        sample_settlement_body["entries"][1]["picks"] = sample_settlement_body["entries"][1]["picks"][:10]
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        data = response.json()
        assert data["error"] == "LengthMismatchException"
        assert "picks=10" in data["detail"]

    def test_no_entries_rejected(self, client, sample_settlement_body):
        sample_settlement_body["entries"] = []
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "EmptyEntryListException"

    def test_empty_pool_rejected(self, client, sample_settlement_body):
        sample_settlement_body["totalPoolValue"] = "0"
        response = client.post("/api/v1/settlements", json=sample_settlement_body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "NoWinnersException"


class TestSettleOnchainEndpoint:
    """Tests for POST /api/v1/settlements/{pool_address}/onchain endpoint."""

    @pytest.fixture
    def mock_reader(self, sample_snapshot):
        reader = MagicMock()
        reader.read_snapshot.return_value = sample_snapshot
        app.dependency_overrides[get_contest_reader] = lambda: reader
        yield reader
        app.dependency_overrides.pop(get_contest_reader, None)

    def test_settle_onchain_success(self, client, mock_reader, sample_settlement_body):
        pool = sample_settlement_body["poolAddress"]
        response = client.post(f"/api/v1/settlements/{pool}/onchain", params={"actualTiebreaker": 145})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["prizePool"] == "28500001"
        mock_reader.read_snapshot.assert_called_once_with(pool)

    def test_bad_pool_address(self, client, mock_reader):
        response = client.post("/api/v1/settlements/0x1234/onchain", params={"actualTiebreaker": 145})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_reader.read_snapshot.assert_not_called()

    def test_missing_tiebreaker(self, client, mock_reader, sample_settlement_body):
        pool = sample_settlement_body["poolAddress"]
        response = client.post(f"/api/v1/settlements/{pool}/onchain")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_chain_unavailable(self, client, mock_reader, sample_settlement_body):
        mock_reader.read_snapshot.side_effect = DataUnavailableException("rpc", "connection refused")
        pool = sample_settlement_body["poolAddress"]
        response = client.post(f"/api/v1/settlements/{pool}/onchain", params={"actualTiebreaker": 145})
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error"] == "DataUnavailableException"

    def test_rpc_not_configured(self, client, sample_settlement_body):
        def _unconfigured():
            raise DataUnavailableException("rpc", "RPC_URL is not configured")

        app.dependency_overrides[get_contest_reader] = _unconfigured
        try:
            pool = sample_settlement_body["poolAddress"]
            response = client.post(f"/api/v1/settlements/{pool}/onchain", params={"actualTiebreaker": 145})
        finally:
            app.dependency_overrides.pop(get_contest_reader, None)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert "RPC_URL" in response.json()["detail"]
