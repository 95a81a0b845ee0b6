# tests/conftest.py

"""
Pytest Fixtures - Shared test data for the settlement pipeline and API

Team ids are 32-byte values; make_bytes32(n) renders n as one, so
make_picks(67) is a full bracket and make_picks(67, offset=100) a bracket that
shares no pick with it.
"""

import pytest
from fastapi.testclient import TestClient

from bracket_scorer.main import app
from bracket_scorer.models.entry import Entry, ScoredEntry
from bracket_scorer.models.settlement import ContestSnapshot


OWNER_A = "0x1111111111111111111111111111111111111111"
OWNER_B = "0x2222222222222222222222222222222222222222"
OWNER_C = "0x3333333333333333333333333333333333333333"
POOL_ADDRESS = "0x00000000000000000000000000000000000000aa"


def make_bytes32(n: int) -> str:
    return "0x" + format(n, "064x")


def make_picks(count: int, offset: int = 0):
    return [make_bytes32(i + 1 + offset) for i in range(count)]


def make_scored_entry(entry_id: int, owner: str, score: int, tiebreaker: int) -> ScoredEntry:
    return ScoredEntry(
        entry_id=entry_id,
        owner=owner,
        picks=(),
        tiebreaker=tiebreaker,
        amount_paid=10_000_000,
        score=score,
    )


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# BRACKET FIXTURES
# =============================================================================

@pytest.fixture
def results():
    """Actual results for all 67 games."""
    return make_picks(67)


@pytest.fixture
def perfect_picks(results):
    return list(results)


@pytest.fixture
def wrong_picks():
    """A bracket that misses every game."""
    return make_picks(67, offset=100)


# =============================================================================
# SNAPSHOT FIXTURES
# =============================================================================

@pytest.fixture
def sample_entries(results, wrong_picks):
    """
    Three entries on 67 games:
      0: perfect bracket, tiebreaker 140 (distance 5 from 145)
      1: perfect bracket, tiebreaker 150 (distance 5)
      2: only the championship right, tiebreaker 145 (distance 0)
    """
    championship_only = list(wrong_picks)
    championship_only[66] = results[66]
    return [
        Entry(entry_id=0, owner=OWNER_A, picks=results, tiebreaker=140, amount_paid=10_000_000),
        Entry(entry_id=1, owner=OWNER_B, picks=results, tiebreaker=150, amount_paid=10_000_000),
        Entry(entry_id=2, owner=OWNER_C, picks=championship_only, tiebreaker=145, amount_paid=10_000_000),
    ]


@pytest.fixture
def sample_snapshot(sample_entries, results):
    """Snapshot with 30,000,001 units in the pool (5% fee → 28,500,001 prize pool)."""
    return ContestSnapshot(
        pool_address=POOL_ADDRESS,
        entries=tuple(sample_entries),
        game_results=tuple(results),
        total_pool_value=30_000_001,
    )


@pytest.fixture
def sample_settlement_body(sample_snapshot):
    """JSON body for POST /api/v1/settlements."""
    body = sample_snapshot.model_dump(mode="json", by_alias=True)
    body["actualTiebreaker"] = 145
    return body
