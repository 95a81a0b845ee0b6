"""
Dependencies - Bracket Pool Scorer
bracket_scorer/core/dependencies.py

FastAPI dependency injection for the settlement service and chain reader.
"""

from functools import lru_cache

from bracket_scorer.config import get_settings
from bracket_scorer.core.exceptions import DataUnavailableException
from bracket_scorer.pipelines.contest_reader import ContestReader
from bracket_scorer.scoring.integration_service import SettlementService


@lru_cache()
def get_settlement_service() -> SettlementService:
    """Get cached SettlementService instance."""
    return SettlementService(get_settings().FEE_BASIS_POINTS)


@lru_cache()
def get_contest_reader() -> ContestReader:
    """Get cached ContestReader bound to the configured RPC node."""
    settings = get_settings()
    if not settings.RPC_URL:
        raise DataUnavailableException("rpc", "RPC_URL is not configured")
    return ContestReader(
        settings.RPC_URL,
        chain_id=settings.CHAIN_ID,
        from_block=settings.FROM_BLOCK,
    )
