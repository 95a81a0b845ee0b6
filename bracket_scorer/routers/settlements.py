"""
Settlement API Router
bracket_scorer/routers/settlements.py

Endpoints:
  POST /api/v1/settlements                        - Settle a snapshot supplied in the body
  POST /api/v1/settlements/{pool_address}/onchain - Read the snapshot from chain, then settle

Both return the SettlementRecord JSON that gets published for claimants.
Nothing here writes to chain or persists the record.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
import structlog

from bracket_scorer.core.dependencies import get_contest_reader, get_settlement_service
from bracket_scorer.core.exceptions import DataUnavailableException, SettlementException
from bracket_scorer.models.settlement import SettlementRecord, SettlementRequest
from bracket_scorer.pipelines.contest_reader import ContestReader
from bracket_scorer.scoring.integration_service import SettlementService
from bracket_scorer.scoring.utils import normalize_address

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Settlements"])


# =====================================================================
# Exception handlers (registered in main.py)
# =====================================================================

async def settlement_exception_handler(request: Request, exc: SettlementException):
    """Settlement aborted: report the condition, never a partial record."""
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if isinstance(exc, DataUnavailableException)
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    logger.warning(
        "settlement_rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


# =====================================================================
# POST /api/v1/settlements
# =====================================================================

@router.post(
    "/settlements",
    response_model=SettlementRecord,
    summary="Settle a contest snapshot",
    description="""
    Runs the full settlement pipeline on the supplied snapshot:

    1. **Scores** every entry against the game results (round-weighted table)
    2. **Ranks** by score, tiebreaker distance, entryId
    3. **Distributes** the prize pool (net of protocol fee) to rank-1 entries
    4. **Commits** winner payouts to a sorted-pair Merkle tree with proofs

    Amounts are returned as decimal strings.
    """,
)
def settle_snapshot(
    body: SettlementRequest,
    service: SettlementService = Depends(get_settlement_service),
):
    return service.settle(body.snapshot(), body.actual_tiebreaker)


# =====================================================================
# POST /api/v1/settlements/{pool_address}/onchain
# =====================================================================

@router.post(
    "/settlements/{pool_address}/onchain",
    response_model=SettlementRecord,
    summary="Read a pool from chain and settle it",
)
def settle_onchain(
    pool_address: str,
    actual_tiebreaker: int = Query(..., ge=0, alias="actualTiebreaker"),
    service: SettlementService = Depends(get_settlement_service),
    reader: ContestReader = Depends(get_contest_reader),
):
    try:
        pool_address = normalize_address(pool_address)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    snapshot = reader.read_snapshot(pool_address)
    return service.settle(snapshot, actual_tiebreaker)
