"""
Health Check Router - Bracket Pool Scorer
bracket_scorer/routers/health.py

Service liveness plus the settings a settlement depends on.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

from bracket_scorer.config import get_settings

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]



#  Endpoints


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies={
            "rpc": "configured" if settings.RPC_URL else "not configured",
            "chain": settings.chain_name,
            "fee_basis_points": str(settings.FEE_BASIS_POINTS),
        },
    )
