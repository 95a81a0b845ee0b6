"""
Round Weights API Router
bracket_scorer/routers/scoring.py

Endpoints:
  GET /api/v1/scoring/weights - Round table used to score every entry
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List

from bracket_scorer.scoring.score_calculator import (
    MAX_GAME_INDEX,
    PERFECT_BRACKET_SCORE,
    ROUND_WEIGHT_TABLE,
)

router = APIRouter(prefix="/api/v1", tags=["Scoring"])


# =====================================================================
# Response Models
# =====================================================================

class RoundWeight(BaseModel):
    round: str
    first_index: int
    last_index: int
    points: int
    game_count: int


class RoundWeightsResponse(BaseModel):
    rounds: List[RoundWeight]
    game_count: int
    perfect_score: int


# =====================================================================
# GET /api/v1/scoring/weights
# =====================================================================

@router.get(
    "/scoring/weights",
    response_model=RoundWeightsResponse,
    summary="Round-weighted point table",
)
async def get_round_weights():
    return RoundWeightsResponse(
        rounds=[
            RoundWeight(
                round=band.round.value,
                first_index=band.first_index,
                last_index=band.last_index,
                points=band.points,
                game_count=band.game_count,
            )
            for band in ROUND_WEIGHT_TABLE
        ],
        game_count=MAX_GAME_INDEX + 1,
        perfect_score=PERFECT_BRACKET_SCORE,
    )
