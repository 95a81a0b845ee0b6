"""
Protocol Fee Calculator
bracket_scorer/scoring/fee_calculator.py

    fee        = total_pool_value × fee_basis_points // 10000   (truncating)
    prize_pool = total_pool_value − fee

Mirrors BracketPool.sol (totalPoolValue * FEE_PERCENT / BASIS_POINTS). Rounding
direction matters: any other rounding leaves the contract and the settlement
one unit apart.
"""

from dataclasses import dataclass
from typing import Optional

from bracket_scorer.config import BASIS_POINTS, get_settings


@dataclass(frozen=True)
class PrizePoolBreakdown:
    """Output of FeeCalculator.calculate()."""
    total_pool_value: int
    fee_basis_points: int
    protocol_fee: int
    prize_pool: int


class FeeCalculator:
    """Split a pool value into protocol fee and distributable prize pool."""

    def __init__(self, fee_basis_points: Optional[int] = None):
        if fee_basis_points is None:
            fee_basis_points = get_settings().FEE_BASIS_POINTS
        if not 0 <= fee_basis_points <= BASIS_POINTS:
            raise ValueError(f"fee_basis_points must be in [0, {BASIS_POINTS}]")
        self.fee_basis_points = fee_basis_points

    def calculate(self, total_pool_value: int) -> PrizePoolBreakdown:
        if total_pool_value < 0:
            raise ValueError("total_pool_value must be non-negative")

        fee = total_pool_value * self.fee_basis_points // BASIS_POINTS
        return PrizePoolBreakdown(
            total_pool_value=total_pool_value,
            fee_basis_points=self.fee_basis_points,
            protocol_fee=fee,
            prize_pool=total_pool_value - fee,
        )
