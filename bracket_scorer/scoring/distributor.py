# bracket_scorer/scoring/distributor.py
"""
Prize Distributor
-----------------
Splits the prize pool among the top-ranked entries, exact to the unit.

    winners     = entries whose rank equals the best (minimum) rank present
    per_winner  = prize_pool // len(winners)
    dust        = prize_pool − per_winner × len(winners)     (< len(winners))

The first winner in ranked order receives per_winner + dust, every other
winner per_winner, everyone else 0. Because the ranker's order is total, the
dust recipient is reproducible.

Output keeps every entry: winners first, then non-winners, each group in the
order it arrived.
"""
from typing import List, Sequence, Tuple

import structlog

from bracket_scorer.core.exceptions import EmptyEntryListException, SettlementInvariantException
from bracket_scorer.models.entry import ScoredEntry

logger = structlog.get_logger(__name__)


def split_prize_pool(prize_pool: int, winner_count: int) -> Tuple[int, int]:
    """Return (per_winner, dust) for an even integer split."""
    if winner_count <= 0:
        raise ValueError("winner_count must be positive")
    per_winner = prize_pool // winner_count
    return per_winner, prize_pool - per_winner * winner_count


class PrizeDistributor:
    """Winner-take-all distribution with tie splitting."""

    def distribute(
        self,
        ranked_entries: Sequence[ScoredEntry],
        prize_pool: int,
    ) -> List[ScoredEntry]:
        """
        Args:
            ranked_entries: Output of Ranker.rank().
            prize_pool: Distributable amount, already net of the protocol fee.

        Returns:
            Entries with prize_amount set; amounts sum to prize_pool.

        Raises:
            EmptyEntryListException: no entries to pay.
            SettlementInvariantException: amounts failed to sum to prize_pool.
        """
        if not ranked_entries:
            raise EmptyEntryListException()
        if prize_pool < 0:
            raise ValueError("prize_pool must be non-negative")

        winner_rank = min(e.rank for e in ranked_entries)
        winners = [e for e in ranked_entries if e.rank == winner_rank]
        non_winners = [e for e in ranked_entries if e.rank != winner_rank]

        per_winner, dust = split_prize_pool(prize_pool, len(winners))

        distributed = [
            e.model_copy(update={"prize_amount": per_winner + (dust if i == 0 else 0)})
            for i, e in enumerate(winners)
        ]
        distributed += [e.model_copy(update={"prize_amount": 0}) for e in non_winners]

        total = sum(e.prize_amount for e in distributed)
        if total != prize_pool:
            raise SettlementInvariantException(
                f"Distributed {total} but prize pool is {prize_pool}"
            )

        logger.info(
            "prizes_distributed",
            prize_pool=str(prize_pool),
            winner_count=len(winners),
            winner_rank=winner_rank,
            per_winner=str(per_winner),
            dust=str(dust),
            dust_recipient=winners[0].entry_id,
        )
        return distributed
