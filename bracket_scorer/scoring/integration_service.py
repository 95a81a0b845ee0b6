"""
scoring/integration_service.py

Full pipeline: contest snapshot → settlement record.

Class: SettlementService
Method: settle(snapshot, reference_tiebreaker) → SettlementRecord

Pipeline steps:
  1. ScoreCalculator   → score per entry
  2. Ranker            → ranked entries with tiebreaker distance
  3. FeeCalculator     → prize pool net of protocol fee
  4. PrizeDistributor  → prize_amount per entry
  5. CommitmentBuilder → Merkle root + proofs over positive prizes
  6. Self-check every proof against the root
  7. Assemble SettlementRecord

Every stage is pure; the same snapshot always yields a byte-identical record.
"""

from typing import List, Optional

import structlog

from bracket_scorer.core.exceptions import SettlementException, SettlementInvariantException
from bracket_scorer.models.entry import ScoredEntry, WinnerLeaf
from bracket_scorer.models.settlement import ContestSnapshot, SettlementRecord
from bracket_scorer.scoring.commitment_builder import CommitmentBuilder, CommitmentTree, verify_proof
from bracket_scorer.scoring.distributor import PrizeDistributor
from bracket_scorer.scoring.fee_calculator import FeeCalculator
from bracket_scorer.scoring.ranker import Ranker
from bracket_scorer.scoring.score_calculator import ScoreCalculator

logger = structlog.get_logger(__name__)


class SettlementService:
    """Full pipeline from on-chain snapshot to publishable settlement."""

    def __init__(self, fee_basis_points: Optional[int] = None):
        self.score_calculator = ScoreCalculator()
        self.ranker = Ranker()
        self.fee_calculator = FeeCalculator(fee_basis_points)
        self.distributor = PrizeDistributor()
        self.commitment_builder = CommitmentBuilder()

    # ------------------------------------------------------------------
    # Main pipeline
    # ------------------------------------------------------------------

    def settle(self, snapshot: ContestSnapshot, reference_tiebreaker: int) -> SettlementRecord:
        """
        Settle one contest.

        Args:
            snapshot: Entries, game results and pool value read from chain.
            reference_tiebreaker: Realised tiebreaker value.

        Returns:
            SettlementRecord ready for publishing.

        Raises:
            SettlementException: any failure; nothing partial is returned.
        """
        log = logger.bind(pool_address=snapshot.pool_address)
        log.info(
            "settlement_started",
            entry_count=len(snapshot.entries),
            game_count=len(snapshot.game_results),
            total_pool_value=str(snapshot.total_pool_value),
            reference_tiebreaker=reference_tiebreaker,
        )

        try:
            scored = self.score_calculator.score_entries(snapshot.entries, snapshot.game_results)
            ranked = self.ranker.rank(scored, reference_tiebreaker)

            breakdown = self.fee_calculator.calculate(snapshot.total_pool_value)
            log.info(
                "prize_pool_calculated",
                protocol_fee=str(breakdown.protocol_fee),
                prize_pool=str(breakdown.prize_pool),
                fee_basis_points=breakdown.fee_basis_points,
            )

            distributed = self.distributor.distribute(ranked, breakdown.prize_pool)
            winners = self.winner_leaves(distributed)
            tree = self.commitment_builder.build(winners)
            self._verify_commitment(tree, winners)
        except SettlementException as e:
            log.error("settlement_failed", error_type=type(e).__name__, error=str(e))
            raise

        record = SettlementRecord(
            pool_address=snapshot.pool_address,
            merkle_root=tree.root,
            total_entries=len(snapshot.entries),
            prize_pool=breakdown.prize_pool,
            entries=distributed,
            proofs=tree.proofs,
        )

        log.info(
            "settlement_completed",
            merkle_root=record.merkle_root,
            winner_count=len(winners),
            total_distributed=str(record.total_distributed),
        )
        return record

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def winner_leaves(entries: List[ScoredEntry]) -> List[WinnerLeaf]:
        """Leaves for every entry with a positive prize, in distribution order."""
        return [WinnerLeaf.from_scored_entry(e) for e in entries if e.prize_amount > 0]

    @staticmethod
    def _verify_commitment(tree: CommitmentTree, winners: List[WinnerLeaf]) -> None:
        for leaf in winners:
            if not verify_proof(tree.root, leaf, tree.proofs[leaf.entry_id]):
                raise SettlementInvariantException(
                    f"Proof for entry {leaf.entry_id} does not verify against {tree.root}"
                )
