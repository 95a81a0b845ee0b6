# bracket_scorer/scoring/ranker.py
"""
Ranker
------
Orders scored entries and assigns competition ranks.

Sort key:
    (score desc, tiebreaker_distance asc, entry_id asc)

    tiebreaker_distance = |entry.tiebreaker − actual tiebreaker|

entry_id only makes the order total and reproducible; it never separates two
entries' ranks. Rank rule ("competition ranking with gaps"):

    position  1    2    3    4
    key       A    A    B    C
    rank      1    1    3    4

Entries tied on (score, tiebreaker_distance) share the rank of the first of
them; the next distinct entry takes its 1-based position, not previous + 1.
"""
from typing import List, Sequence

import structlog

from bracket_scorer.models.entry import ScoredEntry
from bracket_scorer.scoring.utils import abs_diff

logger = structlog.get_logger(__name__)


def _sort_key(entry: ScoredEntry):
    return (-entry.score, entry.tiebreaker_distance, entry.entry_id)


def _tie_key(entry: ScoredEntry):
    return (entry.score, entry.tiebreaker_distance)


class Ranker:
    """Deterministic ranking of scored entries."""

    def rank(
        self,
        entries: Sequence[ScoredEntry],
        reference_tiebreaker: int,
    ) -> List[ScoredEntry]:
        """
        Args:
            entries: Scored entries in any order.
            reference_tiebreaker: Realised tiebreaker value.

        Returns:
            New ScoredEntry list in ranked order with tiebreaker_distance and
            rank filled in. Empty input gives empty output.
        """
        with_distance = [
            e.model_copy(update={"tiebreaker_distance": abs_diff(e.tiebreaker, reference_tiebreaker)})
            for e in entries
        ]
        with_distance.sort(key=_sort_key)

        ranked: List[ScoredEntry] = []
        for position, entry in enumerate(with_distance, start=1):
            if ranked and _tie_key(entry) == _tie_key(ranked[-1]):
                rank = ranked[-1].rank
            else:
                rank = position
            ranked.append(entry.model_copy(update={"rank": rank}))

        logger.info(
            "entries_ranked",
            entry_count=len(ranked),
            reference_tiebreaker=reference_tiebreaker,
            leaders=sum(1 for e in ranked if e.rank == 1),
        )
        return ranked
