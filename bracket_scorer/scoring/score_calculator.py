# bracket_scorer/scoring/score_calculator.py
"""
Score Calculator
----------------
Scores an entry's picks against the game results using a fixed,
round-weighted point table for the 67-game format (4 play-in games, then a
64-team single-elimination bracket).

    score = Σ points(i)  for every game i where picks[i] == results[i]

Round table (game index → points):
    First Four     0-3      5
    Round of 64    4-35    10
    Round of 32   36-51    20
    Sweet 16      52-59    40
    Elite 8       60-63    80
    Final Four    64-65   160
    Championship  66      320

A perfect bracket scores 1940. Picks and results are compared as raw bytes so
hex letter case never affects a score.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

import structlog

from bracket_scorer.core.exceptions import IndexOutOfRangeException, LengthMismatchException
from bracket_scorer.models.entry import Entry, ScoredEntry
from bracket_scorer.models.enumerations import Round
from bracket_scorer.scoring.utils import BytesLike, to_bytes32

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RoundBand:
    """Contiguous block of game indices worth the same points."""
    round: Round
    first_index: int
    last_index: int
    points: int

    @property
    def game_count(self) -> int:
        return self.last_index - self.first_index + 1


ROUND_WEIGHT_TABLE: tuple = (
    RoundBand(Round.FIRST_FOUR,    0,  3,   5),
    RoundBand(Round.ROUND_OF_64,   4, 35,  10),
    RoundBand(Round.ROUND_OF_32,  36, 51,  20),
    RoundBand(Round.SWEET_16,     52, 59,  40),
    RoundBand(Round.ELITE_8,      60, 63,  80),
    RoundBand(Round.FINAL_FOUR,   64, 65, 160),
    RoundBand(Round.CHAMPIONSHIP, 66, 66, 320),
)

MAX_GAME_INDEX = ROUND_WEIGHT_TABLE[-1].last_index
PERFECT_BRACKET_SCORE = sum(b.points * b.game_count for b in ROUND_WEIGHT_TABLE)


def round_for_game(game_index: int) -> RoundBand:
    """Return the round band a game index belongs to."""
    if game_index < 0 or game_index > MAX_GAME_INDEX:
        raise IndexOutOfRangeException(game_index, MAX_GAME_INDEX)
    for band in ROUND_WEIGHT_TABLE:
        if game_index <= band.last_index:
            return band
    raise IndexOutOfRangeException(game_index, MAX_GAME_INDEX)


def points_for_game(game_index: int) -> int:
    """Points awarded for a correct pick at game_index."""
    return round_for_game(game_index).points


class ScoreCalculator:
    """Score bracket entries against game results."""

    def score(self, picks: Sequence[BytesLike], results: Sequence[BytesLike]) -> int:
        """
        Args:
            picks: One 32-byte team id per game (bytes or hex text).
            results: Winning team id per game, same length as picks.

        Returns:
            Total points for the correct picks.

        Raises:
            LengthMismatchException: len(picks) != len(results).
            IndexOutOfRangeException: more games than the round table covers.
        """
        return sum(self.score_breakdown(picks, results).values())

    def score_breakdown(
        self,
        picks: Sequence[BytesLike],
        results: Sequence[BytesLike],
    ) -> Dict[Round, int]:
        """Points earned per round. Rounds with no correct pick map to 0."""
        if len(picks) != len(results):
            raise LengthMismatchException(len(picks), len(results))

        breakdown: Dict[Round, int] = {band.round: 0 for band in ROUND_WEIGHT_TABLE}
        for i, (pick, result) in enumerate(zip(picks, results)):
            band = round_for_game(i)
            if to_bytes32(pick) == to_bytes32(result):
                breakdown[band.round] += band.points
        return breakdown

    def score_entries(
        self,
        entries: Sequence[Entry],
        results: Sequence[BytesLike],
    ) -> List[ScoredEntry]:
        """Score every entry; the first bad entry aborts the whole batch."""
        result_bytes = [to_bytes32(r) for r in results]
        scored: List[ScoredEntry] = []
        for entry in entries:
            try:
                points = self.score(entry.picks, result_bytes)
            except LengthMismatchException:
                logger.error(
                    "entry_length_mismatch",
                    entry_id=entry.entry_id,
                    picks=len(entry.picks),
                    results=len(result_bytes),
                )
                raise
            scored.append(
                ScoredEntry.model_validate({**entry.model_dump(), "score": points})
            )

        logger.info(
            "entries_scored",
            entry_count=len(scored),
            game_count=len(result_bytes),
            top_score=max((e.score for e in scored), default=0),
        )
        return scored
