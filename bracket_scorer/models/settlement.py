from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from bracket_scorer.models.entry import Address, Bytes32Hex, Entry, ScoredEntry, Uint


class ContestSnapshot(BaseModel):
    """
    Immutable on-chain state a settlement is computed from.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    pool_address: Address = Field(
        ...,
        description="Contest identifier (the pool contract address)"
    )

    entries: Tuple[Entry, ...] = Field(
        default=(),
        description="Entries in submission order"
    )

    game_results: Tuple[Bytes32Hex, ...] = Field(
        ...,
        description="Winning team id per game index"
    )

    total_pool_value: Uint = Field(
        ...,
        description="Total pool value before the protocol fee"
    )

    @field_validator("entries")
    @classmethod
    def unique_entry_ids(cls, entries: Tuple[Entry, ...]) -> Tuple[Entry, ...]:
        seen = set()
        for entry in entries:
            if entry.entry_id in seen:
                raise ValueError(f"duplicate entryId {entry.entry_id}")
            seen.add(entry.entry_id)
        return entries


class SettlementRequest(ContestSnapshot):
    """
    Snapshot plus the realised tiebreaker value, as posted to the API.
    """

    actual_tiebreaker: int = Field(
        ...,
        ge=0,
        description="Realised tiebreaker value entries are measured against"
    )

    def snapshot(self) -> ContestSnapshot:
        return ContestSnapshot(
            pool_address=self.pool_address,
            entries=self.entries,
            game_results=self.game_results,
            total_pool_value=self.total_pool_value,
        )


class SettlementRecord(BaseModel):
    """
    Published settlement output. Consumed by the claim UI one entryId at a
    time, so key names and amount encoding are part of the interface.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    pool_address: str
    merkle_root: str
    total_entries: int = Field(..., ge=0)
    prize_pool: Uint
    entries: List[ScoredEntry]
    proofs: Dict[int, List[str]]

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @property
    def winners(self) -> List[ScoredEntry]:
        return [e for e in self.entries if e.prize_amount > 0]

    @property
    def total_distributed(self) -> int:
        return sum(e.prize_amount for e in self.entries)
