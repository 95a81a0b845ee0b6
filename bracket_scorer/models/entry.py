from typing import Annotated, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel

from bracket_scorer.scoring.utils import normalize_address, to_hex32


# Identifiers are canonicalised on the way in; amounts leave as decimal
# strings so no JSON consumer ever sees them as floats.
Bytes32Hex = Annotated[str, BeforeValidator(to_hex32)]
Address = Annotated[str, BeforeValidator(normalize_address)]
Uint = Annotated[
    int,
    Field(ge=0),
    PlainSerializer(str, return_type=str, when_used="json"),
]
PositiveUint = Annotated[
    int,
    Field(gt=0),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class Entry(BaseModel):
    """
    One bracket entry as submitted on chain.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    entry_id: int = Field(
        ...,
        ge=0,
        description="Externally assigned id, unique within a contest"
    )

    owner: Address = Field(
        ...,
        description="Account that owns the entry and may claim its prize"
    )

    picks: Tuple[Bytes32Hex, ...] = Field(
        ...,
        description="One 32-byte team id per game; the zero id means no pick"
    )

    tiebreaker: Uint = Field(
        ...,
        description="Predicted tiebreaker value (e.g. championship total points)"
    )

    amount_paid: Uint = Field(
        ...,
        validation_alias=AliasChoices("amountPaid", "pricePaid", "amount_paid"),
        serialization_alias="amountPaid",
        description="Entry price paid, smallest currency unit"
    )


class ScoredEntry(Entry):
    """
    Entry plus everything a settlement run derives for it.

    rank is 0 until the entry has been through the ranker.
    """

    score: int = Field(default=0, ge=0)
    tiebreaker_distance: int = Field(default=0, ge=0)
    rank: int = Field(default=0, ge=0)
    prize_amount: Uint = 0


class WinnerLeaf(BaseModel):
    """
    The (owner, entryId, amount) triple committed into the Merkle tree.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    owner: Address
    entry_id: int = Field(..., ge=0)
    amount: PositiveUint

    @classmethod
    def from_scored_entry(cls, entry: ScoredEntry) -> "WinnerLeaf":
        return cls(owner=entry.owner, entry_id=entry.entry_id, amount=entry.prize_amount)
