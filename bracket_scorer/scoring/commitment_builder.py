# bracket_scorer/scoring/commitment_builder.py
"""
Commitment Builder
------------------
Builds the Merkle commitment over winner payouts that the pool contract's
claim() verifies with OpenZeppelin's MerkleProof.

Leaf:
    leaf = keccak256(keccak256(abi.encode(address owner, uint256 entryId, uint256 amount)))

    abi.encode puts each value in its own 32-byte word: the 20-byte owner is
    left-padded with zeros, entryId and amount are big-endian. Hashing twice
    keeps a 64-byte internal node preimage from ever being presented as a
    leaf.

Tree:
    1. Sort leaf hashes by raw byte value.
    2. Pair adjacent nodes left to right:
           parent = keccak256(min(a, b) || max(a, b))
       An odd node out moves up to the next level unchanged.
    3. Repeat until one node remains: the root.

Proof:
    Sibling hashes met while climbing from a leaf to the root. A promoted
    level contributes nothing. The verifier folds the proof with the same
    sorted-pair rule, so it never needs left/right flags.

The tree depends only on the set of leaves: any input order yields the same
root and the same proofs.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import structlog
from eth_abi import encode
from web3 import Web3

from bracket_scorer.core.exceptions import NoWinnersException
from bracket_scorer.models.entry import WinnerLeaf
from bracket_scorer.scoring.utils import BytesLike, to_bytes32, to_hex

logger = structlog.get_logger(__name__)

LEAF_ENCODING: Tuple[str, ...] = ("address", "uint256", "uint256")


def keccak256(data: bytes) -> bytes:
    return bytes(Web3.keccak(data))


def encode_leaf(leaf: WinnerLeaf) -> bytes:
    """abi.encode(owner, entryId, amount): 96 bytes."""
    return encode(list(LEAF_ENCODING), [leaf.owner, leaf.entry_id, leaf.amount])


def hash_leaf(leaf: WinnerLeaf) -> bytes:
    """Committed leaf hash (hash of the hash of the encoded triple)."""
    return keccak256(keccak256(encode_leaf(leaf)))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """Sorted-pair hash: the parent is the same whichever child is on the left."""
    return keccak256(a + b) if a <= b else keccak256(b + a)


def process_proof(leaf_hash: BytesLike, proof: Sequence[BytesLike]) -> bytes:
    """Fold a proof onto a leaf hash; returns the implied root."""
    computed = to_bytes32(leaf_hash)
    for sibling in proof:
        computed = hash_pair(computed, to_bytes32(sibling))
    return computed


def verify_proof(root: BytesLike, leaf: WinnerLeaf, proof: Sequence[BytesLike]) -> bool:
    """True when proof links leaf to root under the sorted-pair rule."""
    return process_proof(hash_leaf(leaf), proof) == to_bytes32(root)


@dataclass(frozen=True)
class CommitmentTree:
    """Output of CommitmentBuilder.build()."""
    root: str                         # 0x-prefixed hex
    proofs: Dict[int, List[str]]      # entryId → sibling hashes, leaf to root
    leaf_hashes: Dict[int, str]       # entryId → committed leaf hash
    layers: List[List[bytes]] = field(repr=False, compare=False)

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def depth(self) -> int:
        return len(self.layers) - 1

    def proof_for(self, entry_id: int) -> List[str]:
        return self.proofs[entry_id]


class CommitmentBuilder:
    """Build the sorted-pair Merkle tree over winner leaves."""

    def build(self, winners: Sequence[WinnerLeaf]) -> CommitmentTree:
        """
        Args:
            winners: Non-empty winner leaves, any order.

        Returns:
            CommitmentTree with root and one proof per entryId.

        Raises:
            NoWinnersException: winners is empty. The claim contract cannot
                represent an empty commitment.
        """
        if not winners:
            raise NoWinnersException()

        # entry_id breaks ties between byte-identical leaves so the pairing of
        # hashes to entries is stable
        hashed = sorted((hash_leaf(w), w.entry_id) for w in winners)

        layers = self._build_layers([h for h, _ in hashed])

        proofs: Dict[int, List[str]] = {}
        leaf_hashes: Dict[int, str] = {}
        for index, (leaf_hash, entry_id) in sorted(
            enumerate(hashed), key=lambda item: item[1][1]
        ):
            proofs[entry_id] = [to_hex(node) for node in self._proof(layers, index)]
            leaf_hashes[entry_id] = to_hex(leaf_hash)

        tree = CommitmentTree(
            root=to_hex(layers[-1][0]),
            proofs=proofs,
            leaf_hashes=leaf_hashes,
            layers=layers,
        )

        logger.info(
            "commitment_built",
            root=tree.root,
            leaf_count=tree.leaf_count,
            depth=tree.depth,
        )
        return tree

    @staticmethod
    def _build_layers(leaves: List[bytes]) -> List[List[bytes]]:
        layers = [leaves]
        while len(layers[-1]) > 1:
            level = layers[-1]
            parents: List[bytes] = []
            for i in range(0, len(level) - 1, 2):
                parents.append(hash_pair(level[i], level[i + 1]))
            if len(level) % 2 == 1:
                parents.append(level[-1])
            layers.append(parents)
        return layers

    @staticmethod
    def _proof(layers: List[List[bytes]], index: int) -> List[bytes]:
        path: List[bytes] = []
        for level in layers[:-1]:
            sibling = index ^ 1
            if sibling < len(level):
                path.append(level[sibling])
            index //= 2
        return path
