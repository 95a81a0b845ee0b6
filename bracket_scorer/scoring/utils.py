"""
Byte Utilities
bracket_scorer/scoring/utils.py

Canonical forms for the identifiers that flow through a settlement. Picks and
results may arrive as raw bytes or as hex text in either letter case; all
comparisons happen on raw bytes.
"""

import re
from typing import Union

from web3 import Web3

BytesLike = Union[bytes, bytearray, str]

ZERO_BYTES32 = b"\x00" * 32

_HEX32_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]{64}$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def to_bytes32(value: BytesLike) -> bytes:
    """Convert a 32-byte identifier (bytes or hex text) to raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 32:
            raise ValueError(f"expected 32 bytes, got {len(value)}")
        return bytes(value)
    if not isinstance(value, str) or not _HEX32_RE.match(value.strip()):
        raise ValueError(f"not a 32-byte hex identifier: {value!r}")
    text = value.strip()
    return bytes.fromhex(text[2:] if text[:2].lower() == "0x" else text)


def to_hex(value: bytes) -> str:
    """Render bytes as lowercase 0x-prefixed hex."""
    return "0x" + bytes(value).hex()


def to_hex32(value: BytesLike) -> str:
    """Canonical text form of a 32-byte identifier."""
    return to_hex(to_bytes32(value))


def is_no_pick(value: BytesLike) -> bool:
    return to_bytes32(value) == ZERO_BYTES32


def normalize_address(value: BytesLike) -> str:
    """
    Canonical EIP-55 form of a 20-byte account address.

    Accepts raw bytes or hex text in any letter case. Mixed-case input is not
    checksum-validated: the on-chain encoding only sees the 20 bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"expected 20-byte address, got {len(value)} bytes")
        return Web3.to_checksum_address(bytes(value))
    if not isinstance(value, str) or not _ADDRESS_RE.match(value.strip().lower()):
        raise ValueError(f"not an account address: {value!r}")
    return Web3.to_checksum_address(value.strip().lower())


def abs_diff(a: int, b: int) -> int:
    """Absolute difference of two integers, exact for any size."""
    return a - b if a >= b else b - a


def team_id(name: str) -> str:
    """Identifier the bracket UI assigns to a team: keccak256(utf8(name))."""
    return to_hex(Web3.keccak(text=name))
