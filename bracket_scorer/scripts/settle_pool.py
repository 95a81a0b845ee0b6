#!/usr/bin/env python
"""
Settle a bracket pool from chain.

Runs the full pipeline for one pool:
  1. Read entries, game results and total pool value from the RPC node
  2. Score, rank, distribute (net of protocol fee)
  3. Build the Merkle commitment over winner payouts
  4. Write output-<pool>.json for publishing

Nothing is sent on chain. The admin publishes the root and the proofs file
afterwards (see the printed next steps).

Usage:
    python -m bracket_scorer.scripts.settle_pool <poolAddress> <rpcUrl> <actualTiebreaker>
    python -m bracket_scorer.scripts.settle_pool 0xPool https://rpc.sepolia.org 145 --out-dir out/
    python -m bracket_scorer.scripts.settle_pool 0xPool https://eth.llamarpc.com 145 --chain-id 1
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from bracket_scorer.config import get_settings
from bracket_scorer.core.exceptions import SettlementException
from bracket_scorer.logging_config import configure_logging
from bracket_scorer.pipelines.contest_reader import ContestReader
from bracket_scorer.pipelines.exporters import export_settlement_json
from bracket_scorer.scoring.integration_service import SettlementService

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="settle_pool",
        description="Score a bracket pool and build its prize Merkle commitment.",
    )
    parser.add_argument("pool_address", help="BracketPool contract address")
    parser.add_argument("rpc_url", help="JSON-RPC endpoint")
    parser.add_argument("actual_tiebreaker", type=int, help="Realised tiebreaker value")
    parser.add_argument(
        "--chain-id",
        type=int,
        default=settings.CHAIN_ID,
        help=f"Expected chain id (default {settings.CHAIN_ID})",
    )
    parser.add_argument(
        "--from-block",
        type=int,
        default=settings.FROM_BLOCK,
        help="First block to scan for EntrySubmitted events",
    )
    parser.add_argument(
        "--fee-bps",
        type=int,
        default=settings.FEE_BASIS_POINTS,
        help=f"Protocol fee in basis points (default {settings.FEE_BASIS_POINTS})",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path(settings.OUTPUT_DIR),
        help="Directory for the output JSON",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.actual_tiebreaker < 0:
        print("actual_tiebreaker must be non-negative", file=sys.stderr)
        return 1

    print(f"Scoring pool: {args.pool_address}")
    print(f"Actual tiebreaker: {args.actual_tiebreaker}")

    try:
        reader = ContestReader(args.rpc_url, chain_id=args.chain_id, from_block=args.from_block)
        snapshot = reader.read_snapshot(args.pool_address)
        print(f"Found {len(snapshot.entries)} entries")
        print(f"Total pool value: {snapshot.total_pool_value}")

        service = SettlementService(fee_basis_points=args.fee_bps)
        record = service.settle(snapshot, args.actual_tiebreaker)
    except SettlementException as e:
        logger.error("settle_pool_failed", error_type=type(e).__name__, error=str(e))
        print(f"Settlement aborted: {e}", file=sys.stderr)
        return 1

    out_path = export_settlement_json(record, args.out_dir)
    winners = record.winners

    print(f"Prize pool: {record.prize_pool}")
    print(f"Merkle root: {record.merkle_root}")
    print(f"Winners: {len(winners)}")
    print(f"Output written to {out_path}")
    print("\nNext steps:")
    print(f'1. Admin calls setMerkleRoot("{record.merkle_root}")')
    print(f"2. Verify: balanceOf(pool) == sum(prizeAmounts) = {sum(w.prize_amount for w in winners)}")
    print("3. Pin output JSON to IPFS")
    print("4. Admin calls setProofsCID(cid)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
