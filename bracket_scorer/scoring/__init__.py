"""
scoring/ - Settlement pipeline

Modules:
    utils.py                - Byte/hex identifier utilities
    score_calculator.py     - Round-weighted Score Calculator
    ranker.py               - Competition Ranker (score, tiebreaker, entryId)
    fee_calculator.py       - Protocol fee / prize pool split
    distributor.py          - Prize Distributor (ties + dust)
    commitment_builder.py   - Sorted-pair Merkle commitment and proofs
    integration_service.py  - Full Pipeline Settlement Service
"""
