from __future__ import annotations

from pathlib import Path

from bracket_scorer.models.settlement import SettlementRecord


def settlement_filename(pool_address: str) -> str:
    return f"output-{pool_address[:10]}.json"


def export_settlement_json(record: SettlementRecord, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)

    out_path = out_dir / settlement_filename(record.pool_address)
    out_path.write_text(record.to_json(indent=2), encoding="utf-8")
    return out_path


def load_settlement_json(path: Path) -> SettlementRecord:
    return SettlementRecord.model_validate_json(path.read_text(encoding="utf-8"))
