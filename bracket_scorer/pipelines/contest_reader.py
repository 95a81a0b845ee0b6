"""
Contest Reader
bracket_scorer/pipelines/contest_reader.py

Reads one immutable snapshot of a pool contract (entries, game results, total
pool value) over JSON-RPC. This is the only place the settlement touches the
network; every failure here surfaces as DataUnavailableException before the
pipeline starts.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

import structlog
from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from bracket_scorer.core.exceptions import DataUnavailableException
from bracket_scorer.models.entry import Entry
from bracket_scorer.models.settlement import ContestSnapshot
from bracket_scorer.scoring.utils import normalize_address, to_hex32

logger = structlog.get_logger(__name__)


BRACKET_POOL_ABI = [
    {
        "type": "event",
        "name": "EntrySubmitted",
        "anonymous": False,
        "inputs": [
            {"name": "entryId", "type": "uint256", "indexed": True},
            {"name": "owner", "type": "address", "indexed": True},
            {"name": "picks", "type": "bytes32[]", "indexed": False},
            {"name": "tiebreaker", "type": "uint256", "indexed": False},
            {"name": "pricePaid", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "function",
        "name": "getGameResults",
        "inputs": [],
        "outputs": [{"name": "", "type": "bytes32[]"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "totalPoolValue",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
]


class ContestReader:
    """Read pool state from an Ethereum JSON-RPC node."""

    def __init__(
        self,
        rpc_url: str,
        chain_id: Optional[int] = None,
        from_block: int = 0,
        web3: Optional[Web3] = None,
    ):
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.from_block = from_block
        self.w3 = web3 or Web3(Web3.HTTPProvider(rpc_url))
        self._chain_checked = False

    @contextmanager
    def _data_source(self, what: str) -> Iterator[None]:
        try:
            yield
        except DataUnavailableException:
            raise
        except (Web3Exception, RequestException, OSError, ValueError) as e:
            logger.error("chain_read_failed", what=what, rpc_url=self.rpc_url, error=str(e))
            raise DataUnavailableException(what, str(e)) from e

    def _contract(self, pool_address: str):
        self._ensure_chain()
        return self.w3.eth.contract(
            address=normalize_address(pool_address),
            abi=BRACKET_POOL_ABI,
        )

    def _ensure_chain(self) -> None:
        if self._chain_checked:
            return
        with self._data_source("chain_id"):
            if not self.w3.is_connected():
                raise DataUnavailableException("rpc", f"cannot connect to {self.rpc_url}")
            if self.chain_id is not None:
                actual = self.w3.eth.chain_id
                if actual != self.chain_id:
                    raise DataUnavailableException(
                        "chain_id", f"node is on chain {actual}, expected {self.chain_id}"
                    )
        self._chain_checked = True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_entries(self, pool_address: str) -> List[Entry]:
        """All EntrySubmitted events for the pool, ordered by entryId."""
        with self._data_source("EntrySubmitted"):
            contract = self._contract(pool_address)
            logs = contract.events.EntrySubmitted().get_logs(
                from_block=self.from_block,
                to_block="latest",
            )
            entries = [
                Entry(
                    entry_id=log["args"]["entryId"],
                    owner=log["args"]["owner"],
                    picks=tuple(to_hex32(p) for p in log["args"]["picks"]),
                    tiebreaker=log["args"]["tiebreaker"],
                    amount_paid=log["args"]["pricePaid"],
                )
                for log in logs
            ]
        entries.sort(key=lambda e: e.entry_id)
        logger.info("entries_read", pool_address=pool_address, entry_count=len(entries))
        return entries

    def read_game_results(self, pool_address: str) -> List[str]:
        with self._data_source("getGameResults"):
            contract = self._contract(pool_address)
            results = [to_hex32(r) for r in contract.functions.getGameResults().call()]
        logger.info("game_results_read", pool_address=pool_address, game_count=len(results))
        return results

    def read_total_pool_value(self, pool_address: str) -> int:
        with self._data_source("totalPoolValue"):
            contract = self._contract(pool_address)
            value = int(contract.functions.totalPoolValue().call())
        logger.info("total_pool_value_read", pool_address=pool_address, total_pool_value=str(value))
        return value

    def read_snapshot(self, pool_address: str) -> ContestSnapshot:
        """Entries, results and pool value as one snapshot."""
        entries = self.read_entries(pool_address)
        results = self.read_game_results(pool_address)
        total = self.read_total_pool_value(pool_address)
        with self._data_source("snapshot"):
            return ContestSnapshot(
                pool_address=pool_address,
                entries=tuple(entries),
                game_results=tuple(results),
                total_pool_value=total,
            )
