"""
KEYLEDGER Ledger Collaborators
Interfaces the authorizer consumes, plus in-memory implementations.
"""

import logging
import math
from threading import Lock
from typing import Dict, List, Protocol

from .crypto import address_to_public_key
from .transaction import Transaction

logger = logging.getLogger(__name__)


class LedgerView(Protocol):
    """Read access to confirmed balances."""

    def balance_of(self, address: str) -> float:
        ...


class Pool(Protocol):
    """Pending-transaction set."""

    def accept(self, tx: Transaction) -> None:
        ...


class Ledger:
    """
    In-memory balance table.

    Balances are confirmed state only; pending transfers in a Mempool do
    not reduce them until apply() is called.
    """

    def __init__(self, balances: Dict[str, float] = None):
        self._balances: Dict[str, float] = dict(balances or {})
        self._lock = Lock()

    def balance_of(self, address: str) -> float:
        with self._lock:
            return self._balances.get(address, 0.0)

    def credit(self, address: str, amount: float):
        """Add funds to an address."""
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Cannot credit amount: {amount}")
        with self._lock:
            self._balances[address] = self._balances.get(address, 0.0) + amount
        logger.debug(f"Credited {amount} to {address[:16]}...")

    def apply(self, tx: Transaction):
        """
        Move funds for a confirmed transaction. The fee leaves circulation.

        No balance check is made here; overdrafts from concurrently
        authorized transfers show up as negative balances.
        """
        with self._lock:
            self._balances[tx.sender] = self._balances.get(tx.sender, 0.0) - tx.amount - tx.fee
            self._balances[tx.receiver] = self._balances.get(tx.receiver, 0.0) + tx.amount
        logger.debug(f"Applied tx {tx.txid[:16]}...")


class Mempool:
    """Memory pool for unconfirmed transactions."""

    def __init__(self):
        self._transactions: List[Transaction] = []
        self._lock = Lock()

    def accept(self, tx: Transaction) -> None:
        """
        Add a signed transaction to the pending set.

        Raises:
            ValueError: If the transaction is unsigned or an address is malformed
        """
        if not tx.is_signed():
            raise ValueError(f"Mempool: rejected tx {tx.txid[:16]}... - unsigned")
        for address in (tx.sender, tx.receiver):
            try:
                address_to_public_key(address)
            except ValueError as e:
                raise ValueError(f"Mempool: rejected tx {tx.txid[:16]}... - {e}") from e
        with self._lock:
            self._transactions.append(tx)
        logger.debug(f"Mempool: accepted tx {tx.txid[:16]}...")

    def pending(self) -> List[Transaction]:
        with self._lock:
            return list(self._transactions)

    def drain(self) -> List[Transaction]:
        """Remove and return every pending transaction in arrival order."""
        with self._lock:
            txs, self._transactions = self._transactions, []
        return txs

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)
