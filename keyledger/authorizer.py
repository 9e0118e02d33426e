"""
KEYLEDGER Transfer Authorizer
Balance check, transaction construction, signing and pool submission.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List

from .ledger import LedgerView, Pool
from .transaction import Transaction
from .wallet import Wallet
from . import config

logger = logging.getLogger(__name__)


class WalletError(ValueError):
    """Base class for recoverable wallet errors."""


class InsufficientFundsError(WalletError):
    """Sender balance does not cover amount plus fee."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Address: {address} does not have enough funds")


@dataclass(frozen=True)
class MinerNotice:
    """A miner wallet queued its own transfer for future block assembly."""

    miner: str
    txid: str


MinerObserver = Callable[[MinerNotice], None]


def log_miner_notice(notice: MinerNotice):
    logger.info(f"Miner {notice.miner} added transaction {notice.txid[:16]}... to mining pool")


class TransferAuthorizer:
    """
    Authorizes transfers against a ledger and submits them to a pool.

    The balance check and the submission are two separate calls into the
    collaborators; nothing here makes them atomic.
    """

    def __init__(self, ledger: LedgerView, pool: Pool, fee_rate: float = config.FEE_RATE):
        self.ledger = ledger
        self.pool = pool
        self.fee_rate = fee_rate
        self._observers: List[MinerObserver] = [log_miner_notice]

    def subscribe(self, observer: MinerObserver):
        """Register a callback for miner notices."""
        self._observers.append(observer)

    def authorize_transfer(self, sender: Wallet, receiver: Wallet, amount: float) -> Transaction:
        """
        Sign a transfer from sender to receiver and submit it.

        Args:
            sender: Paying wallet
            receiver: Receiving wallet
            amount: Principal, fee is added on top

        Returns:
            The signed transaction handed to the pool

        Raises:
            ValueError: If amount is negative or not finite
            InsufficientFundsError: If balance < amount + fee
        """
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Invalid amount: {amount}")

        fee = amount * self.fee_rate
        sender_address = sender.address()

        balance = self.ledger.balance_of(sender_address)
        if balance < amount + fee:
            logger.info(f"Rejected transfer of {amount} from {sender_address[:16]}...: "
                        f"have {balance}, need {amount + fee}")
            raise InsufficientFundsError(sender_address)

        tx = Transaction.create(sender_address, receiver.address(), amount, fee)

        tx_hash = tx.content_hash()
        tx.signature = sender.sign(tx_hash).hex()

        self.pool.accept(tx)
        logger.debug(f"Submitted tx {tx.txid[:16]}...: {amount} + {fee} fee")

        if sender.is_miner:
            self._notify(MinerNotice(miner=sender_address, txid=tx.txid))

        return tx

    def _notify(self, notice: MinerNotice):
        # Advisory only: the transaction is already in the pool
        for observer in self._observers:
            try:
                observer(notice)
            except Exception:
                logger.exception(f"Miner notice observer {observer!r} failed for tx {notice.txid[:16]}...")


def authorize_transfer(sender: Wallet, receiver: Wallet, amount: float,
                       ledger: LedgerView, pool: Pool) -> Transaction:
    """One-shot transfer with the default fee rate."""
    return TransferAuthorizer(ledger, pool).authorize_transfer(sender, receiver, amount)
