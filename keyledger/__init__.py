"""
KEYLEDGER Core Module
Contains wallet identities, transactions, and the transfer authorizer.
"""

from .crypto import (
    KeyGenerationError,
    SigningError,
    sha256,
    sign_message,
    verify_signature,
)
from .wallet import Wallet, SecretKey
from .transaction import Transaction
from .ledger import LedgerView, Pool, Ledger, Mempool
from .authorizer import (
    TransferAuthorizer,
    authorize_transfer,
    MinerNotice,
    WalletError,
    InsufficientFundsError,
)

__all__ = [
    'KeyGenerationError',
    'SigningError',
    'sha256',
    'sign_message',
    'verify_signature',
    'Wallet',
    'SecretKey',
    'Transaction',
    'LedgerView',
    'Pool',
    'Ledger',
    'Mempool',
    'TransferAuthorizer',
    'authorize_transfer',
    'MinerNotice',
    'WalletError',
    'InsufficientFundsError',
]
