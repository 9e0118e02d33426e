#!/usr/bin/env python3
"""
KEYLEDGER Wallet CLI
Create identities and run transfers against an in-memory ledger.

Usage:
    keyledger-wallet new [--miner]                     Print a fresh identity
    keyledger-wallet simulate <balance> <amount>       Fund a sender and run one transfer
"""

import sys
import os
import argparse
import json
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from keyledger import Wallet, Ledger, Mempool, TransferAuthorizer, InsufficientFundsError
from keyledger import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format=config.LOG_FORMAT,
    datefmt=config.LOG_DATEFMT
)
logger = logging.getLogger(__name__)


def cmd_new(args):
    """Create a new identity and print its public data."""
    wallet = Wallet.create(is_miner=args.miner)
    print(json.dumps(wallet.to_dict(), indent=2))


def cmd_simulate(args):
    """Fund a sender, authorize one transfer, show the pending transaction."""
    sender = Wallet.create(is_miner=args.miner)
    receiver = Wallet.create()

    ledger = Ledger()
    try:
        ledger.credit(sender.address(), args.balance)
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    mempool = Mempool()

    authorizer = TransferAuthorizer(ledger, mempool)

    print(f"Sender:   {sender.address()} (balance {args.balance})")
    print(f"Receiver: {receiver.address()}")

    try:
        tx = authorizer.authorize_transfer(sender, receiver, args.amount)
    except InsufficientFundsError as e:
        print(f"❌ {e}")
        return 1
    except ValueError as e:
        print(f"❌ Invalid transfer: {e}")
        return 1

    print("\n✓ Transaction submitted")
    print(json.dumps(tx.to_dict(), indent=2))
    print(f"\nPending transactions: {len(mempool)}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description='KEYLEDGER Wallet CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # new
    p_new = subparsers.add_parser('new', help='Create a new identity')
    p_new.add_argument('--miner', action='store_true', help='Mark identity as a miner')

    # simulate
    p_sim = subparsers.add_parser('simulate', help='Run one transfer against an in-memory ledger')
    p_sim.add_argument('balance', type=float, help='Starting sender balance')
    p_sim.add_argument('amount', type=float, help='Amount to send')
    p_sim.add_argument('--miner', action='store_true', help='Sender is a miner')

    args = parser.parse_args()

    if args.command == 'new':
        cmd_new(args)
    elif args.command == 'simulate':
        return cmd_simulate(args)
    else:
        parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
