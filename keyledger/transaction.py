"""
KEYLEDGER Transaction Implementation
Account-to-account transfer with a fee and a sender signature.
"""

import struct
from dataclasses import dataclass
from typing import Any, Dict

from .crypto import sha256
from . import config

# Fields covered by the signature
SIGNED_FIELDS = ('sender', 'receiver', 'amount', 'fee')


@dataclass
class Transaction:
    """KEYLEDGER Transaction."""

    sender: str         # Sender address
    receiver: str       # Receiver address
    amount: float       # Principal requested by the sender
    fee: float          # amount * FEE_RATE
    signature: str = '' # Hex DER signature, empty until authorized

    def __setattr__(self, name: str, value: Any):
        # Sealed once signed
        if self.__dict__.get('signature') and (name in SIGNED_FIELDS or name == 'signature'):
            raise AttributeError(f"Cannot modify '{name}' of a signed transaction")
        super().__setattr__(name, value)

    @classmethod
    def create(cls, sender: str, receiver: str, amount: float, fee: float) -> 'Transaction':
        """Create an unsigned transaction."""
        return cls(sender=sender, receiver=receiver, amount=float(amount), fee=float(fee))

    def serialize(self) -> bytes:
        """
        Canonical serialization of the signed fields.

        Layout: version byte, varint-prefixed UTF-8 sender and receiver,
        then amount and fee as little-endian doubles. The signature is
        never included.
        """
        data = bytes([config.TX_FORMAT_VERSION])
        data += self._serialize_str(self.sender)
        data += self._serialize_str(self.receiver)
        data += struct.pack('<d', self.amount)
        data += struct.pack('<d', self.fee)
        return data

    def content_hash(self) -> bytes:
        """SHA-256 of the canonical serialization."""
        return sha256(self.serialize())

    @property
    def txid(self) -> str:
        return self.content_hash().hex()

    def is_signed(self) -> bool:
        return bool(self.signature)

    @classmethod
    def _serialize_str(cls, value: str) -> bytes:
        raw = value.encode('utf-8')
        return cls._varint(len(raw)) + raw

    @staticmethod
    def _varint(n: int) -> bytes:
        """Encode integer as Bitcoin varint."""
        if n < 0xfd:
            return bytes([n])
        elif n <= 0xffff:
            return b'\xfd' + struct.pack('<H', n)
        elif n <= 0xffffffff:
            return b'\xfe' + struct.pack('<I', n)
        else:
            return b'\xff' + struct.pack('<Q', n)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'txid': self.txid,
            'sender': self.sender,
            'receiver': self.receiver,
            'amount': self.amount,
            'fee': self.fee,
            'signature': self.signature,
        }

