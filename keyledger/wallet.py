"""
KEYLEDGER Wallet Implementation
Cryptographic identity: owns a private key, derives an address, signs data.
"""

from typing import Any, Dict, Optional

from .crypto import (
    Entropy,
    generate_signing_key,
    signing_key_from_secret,
    compress_public_key,
    public_key_to_address,
    sign_digest,
    sha256,
)


class SecretKey:
    """
    Holder for a secp256k1 private key.

    The scalar has no public accessor. The only thing a SecretKey can do
    is sign a digest, and it refuses to be copied, pickled or printed.
    """

    __slots__ = ('_signing_key',)

    def __init__(self, signing_key):
        self._signing_key = signing_key

    def public_key(self) -> bytes:
        """Compressed public key for this secret."""
        return compress_public_key(self._signing_key.get_verifying_key())

    def sign_digest(self, digest: bytes) -> bytes:
        """DER signature over a 32-byte digest."""
        return sign_digest(self._signing_key, digest)

    def __repr__(self) -> str:
        return 'SecretKey(<redacted>)'

    def __reduce__(self):
        raise TypeError("SecretKey cannot be serialized")

    def __copy__(self):
        raise TypeError("SecretKey cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("SecretKey cannot be copied")


class Wallet:
    """
    KEYLEDGER Wallet
    A key pair plus the descriptive miner role flag.
    """

    __slots__ = ('_secret', '_public_key', '_is_miner')

    def __init__(self, secret: SecretKey, is_miner: bool = False):
        self._secret = secret
        self._public_key = secret.public_key()
        self._is_miner = bool(is_miner)

    @classmethod
    def create(cls, is_miner: bool = False, entropy: Optional[Entropy] = None) -> 'Wallet':
        """
        Create a wallet with a freshly generated key pair.

        Args:
            is_miner: Whether this identity takes part in block assembly
            entropy: Randomness source, defaults to the OS CSPRNG

        Returns:
            New wallet

        Raises:
            KeyGenerationError: If no secure randomness is available
        """
        return cls(SecretKey(generate_signing_key(entropy)), is_miner)

    @classmethod
    def from_secret(cls, secret: bytes, is_miner: bool = False) -> 'Wallet':
        """Rebuild a wallet from a known 32-byte private scalar."""
        return cls(SecretKey(signing_key_from_secret(secret)), is_miner)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def is_miner(self) -> bool:
        return self._is_miner

    def address(self) -> str:
        """Hex encoding of the compressed public key."""
        return public_key_to_address(self._public_key)

    def sign(self, data: bytes) -> bytes:
        """
        Sign arbitrary bytes.

        The data is hashed with SHA-256 and the digest is signed with
        ECDSA over secp256k1.

        Args:
            data: Bytes to sign

        Returns:
            DER-encoded signature
        """
        return self._secret.sign_digest(sha256(data))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (without private key for safety)."""
        return {
            'address': self.address(),
            'public_key': self._public_key.hex(),
            'is_miner': self._is_miner,
        }

    def __repr__(self) -> str:
        return f"Wallet(address={self.address()!r}, is_miner={self._is_miner})"

    def __reduce__(self):
        raise TypeError("Wallet cannot be serialized")
