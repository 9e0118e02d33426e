"""
KEYLEDGER Cryptographic Utilities
SHA-256, ECDSA secp256k1 key generation, signing and verification.
"""

import hashlib
import secrets
from typing import Callable, Optional

from ecdsa import SECP256k1, SigningKey, VerifyingKey, BadSignatureError, MalformedPointError
from ecdsa.der import UnexpectedDER
from ecdsa.util import sigencode_der, sigdecode_der

from . import config

Entropy = Callable[[int], bytes]


class KeyGenerationError(RuntimeError):
    """Secure key material could not be produced. Not recoverable."""


class SigningError(RuntimeError):
    """The signer was handed something that is not a valid message representative."""


# ============================================================================
# HASHING FUNCTIONS
# ============================================================================

def sha256(data: bytes) -> bytes:
    """Single SHA-256 hash."""
    return hashlib.sha256(data).digest()


# ============================================================================
# ECDSA SECP256K1
# ============================================================================

def _checked_entropy(source: Entropy) -> Entropy:
    """
    Wrap an entropy source so that an unavailable, short, repeating or
    exhausted source aborts key generation instead of producing weak keys
    or spinning forever. One wrapper serves one key generation.
    """
    state = {'reads': 0, 'last': None}

    def read(numbytes: int) -> bytes:
        state['reads'] += 1
        if state['reads'] > config.MAX_ENTROPY_READS:
            raise KeyGenerationError(
                f"No valid key after {config.MAX_ENTROPY_READS} entropy reads"
            )
        try:
            data = source(numbytes)
        except (OSError, NotImplementedError) as e:
            raise KeyGenerationError(f"Entropy source unavailable: {e}") from e
        got = len(data) if isinstance(data, (bytes, bytearray)) else 0
        if got != numbytes:
            raise KeyGenerationError(
                f"Entropy source returned {got} bytes, expected {numbytes}"
            )
        data = bytes(data)
        if data == state['last']:
            raise KeyGenerationError("Entropy source repeated its previous output")
        state['last'] = data
        return data
    return read


def generate_signing_key(entropy: Optional[Entropy] = None) -> SigningKey:
    """
    Generate a new secp256k1 signing key.

    Args:
        entropy: Callable returning n random bytes. Defaults to the OS
            CSPRNG (secrets.token_bytes). Pass a seeded source only in tests.

    Returns:
        Fresh SigningKey

    Raises:
        KeyGenerationError: If the entropy source fails
    """
    source = _checked_entropy(entropy or secrets.token_bytes)
    return SigningKey.generate(curve=SECP256k1, entropy=source, hashfunc=hashlib.sha256)


def signing_key_from_secret(secret: bytes) -> SigningKey:
    """
    Rebuild a signing key from a raw 32-byte private scalar.

    Raises:
        ValueError: If the scalar has the wrong size or is outside [1, n)
    """
    if len(secret) != config.SECRET_KEY_BYTES:
        raise ValueError(
            f"Invalid private key length: {len(secret)} (expected {config.SECRET_KEY_BYTES})"
        )
    try:
        return SigningKey.from_string(secret, curve=SECP256k1, hashfunc=hashlib.sha256)
    except MalformedPointError as e:
        raise ValueError(f"Invalid private key: {e}") from e


def compress_public_key(verifying_key: VerifyingKey) -> bytes:
    """Compressed public key: 02/03 prefix + x coordinate (33 bytes)."""
    return verifying_key.to_string("compressed")


def load_public_key(public_key: bytes) -> VerifyingKey:
    """
    Parse a compressed or uncompressed SEC1 public key.

    Raises:
        ValueError: If the bytes do not encode a point on secp256k1
    """
    try:
        return VerifyingKey.from_string(public_key, curve=SECP256k1, hashfunc=hashlib.sha256)
    except MalformedPointError as e:
        raise ValueError(f"Invalid public key: {e}") from e


def sign_digest(signing_key: SigningKey, digest: bytes) -> bytes:
    """
    Sign a 32-byte digest with ECDSA (RFC 6979 deterministic nonce).

    Args:
        signing_key: Private key
        digest: SHA-256 digest of the message

    Returns:
        DER-encoded signature

    Raises:
        SigningError: If digest is not exactly 32 bytes
    """
    if len(digest) != config.DIGEST_BYTES:
        raise SigningError(
            f"Digest must be {config.DIGEST_BYTES} bytes, got {len(digest)}"
        )
    return signing_key.sign_digest_deterministic(
        digest,
        hashfunc=hashlib.sha256,
        sigencode=sigencode_der,
    )


def sign_message(signing_key: SigningKey, message: bytes) -> bytes:
    """
    Sign a message with ECDSA.

    Args:
        signing_key: Private key
        message: Message to sign (will be hashed with SHA-256)

    Returns:
        DER-encoded signature
    """
    return sign_digest(signing_key, sha256(message))


def verify_signature(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an ECDSA signature.

    Args:
        public_key: Public key (compressed or uncompressed)
        message: Original message (hashed with SHA-256 before checking)
        signature: DER-encoded signature

    Returns:
        True if signature is valid
    """
    try:
        vk = load_public_key(public_key)
        return vk.verify_digest(signature, sha256(message), sigdecode=sigdecode_der)
    except (BadSignatureError, UnexpectedDER, ValueError):
        return False


# ============================================================================
# ADDRESSES
# ============================================================================

def public_key_to_address(public_key: bytes) -> str:
    """
    Generate address from a compressed public key.

    The address is the lowercase hex of the 33-byte compressed key, so the
    key itself is recoverable from it.
    """
    if len(public_key) != config.ADDRESS_BYTES:
        raise ValueError(
            f"Invalid compressed public key length: {len(public_key)}"
        )
    return public_key.hex()


def address_to_public_key(address: str) -> bytes:
    """
    Recover the compressed public key bytes from an address.

    Raises:
        ValueError: If the address is not 66 hex characters
    """
    if len(address) != config.ADDRESS_LENGTH:
        raise ValueError(f"Invalid address length: {len(address)}")
    return bytes.fromhex(address)
