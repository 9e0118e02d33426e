"""
Tests for KEYLEDGER wallet identities.
"""

import pytest
import sys
import os
import copy
import pickle
import random

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from keyledger.wallet import Wallet, SecretKey
from keyledger.crypto import verify_signature, sha256, KeyGenerationError
from keyledger.authorizer import WalletError

FIXED_SECRET = bytes.fromhex('c0ffee' * 10 + 'c0ff')


class TestWalletCreation:
    """Test wallet creation."""

    def test_create(self):
        wallet = Wallet.create()

        assert wallet.is_miner is False
        assert len(wallet.public_key) == 33

    def test_create_miner(self):
        assert Wallet.create(is_miner=True).is_miner is True

    def test_unique_addresses(self):
        assert Wallet.create().address() != Wallet.create().address()

    def test_seeded_creation(self):
        """Test that an injected seeded source gives reproducible identities."""
        w1 = Wallet.create(entropy=random.Random(42).randbytes)
        w2 = Wallet.create(entropy=random.Random(42).randbytes)

        assert w1.address() == w2.address()

    def test_broken_entropy_is_not_recoverable_error(self):
        """Key generation failure is not part of the recoverable error family."""
        def broken(n):
            raise NotImplementedError

        with pytest.raises(KeyGenerationError) as exc_info:
            Wallet.create(entropy=broken)

        assert not isinstance(exc_info.value, WalletError)


class TestAddress:
    """Test address derivation."""

    def test_address_is_stable(self):
        wallet = Wallet.create()

        assert wallet.address() == wallet.address()

    def test_address_from_fixed_key(self):
        """Same private key gives the same address in a fresh instance."""
        assert Wallet.from_secret(FIXED_SECRET).address() == Wallet.from_secret(FIXED_SECRET).address()

    def test_address_matches_public_key(self):
        wallet = Wallet.create()

        assert wallet.address() == wallet.public_key.hex()
        assert len(wallet.address()) == 66


class TestSigning:
    """Test wallet signing."""

    def test_signature_verifies(self):
        wallet = Wallet.create()
        data = b"transfer 50"

        signature = wallet.sign(data)

        assert verify_signature(wallet.public_key, data, signature) is True

    def test_signature_rejected_by_other_identity(self):
        signer = Wallet.create()
        other = Wallet.create()
        data = b"transfer 50"

        assert verify_signature(other.public_key, data, signer.sign(data)) is False

    def test_sign_arbitrary_payloads(self):
        wallet = Wallet.create()

        for data in (b"", b"\x00", sha256(b"x"), b"a" * 1000):
            assert verify_signature(wallet.public_key, data, wallet.sign(data))

    def test_repeated_signatures_both_verify(self):
        wallet = Wallet.create()
        data = b"repeat"

        sig1 = wallet.sign(data)
        sig2 = wallet.sign(data)

        assert verify_signature(wallet.public_key, data, sig1)
        assert verify_signature(wallet.public_key, data, sig2)


class TestKeyOwnership:
    """Test that the private key stays inside the wallet."""

    def test_to_dict_has_no_private_key(self):
        wallet = Wallet.from_secret(FIXED_SECRET)
        data = wallet.to_dict()

        assert set(data) == {'address', 'public_key', 'is_miner'}
        assert FIXED_SECRET.hex() not in str(data)

    def test_repr_hides_secret(self):
        wallet = Wallet.from_secret(FIXED_SECRET)

        assert FIXED_SECRET.hex() not in repr(wallet)
        assert repr(wallet._secret) == 'SecretKey(<redacted>)'

    def test_wallet_cannot_be_pickled(self):
        with pytest.raises(TypeError):
            pickle.dumps(Wallet.create())

    def test_secret_cannot_be_copied(self):
        secret = Wallet.create()._secret

        assert isinstance(secret, SecretKey)
        with pytest.raises(TypeError):
            copy.deepcopy(secret)
        with pytest.raises(TypeError):
            copy.copy(secret)

    def test_public_key_is_read_only(self):
        wallet = Wallet.create()

        with pytest.raises(AttributeError):
            wallet.public_key = b'\x02' * 33


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
