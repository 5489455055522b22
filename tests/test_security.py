"""
Security Tests for AES-GCM with ECDH-derived keys.

Tests authentication failures on wrong IVs, mismatched keys, tampering, and
key usage restrictions.
"""

import pytest
from cryptography.exceptions import InvalidTag

from ecdh_drive.crypto.keys import generate_key_pair
from ecdh_drive.crypto.kdf import derive_symmetric_key
from ecdh_drive.crypto.aead import (
    AEADDecryptionError,
    EncryptionError,
    decrypt_message,
    encrypt_message,
    generate_iv,
)


@pytest.fixture
def key_pair():
    """Alice's and Bob's derived keys."""
    alice = generate_key_pair()
    bob = generate_key_pair()
    return (derive_symmetric_key(alice.private_key, bob.public_key),
            derive_symmetric_key(bob.private_key, alice.public_key))


class TestAuthentication:
    """Test that mismatched inputs never decrypt silently."""

    def test_wrong_iv(self, key_pair):
        """Test decrypting with a different IV fails authentication."""
        alice_key, bob_key = key_pair
        iv = generate_iv()
        ciphertext = encrypt_message(alice_key, iv, "Hello, Deno 2.0!")

        other_iv = generate_iv()
        assert other_iv != iv
        with pytest.raises(AEADDecryptionError):
            decrypt_message(bob_key, other_iv, ciphertext)

    def test_mismatched_key(self, key_pair):
        """Test a key from an unrelated exchange fails authentication."""
        alice_key, _ = key_pair
        mallory = generate_key_pair()
        eve = generate_key_pair()
        wrong_key = derive_symmetric_key(mallory.private_key, eve.public_key)

        iv = generate_iv()
        ciphertext = encrypt_message(alice_key, iv, "Hello, Deno 2.0!")
        with pytest.raises(AEADDecryptionError):
            decrypt_message(wrong_key, iv, ciphertext)

    def test_error_chains_invalid_tag(self, key_pair):
        """Test the underlying InvalidTag is preserved as the cause."""
        alice_key, bob_key = key_pair
        ciphertext = encrypt_message(alice_key, generate_iv(), "msg")

        with pytest.raises(AEADDecryptionError) as exc_info:
            decrypt_message(bob_key, generate_iv(), ciphertext)
        assert isinstance(exc_info.value.__cause__, InvalidTag)

    @pytest.mark.parametrize("position", [0, 5, -1])
    def test_tampered_ciphertext(self, key_pair, position):
        """Test flipping any bit of ciphertext or tag is detected."""
        alice_key, bob_key = key_pair
        iv = generate_iv()
        ciphertext = bytearray(encrypt_message(alice_key, iv, "Hello, Deno 2.0!"))
        ciphertext[position] ^= 0x01

        with pytest.raises(AEADDecryptionError):
            decrypt_message(bob_key, iv, bytes(ciphertext))

    def test_truncated_ciphertext(self, key_pair):
        """Test ciphertext shorter than the tag is rejected."""
        _, bob_key = key_pair
        with pytest.raises(AEADDecryptionError):
            decrypt_message(bob_key, generate_iv(), b"\x00" * 10)

    def test_wrong_associated_data(self, key_pair):
        """Test associated data is authenticated."""
        alice_key, bob_key = key_pair
        iv = generate_iv()
        ciphertext = encrypt_message(alice_key, iv, "msg", associated_data=b"v1")

        with pytest.raises(AEADDecryptionError):
            decrypt_message(bob_key, iv, ciphertext, associated_data=b"v2")


class TestMalformedInputs:
    """Test key and IV validation."""

    def test_short_iv(self, key_pair):
        alice_key, _ = key_pair
        with pytest.raises(EncryptionError):
            encrypt_message(alice_key, b"\x00" * 8, "msg")

    def test_non_bytes_iv(self, key_pair):
        alice_key, _ = key_pair
        with pytest.raises(EncryptionError):
            encrypt_message(alice_key, "123456789012", "msg")

    @pytest.mark.parametrize("plaintext", [5, None, [1, 2, 3], memoryview(b"abc")])
    def test_non_text_plaintext(self, key_pair, plaintext):
        """Test plaintexts other than str or bytes are rejected."""
        alice_key, _ = key_pair
        with pytest.raises(EncryptionError, match="Plaintext must be str or bytes"):
            encrypt_message(alice_key, generate_iv(), plaintext)

    def test_bytearray_plaintext(self, key_pair):
        alice_key, bob_key = key_pair
        iv = generate_iv()
        ciphertext = encrypt_message(alice_key, iv, bytearray(b"buffer"))
        assert decrypt_message(bob_key, iv, ciphertext, decode=False) == b"buffer"

    def test_raw_bytes_as_key(self):
        """Test that plain bytes are not accepted as a key."""
        with pytest.raises(EncryptionError):
            encrypt_message(b"\x00" * 32, generate_iv(), "msg")

    def test_usage_restriction(self):
        """Test encrypt-only keys cannot decrypt and vice versa."""
        alice = generate_key_pair()
        bob = generate_key_pair()
        encrypt_only = derive_symmetric_key(alice.private_key, bob.public_key, usages=("encrypt",))
        decrypt_only = derive_symmetric_key(bob.private_key, alice.public_key, usages=("decrypt",))

        iv = generate_iv()
        ciphertext = encrypt_message(encrypt_only, iv, "msg")
        assert decrypt_message(decrypt_only, iv, ciphertext) == "msg"

        with pytest.raises(EncryptionError):
            decrypt_message(encrypt_only, iv, ciphertext)
        with pytest.raises(EncryptionError):
            encrypt_message(decrypt_only, iv, "msg")

    def test_non_extractable_key_still_encrypts(self):
        """Test extractability only restricts export."""
        alice = generate_key_pair()
        bob = generate_key_pair()
        alice_key = derive_symmetric_key(alice.private_key, bob.public_key, extractable=False)
        bob_key = derive_symmetric_key(bob.private_key, alice.public_key, extractable=False)

        iv = generate_iv()
        assert decrypt_message(bob_key, iv, encrypt_message(alice_key, iv, "msg")) == "msg"


class TestUniqueness:
    """Test per-message uniqueness properties."""

    def test_same_message_different_ivs(self, key_pair):
        """Test fresh IVs give distinct ciphertexts for the same message."""
        alice_key, _ = key_pair
        ciphertexts = {encrypt_message(alice_key, generate_iv(), "same") for _ in range(50)}
        assert len(ciphertexts) == 50

    def test_iv_uniqueness(self):
        """Test that random IVs do not repeat within a sample."""
        ivs = {generate_iv() for _ in range(500)}
        assert len(ivs) == 500
