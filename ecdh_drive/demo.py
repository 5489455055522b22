"""
ECDH key agreement demonstration.

Alice and Bob each generate a key pair, derive the shared AES-GCM key from
their own private key and the other's public key, then Alice encrypts a
message that Bob decrypts. Every step runs in order and any failure
propagates to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import DemoConfig
from .crypto.keys import generate_key_pair
from .crypto.kdf import derive_symmetric_key, get_base64_key
from .crypto.aead import encrypt_message, decrypt_message, generate_iv

logger = logging.getLogger(__name__)


@dataclass
class DemoResult:
    """Everything produced by one demonstration run."""
    curve: str
    alice_key: str
    bob_key: str
    iv: bytes
    ciphertext: bytes
    message: str
    decrypted_text: str

    @property
    def keys_match(self) -> bool:
        return self.alice_key == self.bob_key

    @property
    def verified(self) -> bool:
        return self.decrypted_text == self.message


def run_demo(config: Optional[DemoConfig] = None, verbose: bool = True) -> DemoResult:
    """
    Run the full key agreement and encryption round-trip.

    Args:
        config: Demonstration settings; defaults to DemoConfig()
        verbose: Print the keys, ciphertext and verification result

    Returns:
        DemoResult with exported keys, IV, ciphertext and decrypted text
    """
    if config is None:
        config = DemoConfig()

    logger.info("Running ECDH demo on %s with %d-bit %s key derivation",
                config.curve, config.key_length, config.kdf)

    alice = generate_key_pair(config.curve)
    bob = generate_key_pair(config.curve)

    keys = []
    try:
        alice_key = derive_symmetric_key(alice.private_key, bob.public_key,
                                         length=config.key_length, kdf=config.kdf)
        keys.append(alice_key)
        alice_b64 = get_base64_key(alice_key)
        if verbose:
            print("Alice's symmetric key:", alice_b64)

        bob_key = derive_symmetric_key(bob.private_key, alice.public_key,
                                       length=config.key_length, kdf=config.kdf)
        keys.append(bob_key)
        bob_b64 = get_base64_key(bob_key)
        if verbose:
            print("Bob's symmetric key:", bob_b64)

        # Unique per message under a given key; it does not need to be secret.
        iv = generate_iv(config.iv_length)

        ciphertext = encrypt_message(alice_key, iv, config.message)
        if verbose:
            print("Encrypted Data:", list(ciphertext))

        decrypted_text = decrypt_message(bob_key, iv, ciphertext)
    finally:
        for key in keys:
            key.clear()

    result = DemoResult(
        curve=config.curve,
        alice_key=alice_b64,
        bob_key=bob_b64,
        iv=iv,
        ciphertext=ciphertext,
        message=config.message,
        decrypted_text=decrypted_text,
    )
    if verbose:
        print("Verification of Decrypted Text:", result.verified)

    return result
