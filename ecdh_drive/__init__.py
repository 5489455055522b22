"""
ECDH key agreement with AES-GCM encryption.

Two parties generate elliptic-curve key pairs, each derives the same AES-GCM
key from its own private key and the other's public key, and a message
encrypted by one is decrypted by the other.

Basic Usage:
    >>> from ecdh_drive import generate_key_pair, derive_symmetric_key
    >>> from ecdh_drive import encrypt_message, decrypt_message, generate_iv
    >>>
    >>> alice = generate_key_pair("P-256")
    >>> bob = generate_key_pair("P-256")
    >>> alice_key = derive_symmetric_key(alice.private_key, bob.public_key)
    >>> bob_key = derive_symmetric_key(bob.private_key, alice.public_key)
    >>>
    >>> iv = generate_iv()
    >>> ciphertext = encrypt_message(alice_key, iv, "Hello, Bob!")
    >>> decrypt_message(bob_key, iv, ciphertext)
    'Hello, Bob!'
"""

__version__ = "0.1.0"

from .errors import ECDHDriveError
from .config import DemoConfig, ConfigError
from .crypto.keys import KeyPair, KeyGenerationError, generate_key_pair
from .crypto.kdf import (
    SymmetricKey,
    KeyDerivationError,
    KeyExportError,
    derive_symmetric_key,
    export_raw_key,
    get_base64_key,
)
from .crypto.aead import (
    EncryptionError,
    AEADDecryptionError,
    encrypt_message,
    decrypt_message,
    generate_iv,
)
from .demo import DemoResult, run_demo

__all__ = [
    '__version__',

    # Errors
    'ECDHDriveError',
    'ConfigError',
    'KeyGenerationError',
    'KeyDerivationError',
    'KeyExportError',
    'EncryptionError',
    'AEADDecryptionError',

    # Key agreement
    'KeyPair',
    'generate_key_pair',
    'SymmetricKey',
    'derive_symmetric_key',
    'export_raw_key',
    'get_base64_key',

    # Encryption
    'encrypt_message',
    'decrypt_message',
    'generate_iv',

    # Demonstration
    'DemoConfig',
    'DemoResult',
    'run_demo',
]
