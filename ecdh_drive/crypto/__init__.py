"""
Cryptographic building blocks for ecdh-drive-key.

This module provides:
- ECDH key pair generation on the NIST P curves
- Shared AES-GCM key derivation (raw or HKDF)
- AES-GCM authenticated encryption and decryption
"""

from .keys import KeyPair, KeyGenerationError, generate_key_pair, DEFAULT_CURVE, SUPPORTED_CURVES
from .kdf import (
    SymmetricKey,
    KeyDerivationError,
    KeyExportError,
    derive_symmetric_key,
    export_raw_key,
    get_base64_key,
)
from .aead import (
    EncryptionError,
    AEADDecryptionError,
    encrypt_message,
    decrypt_message,
    generate_iv,
)

__all__ = [
    'KeyPair',
    'KeyGenerationError',
    'generate_key_pair',
    'DEFAULT_CURVE',
    'SUPPORTED_CURVES',
    'SymmetricKey',
    'KeyDerivationError',
    'KeyExportError',
    'derive_symmetric_key',
    'export_raw_key',
    'get_base64_key',
    'EncryptionError',
    'AEADDecryptionError',
    'encrypt_message',
    'decrypt_message',
    'generate_iv',
]
