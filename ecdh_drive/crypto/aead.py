"""
AES-GCM authenticated encryption with ECDH-derived keys.

Ciphertexts are the AES-GCM output with the 16-byte authentication tag
appended, the same layout WebCrypto returns.
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import ECDHDriveError
from .kdf import SymmetricKey
from .utils import generate_random_bytes

logger = logging.getLogger(__name__)

IV_LENGTH = 12
TAG_LENGTH = 16


class EncryptionError(ECDHDriveError):
    """Raised when a key or IV is unusable for encryption or decryption."""
    pass


class AEADDecryptionError(ECDHDriveError):
    """Raised when AES-GCM authentication fails."""
    pass


def generate_iv(length: int = IV_LENGTH) -> bytes:
    """Generate a random IV. Never reuse one under the same key."""
    return generate_random_bytes(length)


def _check_key(key: SymmetricKey, usage: str) -> None:
    if not isinstance(key, SymmetricKey):
        raise EncryptionError(f"Expected a SymmetricKey, got {type(key).__name__}")
    if not key.allows(usage):
        raise EncryptionError(f"Key usages {key.usages} do not permit '{usage}'")


def _check_iv(iv: bytes) -> None:
    if not isinstance(iv, (bytes, bytearray)):
        raise EncryptionError("IV must be bytes")
    if len(iv) != IV_LENGTH:
        raise EncryptionError(f"AES-GCM requires a {IV_LENGTH}-byte IV, got {len(iv)}")


def encrypt_message(key: SymmetricKey, iv: bytes, data: Union[str, bytes],
                    associated_data: Optional[bytes] = None) -> bytes:
    """
    Encrypt a message with AES-GCM.

    Args:
        key: Derived symmetric key with the "encrypt" usage
        iv: 12-byte initialization vector
        data: Text (encoded as UTF-8) or bytes to encrypt
        associated_data: Additional authenticated data (optional)

    Returns:
        Ciphertext with the authentication tag appended

    Raises:
        EncryptionError: If the key or IV is malformed
    """
    _check_key(key, "encrypt")
    _check_iv(iv)

    if isinstance(data, str):
        plaintext = data.encode("utf-8")
    elif isinstance(data, (bytes, bytearray)):
        plaintext = bytes(data)
    else:
        raise EncryptionError(f"Plaintext must be str or bytes, got {type(data).__name__}")
    ciphertext = AESGCM(key.material).encrypt(bytes(iv), plaintext, associated_data)

    logger.debug("Encrypted %d bytes into %d bytes", len(plaintext), len(ciphertext))
    return ciphertext


def decrypt_message(key: SymmetricKey, iv: bytes, data: bytes,
                    associated_data: Optional[bytes] = None,
                    decode: bool = True) -> Union[str, bytes]:
    """
    Decrypt and authenticate an AES-GCM ciphertext.

    Args:
        key: Derived symmetric key with the "decrypt" usage
        iv: IV that was used for encryption
        data: Ciphertext with authentication tag appended
        associated_data: Additional authenticated data used during encryption
        decode: Return UTF-8 text when True, raw bytes otherwise

    Returns:
        Decrypted plaintext

    Raises:
        EncryptionError: If the key or IV is malformed
        AEADDecryptionError: If the key, IV, associated data or ciphertext
            does not match
    """
    _check_key(key, "decrypt")
    _check_iv(iv)

    if len(data) < TAG_LENGTH:
        raise AEADDecryptionError("Ciphertext too short to contain authentication tag")

    try:
        plaintext = AESGCM(key.material).decrypt(bytes(iv), bytes(data), associated_data)
    except InvalidTag as e:
        raise AEADDecryptionError(
            "Authentication verification failed - wrong key, IV, or tampered data"
        ) from e

    logger.debug("Decrypted %d bytes", len(plaintext))
    return plaintext.decode("utf-8") if decode else plaintext
