"""
ECDH key agreement and AES-GCM key derivation.

The default "raw" mode mirrors WebCrypto's deriveKey(ECDH -> AES-GCM): the
shared secret (x coordinate of the shared point) is truncated to the requested
key length. The "hkdf-sha256" mode runs the shared secret through HKDF first.

Either way the derivation is symmetric: (A.private, B.public) and
(B.private, A.public) yield the same key bytes.
"""

import logging
from typing import Iterable, Tuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..errors import ECDHDriveError
from .keys import curve_name
from .utils import SecureBytes, to_base64

logger = logging.getLogger(__name__)

KDF_RAW = "raw"
KDF_HKDF_SHA256 = "hkdf-sha256"
SUPPORTED_KDFS = (KDF_RAW, KDF_HKDF_SHA256)

AES_KEY_LENGTHS = (128, 192, 256)
DEFAULT_KEY_LENGTH = 256
HKDF_INFO = b"ecdh-drive-key/AES-GCM/v1"

KEY_USAGES = ("encrypt", "decrypt")


class KeyDerivationError(ECDHDriveError):
    """Raised when key derivation fails."""
    pass


class KeyExportError(ECDHDriveError):
    """Raised when a key cannot be exported."""
    pass


class SymmetricKey:
    """
    AES-GCM key produced by ECDH key agreement.

    Holds the key material together with the metadata a WebCrypto CryptoKey
    carries: algorithm, length, extractability and permitted usages.
    """

    algorithm = "AES-GCM"

    def __init__(self, key_material: bytes, extractable: bool = True,
                 usages: Iterable[str] = KEY_USAGES):
        """
        Initialize a symmetric key.

        Args:
            key_material: 16, 24 or 32 bytes of AES key material
            extractable: Whether export_raw() is permitted
            usages: Operations the key may be used for

        Raises:
            KeyDerivationError: If the key length or a usage is invalid
        """
        if len(key_material) * 8 not in AES_KEY_LENGTHS:
            raise KeyDerivationError(
                f"AES-GCM key must be 128, 192 or 256 bits, got {len(key_material) * 8}"
            )
        usages = tuple(usages)
        unknown = [u for u in usages if u not in KEY_USAGES]
        if unknown:
            raise KeyDerivationError(f"Unsupported key usage(s): {', '.join(unknown)}")

        self._material = SecureBytes(key_material)
        self.extractable = extractable
        self.usages: Tuple[str, ...] = usages

    @property
    def length(self) -> int:
        """Key length in bits."""
        return len(self._material) * 8

    @property
    def material(self) -> bytes:
        """Key bytes for the AEAD layer; ignores the extractable flag."""
        return self._material.data

    def allows(self, usage: str) -> bool:
        """Check whether the key may be used for an operation."""
        return usage in self.usages

    def export_raw(self) -> bytes:
        """
        Export the raw key bytes.

        Raises:
            KeyExportError: If the key is not extractable
        """
        if not self.extractable:
            raise KeyExportError("Key is not extractable")
        return self._material.data

    def clear(self) -> None:
        """Zero the key material."""
        self._material.clear()

    def __repr__(self) -> str:
        return (f"SymmetricKey(algorithm={self.algorithm!r}, length={self.length}, "
                f"extractable={self.extractable}, usages={self.usages!r})")


def compute_shared_secret(private_key: ec.EllipticCurvePrivateKey,
                          peer_public_key: ec.EllipticCurvePublicKey) -> bytes:
    """
    Run the ECDH exchange and return the raw shared secret.

    Raises:
        KeyDerivationError: If the keys are on different curves or the
            exchange fails
    """
    own_curve = curve_name(private_key)
    peer_curve = curve_name(peer_public_key)
    if own_curve != peer_curve:
        raise KeyDerivationError(
            f"Curve mismatch: private key is {own_curve}, peer public key is {peer_curve}"
        )

    try:
        return private_key.exchange(ec.ECDH(), peer_public_key)
    except ValueError as e:
        raise KeyDerivationError(f"ECDH exchange failed: {e}") from e


def derive_symmetric_key(private_key: ec.EllipticCurvePrivateKey,
                         peer_public_key: ec.EllipticCurvePublicKey,
                         length: int = DEFAULT_KEY_LENGTH,
                         extractable: bool = True,
                         kdf: str = KDF_RAW,
                         usages: Iterable[str] = KEY_USAGES) -> SymmetricKey:
    """
    Derive an AES-GCM key from our private key and the peer's public key.

    Args:
        private_key: Own ECDH private key
        peer_public_key: Counterpart's ECDH public key
        length: Key length in bits (128, 192 or 256)
        extractable: Whether the resulting key may be exported
        kdf: "raw" (WebCrypto-compatible truncation) or "hkdf-sha256"
        usages: Operations the resulting key may be used for

    Returns:
        SymmetricKey ready for encrypt_message / decrypt_message

    Raises:
        KeyDerivationError: On curve mismatch, invalid length or unknown KDF
    """
    if length not in AES_KEY_LENGTHS:
        raise KeyDerivationError(f"Key length must be one of {AES_KEY_LENGTHS}, got {length}")
    if kdf not in SUPPORTED_KDFS:
        raise KeyDerivationError(f"Unknown KDF '{kdf}' (expected one of: {', '.join(SUPPORTED_KDFS)})")

    key_bytes = length // 8
    with SecureBytes(compute_shared_secret(private_key, peer_public_key)) as shared:
        if kdf == KDF_HKDF_SHA256:
            hkdf = HKDF(
                algorithm=hashes.SHA256(),
                length=key_bytes,
                salt=None,
                info=HKDF_INFO,
            )
            material = hkdf.derive(shared.data)
        else:
            if len(shared) < key_bytes:
                raise KeyDerivationError(
                    f"Shared secret is {len(shared) * 8} bits, cannot derive a {length}-bit key"
                )
            material = shared.data[:key_bytes]

    logger.debug("Derived %d-bit AES-GCM key on %s using %s",
                 length, curve_name(private_key), kdf)
    return SymmetricKey(material, extractable=extractable, usages=usages)


def export_raw_key(key: SymmetricKey) -> bytes:
    """Export a symmetric key's raw bytes."""
    return key.export_raw()


def get_base64_key(key: SymmetricKey) -> str:
    """Export a symmetric key and encode it as base64 for display."""
    return to_base64(export_raw_key(key))
