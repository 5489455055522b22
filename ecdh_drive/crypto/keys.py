"""
Elliptic-curve key pair generation for ECDH key agreement.

Curve names use the WebCrypto spelling (P-256, P-384, P-521) and map onto the
NIST prime curves provided by the cryptography package.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Type

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..errors import ECDHDriveError

logger = logging.getLogger(__name__)

DEFAULT_CURVE = "P-256"

SUPPORTED_CURVES: Dict[str, Type[ec.EllipticCurve]] = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}

# cryptography's internal curve names, e.g. "secp256r1" -> "P-256"
_CURVE_ALIASES = {curve_cls.name: name for name, curve_cls in SUPPORTED_CURVES.items()}


class KeyGenerationError(ECDHDriveError):
    """Raised when a key pair cannot be generated."""
    pass


@dataclass(frozen=True)
class KeyPair:
    """A private/public ECDH key pair bound to a named curve."""
    private_key: ec.EllipticCurvePrivateKey
    public_key: ec.EllipticCurvePublicKey
    curve: str

    def export_public_key(self) -> bytes:
        """Return the public key as an uncompressed SEC1 point (raw format)."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )


def get_curve(name: str) -> ec.EllipticCurve:
    """
    Look up a curve by its WebCrypto name.

    Args:
        name: Curve name such as "P-256" (case-insensitive)

    Returns:
        A cryptography EllipticCurve instance

    Raises:
        KeyGenerationError: If the curve is not supported
    """
    curve_cls = SUPPORTED_CURVES.get(str(name).upper())
    if curve_cls is None:
        supported = ", ".join(SUPPORTED_CURVES)
        raise KeyGenerationError(f"Unsupported curve '{name}' (expected one of: {supported})")
    return curve_cls()


def curve_name(key) -> str:
    """Return the WebCrypto curve name of a private or public EC key."""
    return _CURVE_ALIASES.get(key.curve.name, key.curve.name)


def generate_key_pair(curve: str = DEFAULT_CURVE) -> KeyPair:
    """
    Generate an ECDH key pair on a named curve.

    Args:
        curve: Curve name, "P-256" by default

    Returns:
        KeyPair with private and public key handles

    Raises:
        KeyGenerationError: If the curve is not supported
    """
    curve_obj = get_curve(curve)
    private_key = ec.generate_private_key(curve_obj)
    name = curve_name(private_key)

    logger.debug("Generated %s key pair", name)
    return KeyPair(private_key=private_key, public_key=private_key.public_key(), curve=name)
