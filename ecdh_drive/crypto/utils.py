"""
Byte and randomness helpers shared by the key agreement and AEAD modules.

Random values come from the secrets module. Key material handed to
SymmetricKey is kept in a SecureBytes wrapper so it can be zeroed when the
key is cleared.
"""

import base64
import secrets
from typing import Union


def secure_zero(data: Union[bytes, bytearray, memoryview]) -> None:
    """
    Overwrite mutable byte buffers with zeros.

    Immutable bytes cannot be cleared in Python; they are accepted and left
    untouched so callers can pass either type.

    Args:
        data: Bytes, bytearray, or memoryview to zero out
    """
    if isinstance(data, (bytearray, memoryview)):
        for i in range(len(data)):
            data[i] = 0
    elif isinstance(data, bytes):
        pass
    else:
        raise TypeError("Data must be bytes, bytearray, or memoryview")


def generate_random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of random bytes to generate

    Returns:
        Cryptographically secure random bytes
    """
    if length < 0:
        raise ValueError("Length must be non-negative")
    return secrets.token_bytes(length)


def to_base64(data: bytes) -> str:
    """Encode bytes as standard (padded) base64 text."""
    return base64.b64encode(data).decode("ascii")


class SecureBytes:
    """
    A wrapper for sensitive byte data that attempts secure cleanup.

    Used as a context manager, the data is zeroed on exit.
    """

    def __init__(self, data: bytes):
        self._data = bytearray(data)

    @property
    def data(self) -> bytes:
        """Get the protected data as bytes."""
        return bytes(self._data)

    @property
    def cleared(self) -> bool:
        """True once clear() has zeroed the buffer."""
        return not any(self._data)

    def clear(self) -> None:
        """Securely clear the protected data."""
        secure_zero(self._data)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()

    def __del__(self):
        if hasattr(self, '_data'):
            self.clear()

    def __len__(self) -> int:
        return len(self._data)
