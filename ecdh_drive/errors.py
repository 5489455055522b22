"""
Exception base class for ecdh-drive-key.

Each module defines its own errors (KeyGenerationError, KeyDerivationError,
AEADDecryptionError, ConfigError, ...); they all derive from ECDHDriveError so
callers can catch the whole family at once.
"""


class ECDHDriveError(Exception):
    """Base class for all errors raised by this package."""
    pass
