"""
Configuration for the ECDH demonstration run.

Values come from keyword arguments, falling back to ECDH_DRIVE_* environment
variables and then to the defaults below. Everything is validated up front so
a bad curve or key length fails before any key is generated.
"""

import os
from typing import Mapping, Optional

from .errors import ECDHDriveError
from .crypto.keys import DEFAULT_CURVE, SUPPORTED_CURVES
from .crypto.kdf import AES_KEY_LENGTHS, DEFAULT_KEY_LENGTH, KDF_RAW, SUPPORTED_KDFS
from .crypto.aead import IV_LENGTH

DEFAULT_MESSAGE = "Hello, Deno 2.0!"

ENV_CURVE = "ECDH_DRIVE_CURVE"
ENV_MESSAGE = "ECDH_DRIVE_MESSAGE"
ENV_KEY_LENGTH = "ECDH_DRIVE_KEY_LENGTH"
ENV_KDF = "ECDH_DRIVE_KDF"


class ConfigError(ECDHDriveError):
    """Raised when configuration values are invalid."""
    pass


class DemoConfig:
    """
    Settings for one key agreement and encryption round-trip.
    """

    def __init__(self, curve: str = DEFAULT_CURVE, message: str = DEFAULT_MESSAGE,
                 key_length: int = DEFAULT_KEY_LENGTH, kdf: str = KDF_RAW,
                 iv_length: int = IV_LENGTH):
        """
        Initialize configuration.

        Args:
            curve: Curve name (P-256, P-384 or P-521)
            message: Text to encrypt and decrypt
            key_length: AES key length in bits
            kdf: "raw" or "hkdf-sha256"
            iv_length: IV length in bytes

        Raises:
            ConfigError: If any value is invalid
        """
        self.curve = str(curve).upper()
        self.message = message
        self.key_length = key_length
        self.kdf = kdf
        self.iv_length = iv_length
        self.validate()

    def validate(self) -> None:
        """Check every field, raising ConfigError on the first bad one."""
        if self.curve not in SUPPORTED_CURVES:
            raise ConfigError(
                f"Unsupported curve '{self.curve}' (expected one of: {', '.join(SUPPORTED_CURVES)})"
            )
        if not isinstance(self.message, str):
            raise ConfigError("Message must be a string")
        if self.key_length not in AES_KEY_LENGTHS:
            raise ConfigError(f"Key length must be one of {AES_KEY_LENGTHS}, got {self.key_length}")
        if self.kdf not in SUPPORTED_KDFS:
            raise ConfigError(f"Unknown KDF '{self.kdf}' (expected one of: {', '.join(SUPPORTED_KDFS)})")
        if self.iv_length != IV_LENGTH:
            raise ConfigError(f"IV length must be {IV_LENGTH} bytes for AES-GCM")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "DemoConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit values that win over the environment;
                None values are ignored

        Raises:
            ConfigError: If a value cannot be parsed or is invalid
        """
        if environ is None:
            environ = os.environ

        values = {}
        if ENV_CURVE in environ:
            values['curve'] = environ[ENV_CURVE]
        if ENV_MESSAGE in environ:
            values['message'] = environ[ENV_MESSAGE]
        if ENV_KDF in environ:
            values['kdf'] = environ[ENV_KDF].lower()
        if ENV_KEY_LENGTH in environ:
            try:
                values['key_length'] = int(environ[ENV_KEY_LENGTH])
            except ValueError:
                raise ConfigError(f"{ENV_KEY_LENGTH} must be an integer, got '{environ[ENV_KEY_LENGTH]}'")

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> dict:
        return {
            'curve': self.curve,
            'message': self.message,
            'key_length': self.key_length,
            'kdf': self.kdf,
            'iv_length': self.iv_length,
        }

    def __repr__(self) -> str:
        return f"DemoConfig({self.to_dict()!r})"
