# SPDX-License-Identifier: Apache-2.0

"""Encryption of configuration values."""

import json
from pathlib import Path
from typing import Any, Optional

from cryptography.fernet import Fernet, InvalidToken
from loguru import logger

from bcpc.exceptions import ConfigStoreError


def generate_secret() -> str:
    """Generate a new secret for encrypted configuration values."""
    return Fernet.generate_key().decode("ascii")


def load_secret(secret: Optional[str] = None, secret_file: Optional[Path] = None) -> str:
    """Resolve the secret for encrypted values.

    Args:
        secret: Secret given inline, takes precedence
        secret_file: File containing the secret

    Returns:
        The secret

    Raises:
        ConfigStoreError: If no secret is available
    """
    if secret:
        return secret.strip()

    if secret_file is not None:
        try:
            return secret_file.read_text(encoding="utf-8").strip()
        except (EnvironmentError, FileNotFoundError) as e:
            raise ConfigStoreError(
                f"Failed to read data bag secret from {secret_file}: {e}"
            ) from e

    raise ConfigStoreError("No data bag secret configured")


class SecretCipher:
    """Encrypts and decrypts configuration values with a shared secret.

    Values are serialized as JSON before encryption so that numbers, lists
    and dictionaries survive a round trip.
    """

    def __init__(self, secret: str):
        try:
            self._fernet = Fernet(secret)
        except (ValueError, TypeError) as e:
            raise ConfigStoreError(f"Invalid data bag secret: {e}") from e

    def encrypt(self, value: Any) -> str:
        payload = json.dumps(value).encode("utf-8")
        return self._fernet.encrypt(payload).decode("ascii")

    def decrypt(self, token: str) -> Any:
        try:
            payload = self._fernet.decrypt(token.encode("ascii"))
        except (InvalidToken, AttributeError, UnicodeEncodeError) as e:
            logger.error("Failed to decrypt configuration value")
            raise ConfigStoreError("Failed to decrypt configuration value") from e
        return json.loads(payload.decode("utf-8"))
