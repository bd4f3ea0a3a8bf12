# SPDX-License-Identifier: Apache-2.0

"""Key generation and host name helpers."""

import base64
import secrets

# Ceph key header: type 1 (AES), followed by the creation time and the key
# length (16 bytes).
CEPH_KEY_TYPE = b"\x01\x00"
CEPH_KEY_LENGTH = b"\x10\x00"


def ceph_keygen() -> str:
    """Generate a secret suitable for a Ceph keyring.

    Returns:
        Base64 encoded key without trailing newline
    """
    key = CEPH_KEY_TYPE
    key += secrets.token_bytes(8)
    key += CEPH_KEY_LENGTH
    key += secrets.token_bytes(16)
    return base64.b64encode(key).decode("ascii")


def join_host(prefix: str, *parts: str) -> str:
    """Join host name parts with dots and prepend the prefix."""
    return prefix + ".".join(str(part) for part in parts)
