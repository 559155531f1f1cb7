"""
Token Envelope Encryption

AES-256-GCM wrapper for the signed token. The sealed value travels in its own
cookie and doubles as the session cache key; the server only opens it again
when it has to.

Wire format: urlsafe_b64(nonce || ciphertext || tag), fresh 12-byte nonce per seal.
"""

import base64
import binascii
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12

Key = Union[str, bytes]


class EnvelopeError(Exception):
    """Sealing or opening failed"""


class EnvelopeKeyError(EnvelopeError):
    """Key is not exactly 32 bytes"""


class CiphertextTooShortError(EnvelopeError):
    """Decoded input is shorter than a nonce"""


def _key_bytes(key: Key) -> bytes:
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) != KEY_SIZE:
        raise EnvelopeKeyError(
            f"encryption key must be exactly {KEY_SIZE} bytes, got {len(raw)}"
        )
    return raw


def validate_encryption_key(key: Key) -> None:
    """Raise EnvelopeKeyError unless the key is usable for AES-256"""
    _key_bytes(key)


def encrypt_token(token: str, key: Key) -> str:
    """Seal a token; two seals of the same token differ."""
    aead = AESGCM(_key_bytes(key))
    nonce = os.urandom(NONCE_SIZE)
    sealed = nonce + aead.encrypt(nonce, token.encode("utf-8"), None)
    return base64.urlsafe_b64encode(sealed).decode("ascii")


def decrypt_token(encrypted_token: str, key: Key) -> str:
    """
    Open a sealed token

    Raises:
        EnvelopeKeyError: key is not 32 bytes (checked first)
        CiphertextTooShortError: input shorter than the nonce
        EnvelopeError: bad encoding or failed authentication
    """
    raw_key = _key_bytes(key)

    try:
        sealed = base64.urlsafe_b64decode(encrypted_token.encode("ascii"))
    except (binascii.Error, ValueError) as exc:
        raise EnvelopeError("failed to decode encrypted token") from exc

    if len(sealed) < NONCE_SIZE:
        raise CiphertextTooShortError("ciphertext too short")

    nonce, ciphertext = sealed[:NONCE_SIZE], sealed[NONCE_SIZE:]
    try:
        plaintext = AESGCM(raw_key).decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise EnvelopeError("failed to decrypt token") from exc

    return plaintext.decode("utf-8")
