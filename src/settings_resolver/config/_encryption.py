"""Decryption of secret property values.

Encrypted values carry their algorithm as a prefix, ``{<algorithm>}<payload>``.
Two algorithms are understood by ``Encryption``:

``b64``
    Base64 obfuscation. Needs no key.
``aes-gcm``
    AES in GCM mode. The payload is base64 of the 12-byte IV followed by the
    ciphertext and tag. The key is supplied as base64 text.

A value without a recognised prefix is plain text and is returned unchanged.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import re
from typing import Protocol, runtime_checkable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ._types import SecretDecodeError

logger = logging.getLogger(__name__)

_ENCRYPTED_PATTERN = re.compile(r"\{(.*?)\}(.*)", re.DOTALL)

B64 = "b64"
AES_GCM = "aes-gcm"

_IV_LENGTH = 12
_KEY_BITS = 128


@runtime_checkable
class SecretCodec(Protocol):
    """Capability that recognises and decrypts encrypted values."""

    def is_encrypted(self, value: str) -> bool:
        ...

    def decrypt(self, value: str) -> str:
        ...


def _b64decode(payload: str) -> bytes:
    try:
        return base64.b64decode(payload.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise SecretDecodeError(reason="payload is not valid base64") from exc


class Encryption:
    """Stock ``SecretCodec`` for ``{b64}`` and ``{aes-gcm}`` values.

    >>> Encryption().decrypt("{b64}c2VjcmV0")
    'secret'
    """

    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key

    @staticmethod
    def generate_secret_key() -> str:
        """Return a new random AES key as base64 text."""
        return base64.b64encode(AESGCM.generate_key(bit_length=_KEY_BITS)).decode("ascii")

    @property
    def has_secret_key(self) -> bool:
        return self._secret_key is not None

    def is_encrypted(self, value: str) -> bool:
        match = _ENCRYPTED_PATTERN.match(value)
        return match is not None and match.group(1).lower() in (B64, AES_GCM)

    def decrypt(self, value: str) -> str:
        match = _ENCRYPTED_PATTERN.match(value)
        if match is None:
            return value

        algorithm = match.group(1).lower()
        payload = match.group(2)
        if algorithm == B64:
            raw = _b64decode(payload)
        elif algorithm == AES_GCM:
            raw = self._decrypt_aes_gcm(payload)
        else:
            return value

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SecretDecodeError(reason="decrypted value is not UTF-8 text") from exc

    def encrypt(self, value: str, algorithm: str = AES_GCM) -> str:
        """Return *value* encrypted with *algorithm*, prefix included.

        Raises ``ValueError`` for an unknown algorithm or a missing or
        malformed secret key.
        """
        data = value.encode("utf-8")
        if algorithm == B64:
            payload = data
        elif algorithm == AES_GCM:
            iv = os.urandom(_IV_LENGTH)
            payload = iv + self._cipher().encrypt(iv, data, None)
        else:
            raise ValueError(f"Unknown encryption algorithm: {algorithm!r}")
        return "{%s}%s" % (algorithm, base64.b64encode(payload).decode("ascii"))

    # -- internals ----------------------------------------------------------

    def _cipher(self) -> AESGCM:
        if self._secret_key is None:
            raise ValueError("no secret key is configured")
        try:
            key = base64.b64decode(self._secret_key.strip().encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as exc:
            raise ValueError("secret key is not valid base64") from exc
        try:
            return AESGCM(key)
        except ValueError as exc:
            raise ValueError("secret key has an invalid length") from exc

    def _decrypt_aes_gcm(self, payload: str) -> bytes:
        try:
            cipher = self._cipher()
        except ValueError as exc:
            raise SecretDecodeError(reason=str(exc)) from exc
        raw = _b64decode(payload)
        if len(raw) <= _IV_LENGTH:
            raise SecretDecodeError(reason="payload is too short")
        try:
            return cipher.decrypt(raw[:_IV_LENGTH], raw[_IV_LENGTH:], None)
        except InvalidTag as exc:
            logger.debug("AES-GCM authentication failed for an encrypted value")
            raise SecretDecodeError(reason="authentication failed") from exc
