"""Symmetric encryption for the token fields of the credential file."""

from __future__ import annotations

import base64
import hashlib
from typing import Any, Dict

from cryptography.fernet import Fernet, InvalidToken

_SEALED_FIELDS = ("access_token", "refresh_token")


class TokenCipherService:
    """Encrypt and decrypt token strings using a Fernet key derived from a secret."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest)
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        token = self._fernet.encrypt(plaintext.encode("utf-8"))
        return token.decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt token; invalid ciphertext or wrong secret."
            ) from exc
        return plaintext.decode("utf-8")

    def seal(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Replace token fields with ``<field>_encrypted`` counterparts."""
        sealed = dict(document)
        for field in _SEALED_FIELDS:
            value = sealed.pop(field, None)
            if value:
                sealed[f"{field}_encrypted"] = self.encrypt(value)
        return sealed

    def unseal(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Inverse of :meth:`seal`; plaintext fields already present are kept."""
        unsealed = dict(document)
        for field in _SEALED_FIELDS:
            encrypted = unsealed.pop(f"{field}_encrypted", None)
            if encrypted and not unsealed.get(field):
                unsealed[field] = self.decrypt(encrypted)
        return unsealed


__all__ = ["TokenCipherService"]
